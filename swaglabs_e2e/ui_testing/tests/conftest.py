"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for configuration, browser session lifecycle and page objects.

Key Features:
- Configuration loaded and validated once; invalid config stops the run
- A fresh browser session per test, torn down whatever the outcome
- Screenshot + URL capture on failure, before the session closes
- Failure classification (assertion / infrastructure) on every report

================================================================================
"""

import asyncio
from typing import AsyncGenerator, Generator, Tuple

import allure
import pytest
from loguru import logger

from swaglabs_e2e.ui_testing.framework.browser_manager import (
    BrowserManager,
    BrowserSession,
    BrowserSettings,
)
from swaglabs_e2e.ui_testing.framework.config_loader import ConfigLoader
from swaglabs_e2e.ui_testing.framework.errors import ConfigurationError, classify_failure
from swaglabs_e2e.ui_testing.framework.failure_capture import FailureCapture
from swaglabs_e2e.ui_testing.pages.login_page import LoginPage
from swaglabs_e2e.ui_testing.pages.products_page import ProductsPage
from swaglabs_tools.common import init_logger
from swaglabs_tools.report_tools.allure_utils import write_environment_properties


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def app_config(request) -> ConfigLoader:
    """
    Session-scoped, validated configuration.

    A missing or invalid mandatory setting ends the run before any test.
    """
    try:
        config = ConfigLoader().validate()
    except ConfigurationError as e:
        pytest.exit(f"Invalid configuration: {e}", returncode=pytest.ExitCode.USAGE_ERROR)

    init_logger(
        level=config.get_str("logging.level"),
        log_file=config.get_str("logging.file"),
    )

    alluredir = request.config.getoption("allure_report_dir", default=None)
    if alluredir:
        write_environment_properties(alluredir, {
            "app.url": config.get_str("app.url"),
            "browser.name": config.get_str("browser.name"),
            "browser.headless": config.get_str("browser.headless"),
        })
    return config


@pytest.fixture(scope="session")
def browser_settings(app_config: ConfigLoader) -> BrowserSettings:
    try:
        return BrowserSettings.from_config(app_config)
    except ConfigurationError as e:
        pytest.exit(f"Invalid browser configuration: {e}", returncode=pytest.ExitCode.USAGE_ERROR)


@pytest.fixture(scope="session")
def failure_capture(app_config: ConfigLoader) -> FailureCapture:
    return FailureCapture.from_config(app_config)


@pytest.fixture(scope="session")
def standard_user(app_config: ConfigLoader) -> Tuple[str, str]:
    """(username, password) of the standard user."""
    return (
        app_config.require("users.standard.username"),
        app_config.require("users.standard.password"),
    )


@pytest.fixture(scope="session")
def checkout_info(app_config: ConfigLoader) -> Tuple[str, str, str]:
    """(first name, last name, postal code) from configuration."""
    return (
        app_config.get_str("checkout.first_name", "Emmanuel"),
        app_config.get_str("checkout.last_name", "Arhu"),
        app_config.get_str("checkout.postal_code", "233"),
    )


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def worker_browser_manager(browser_settings: BrowserSettings) -> Generator[BrowserManager, None, None]:
    """
    The one BrowserManager of this worker process.

    Shared by every test so that a session left behind by an interrupted
    teardown is force-closed by the next start().
    """
    manager = BrowserManager(browser_settings)
    yield manager
    if manager.session is not None:
        asyncio.run(manager.stop())


@pytest.fixture
async def browser_manager(
    request,
    worker_browser_manager: BrowserManager,
    failure_capture: FailureCapture,
) -> AsyncGenerator[BrowserManager, None]:
    """
    Per-test session lifecycle on the worker's manager.

    Starts a fresh browser on the application URL before the test; after it,
    captures failure artifacts while the session is still READY and then
    tears the session down.
    """
    logger.info(f"Setting up browser session for: {request.node.name}")
    manager = worker_browser_manager
    await manager.start()
    try:
        yield manager
    finally:
        report = getattr(request.node, "rep_call", None)
        failed = report is not None and report.failed
        await failure_capture.capture_on_failure(manager, request.node.name, failed)
        await manager.stop()


@pytest.fixture
def session(browser_manager: BrowserManager) -> BrowserSession:
    return browser_manager.session


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(session: BrowserSession) -> LoginPage:
    """LoginPage on a fresh session (the app opens on the login screen)."""
    return LoginPage(session)


@pytest.fixture
async def products_page(login_page: LoginPage, standard_user) -> ProductsPage:
    """ProductsPage after logging in as the standard user."""
    username, password = standard_user
    return await login_page.login(username, password)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item (``item.rep_call``) so fixtures can
    see the outcome, and record the failure category.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)

    if report.failed and call.excinfo is not None:
        category = classify_failure(call.excinfo.value)
        report.user_properties.append(("failure_category", category))
        allure.dynamic.label("failure_category", category)
        logger.error(f"{item.name} failed during {report.when} ({category})")
