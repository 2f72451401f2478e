"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based orchestration core for the Swag Labs suites.

Components:
    - config_loader: Immutable configuration provider
    - browser_manager: Browser session lifecycle management
    - smart_locator: Element location with fallback strategies
    - page_base: Base page object for common operations
    - dialog_handler: JavaScript dialog and popup handling
    - soft_assert: Assertion batch (soft assertions)
    - failure_capture: Screenshot / URL capture for failed tests
    - errors: Error taxonomy and failure classification

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    AssertionFailure,
    ConfigurationError,
    ElementTimeoutError,
    NavigationTimeoutError,
    SessionStartError,
    SoftAssertionError,
    TeardownWarning,
    classify_failure,
)
from .config_loader import ConfigLoader
from .browser_manager import BrowserManager, BrowserSession, BrowserSettings, SessionState
from .smart_locator import SmartLocator
from .page_base import BasePage
from .dialog_handler import DialogHandler
from .soft_assert import AssertionBatch
from .failure_capture import FailureCapture

__all__ = [
    "AssertionBatch",
    "AssertionFailure",
    "BasePage",
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "ConfigLoader",
    "ConfigurationError",
    "DialogHandler",
    "ElementTimeoutError",
    "FailureCapture",
    "NavigationTimeoutError",
    "SessionStartError",
    "SessionState",
    "SmartLocator",
    "SoftAssertionError",
    "TeardownWarning",
    "classify_failure",
]
