"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle management for UI automation.

Every test gets its own BrowserSession:

    NO_SESSION -> STARTING -> READY -> CLOSING -> NO_SESSION

Features:
    - One isolated browser profile directory per session
    - Free remote-debugging port per Chromium session (parallel workers)
    - Stale session force-close before a new start
    - Cookie / storage cleanup on teardown, errors logged and swallowed

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import shutil
import socket
import tempfile
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from loguru import logger
from playwright.async_api import BrowserContext, Page, Playwright, async_playwright

from .config_loader import ConfigLoader
from .dialog_handler import DialogHandler
from .errors import (
    ConfigurationError,
    SessionStartError,
    TeardownWarning,
    report_teardown_problem,
)


# browser name -> (playwright engine, channel)
BROWSER_ENGINES: Dict[str, Tuple[str, Optional[str]]] = {
    "chromium": ("chromium", None),
    "chrome": ("chromium", None),
    "edge": ("chromium", "msedge"),
    "firefox": ("firefox", None),
    "webkit": ("webkit", None),
}

# Chromium flags for containerised runs
CHROMIUM_ARGS: Tuple[str, ...] = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
    "--disable-features=TranslateUI",
)

CLEAR_STORAGE_SCRIPT = """
() => {
    try { window.localStorage.clear(); } catch (e) {}
    try { window.sessionStorage.clear(); } catch (e) {}
}
"""


class SessionState(str, Enum):
    """Lifecycle states of a worker's browser session."""
    NO_SESSION = "no_session"
    STARTING = "starting"
    READY = "ready"
    CLOSING = "closing"


@dataclass(frozen=True)
class BrowserSettings:
    """
    Immutable browser launch settings resolved from configuration.

    Attributes:
        browser: Browser name (chromium, chrome, edge, firefox, webkit)
        headless: Run without a visible window
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        timeout_ms: Default wait/navigation timeout in milliseconds
        base_url: Application entry URL
        slow_mo: Delay between driver operations in milliseconds
    """
    browser: str = "chromium"
    headless: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    timeout_ms: int = 10000
    base_url: str = "https://www.saucedemo.com"
    slow_mo: int = 0

    def __post_init__(self):
        if self.browser not in BROWSER_ENGINES:
            raise ConfigurationError(
                f"Unsupported browser '{self.browser}'. "
                f"Choose one of: {', '.join(sorted(BROWSER_ENGINES))}"
            )

    @property
    def engine(self) -> str:
        return BROWSER_ENGINES[self.browser][0]

    @property
    def channel(self) -> Optional[str]:
        return BROWSER_ENGINES[self.browser][1]

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "BrowserSettings":
        """Build settings from the configuration provider."""
        width, height = parse_window_size(config.get_str("browser.size"))
        timeout = config.get_duration("app.timeout")
        return cls(
            browser=config.get_str("browser.name").strip().lower(),
            headless=config.get_bool("browser.headless"),
            viewport_width=width,
            viewport_height=height,
            timeout_ms=int(timeout.total_seconds() * 1000),
            base_url=config.require("app.url").rstrip("/"),
            slow_mo=config.get_int("browser.slow_mo"),
        )


def parse_window_size(size: str) -> Tuple[int, int]:
    """Parse "1920x1080" into (1920, 1080)."""
    try:
        width, height = (int(part) for part in size.lower().split("x"))
    except (AttributeError, ValueError) as e:
        raise ConfigurationError(
            f"browser.size must look like 1920x1080, got {size!r}"
        ) from e
    return width, height


def find_free_port() -> int:
    """Ask the OS for a currently free TCP port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def current_worker_id() -> str:
    """pytest-xdist worker id (gw0, gw1, ...) or "master"."""
    return os.environ.get("PYTEST_XDIST_WORKER", "master")


class BrowserSession:
    """
    One live browser bound to a single executing test.

    Owns the persistent browser context, its first page, the temporary
    profile directory and (for Chromium) the remote-debugging port.
    """

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        settings: BrowserSettings,
        profile_dir: Path,
        debug_port: Optional[int] = None,
        playwright: Optional[Playwright] = None,
    ):
        self.context = context
        self.page = page
        self.settings = settings
        self.profile_dir = Path(profile_dir)
        self.debug_port = debug_port
        self.dialogs: Optional[DialogHandler] = None
        self.started_at = datetime.now()
        self._playwright = playwright
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def url(self) -> str:
        return self.page.url

    async def clear_state(self) -> None:
        """Clear cookies, local storage and session storage."""
        await self.context.clear_cookies()
        await self.page.evaluate(CLEAR_STORAGE_SCRIPT)

    async def screenshot(self, path: Optional[Path] = None, full_page: bool = True) -> bytes:
        kwargs: Dict[str, Any] = {"full_page": full_page}
        if path is not None:
            kwargs["path"] = str(path)
        return await self.page.screenshot(**kwargs)

    async def close(self) -> None:
        """Close the context and stop the driver."""
        if self._closed:
            return
        self._closed = True
        try:
            await self.context.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()

    def __repr__(self) -> str:
        return (
            f"BrowserSession(browser={self.settings.browser!r}, "
            f"headless={self.settings.headless}, profile_dir='{self.profile_dir}', "
            f"debug_port={self.debug_port})"
        )


Launcher = Callable[[BrowserSettings, Path, Optional[int]], Awaitable[BrowserSession]]


async def launch_playwright_session(
    settings: BrowserSettings,
    profile_dir: Path,
    debug_port: Optional[int] = None,
) -> BrowserSession:
    """
    Default launcher: start Playwright and open a persistent context.

    A persistent context keeps its profile in ``profile_dir``, so parallel
    workers never share cookies or storage.
    """
    playwright = await async_playwright().start()
    try:
        browser_type = getattr(playwright, settings.engine)

        options: Dict[str, Any] = {
            "user_data_dir": str(profile_dir),
            "headless": settings.headless,
            "viewport": settings.viewport,
            "ignore_https_errors": True,
            "slow_mo": settings.slow_mo,
        }
        if settings.channel:
            options["channel"] = settings.channel
        if settings.engine == "chromium":
            args = list(CHROMIUM_ARGS)
            if debug_port:
                args.append(f"--remote-debugging-port={debug_port}")
            options["args"] = args

        context = await browser_type.launch_persistent_context(**options)
        context.set_default_timeout(settings.timeout_ms)
        context.set_default_navigation_timeout(settings.timeout_ms)
        page = context.pages[0] if context.pages else await context.new_page()
    except Exception:
        await playwright.stop()
        raise

    logger.debug(
        f"Browser started: {settings.browser} "
        f"(headless={settings.headless}, profile={profile_dir}, port={debug_port})"
    )
    return BrowserSession(
        context=context,
        page=page,
        settings=settings,
        profile_dir=profile_dir,
        debug_port=debug_port,
        playwright=playwright,
    )


class BrowserManager:
    """
    Session lifecycle manager for one test-execution worker.

    Usage:
        manager = BrowserManager(BrowserSettings.from_config(config))
        session = await manager.start()      # NO_SESSION -> READY
        try:
            ...
        finally:
            await manager.stop()             # READY -> NO_SESSION

        # Or as an async context manager
        async with BrowserManager(settings) as manager:
            await LoginPage(manager.session).verify_displayed()
    """

    def __init__(
        self,
        settings: BrowserSettings,
        launcher: Optional[Launcher] = None,
        worker_id: Optional[str] = None,
        profile_root: Optional[Path] = None,
    ):
        """
        Initialize browser manager.

        Args:
            settings: Browser launch settings
            launcher: Coroutine creating a BrowserSession
                      (defaults to launch_playwright_session)
            worker_id: Worker identity used in profile directory names
            profile_root: Parent directory for profile directories
                          (defaults to the system temp dir)
        """
        self.settings = settings
        self.worker_id = worker_id or current_worker_id()
        self.profile_root = profile_root
        self._launcher: Launcher = launcher or launch_playwright_session
        self._session: Optional[BrowserSession] = None
        self._state = SessionState.NO_SESSION
        self.teardown_warnings: List[TeardownWarning] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[BrowserSession]:
        return self._session

    @property
    def is_ready(self) -> bool:
        return self._state is SessionState.READY and self._session is not None

    async def start(self) -> BrowserSession:
        """
        Launch a fresh session and open the application entry URL.

        Raises:
            SessionStartError: browser failed to launch or open the app
        """
        if self._session is not None:
            logger.warning(
                f"Stale session detected for worker {self.worker_id}, force-closing it"
            )
            await self._close_session(self._session)
            self._session = None

        self._state = SessionState.STARTING
        if self.profile_root is not None:
            Path(self.profile_root).mkdir(parents=True, exist_ok=True)
        profile_dir = Path(
            tempfile.mkdtemp(prefix=f"swaglabs-{self.worker_id}-", dir=self.profile_root)
        )
        debug_port = find_free_port() if self.settings.engine == "chromium" else None

        try:
            session = await self._launcher(self.settings, profile_dir, debug_port)
        except Exception as e:
            self._state = SessionState.NO_SESSION
            shutil.rmtree(profile_dir, ignore_errors=True)
            logger.error(f"Failed to launch {self.settings.browser}: {e}")
            raise SessionStartError(
                f"Failed to launch {self.settings.browser} browser: {e}"
            ) from e

        self._session = session
        session.dialogs = DialogHandler(session.page).install()

        logger.info(f"Opening application URL: {self.settings.base_url}")
        try:
            await session.page.goto(self.settings.base_url, wait_until="domcontentloaded")
        except Exception as e:
            logger.error(f"Error opening {self.settings.base_url}: {e}")
            await self.stop()
            raise SessionStartError(
                f"Failed to open application URL {self.settings.base_url}: {e}"
            ) from e

        self._state = SessionState.READY
        logger.info(f"Session ready on worker {self.worker_id}: {session!r}")
        return session

    async def stop(self) -> None:
        """
        Tear the session down. Never raises for close problems.
        """
        session = self._session
        if session is None:
            self._state = SessionState.NO_SESSION
            return

        self._state = SessionState.CLOSING
        try:
            await self._close_session(session)
        finally:
            self._session = None
            self._state = SessionState.NO_SESSION
        logger.info("Test teardown completed")

    async def _close_session(self, session: BrowserSession) -> None:
        if session.dialogs is not None:
            session.dialogs.uninstall()
            session.dialogs = None

        try:
            await session.clear_state()
        except Exception as e:
            self.teardown_warnings.append(
                report_teardown_problem("Error clearing browser data", e)
            )

        try:
            await session.close()
        except Exception as e:
            self.teardown_warnings.append(
                report_teardown_problem("Error closing browser session", e)
            )
        finally:
            shutil.rmtree(session.profile_dir, ignore_errors=True)


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "SessionState",
    "launch_playwright_session",
    "find_free_port",
    "parse_window_size",
    "current_worker_id",
]
