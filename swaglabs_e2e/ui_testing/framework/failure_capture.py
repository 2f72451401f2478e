"""
================================================================================
Failure Artifact Capture
================================================================================

Records the browser state when a UI test fails:

    - full-page screenshot ``<test name>_<YYYYmmdd_HHMMSS_ffffff>.png`` in the
      configured screenshots directory, attached to Allure as image/png
    - the current URL, attached as text

Capture runs only for failed tests and only while the session is READY.
Anything going wrong here is logged and swallowed so it never hides the
original test failure.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from swaglabs_tools.common import ensure_directory, sanitize_filename
from swaglabs_tools.report_tools.allure_utils import attach_png, attach_text

from .browser_manager import BrowserManager
from .config_loader import ConfigLoader
from .errors import TeardownWarning, report_teardown_problem


TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"


class FailureCapture:
    """
    Screenshot + URL capture for failed tests.

    Usage:
        capture = FailureCapture.from_config(config)
        await capture.capture_on_failure(manager, item.name, failed=True)
    """

    def __init__(
        self,
        screenshot_dir: Path,
        enabled: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            screenshot_dir: Directory screenshots are written to
            enabled: Master switch (screenshots.enabled)
            clock: Timestamp source
        """
        self.screenshot_dir = Path(screenshot_dir)
        self.enabled = enabled
        self._clock = clock
        self.warnings: List[TeardownWarning] = []

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "FailureCapture":
        return cls(
            screenshot_dir=Path(config.get_str("screenshots.path")),
            enabled=config.get_bool("screenshots.enabled"),
        )

    def screenshot_name(self, test_name: str) -> str:
        """File name for ``test_name``, unique to the microsecond."""
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        return f"{sanitize_filename(test_name)}_{timestamp}.png"

    async def capture_on_failure(
        self,
        manager: BrowserManager,
        test_name: str,
        failed: bool,
    ) -> Optional[Path]:
        """
        Capture artifacts if the test failed and capture is possible.

        Returns:
            Path of the written screenshot, or None when nothing was captured
        """
        if not failed or not self.enabled:
            return None
        if not manager.is_ready:
            logger.info(f"No live session for {test_name}; skipping failure capture")
            return None
        return await self.capture(manager, test_name)

    async def capture(self, manager: BrowserManager, test_name: str) -> Optional[Path]:
        session = manager.session
        try:
            directory = ensure_directory(self.screenshot_dir)
            path = directory / self.screenshot_name(test_name)
            data = await session.screenshot(path=path, full_page=True)
            attach_png(data, name=f"Failure screenshot: {test_name}")
            attach_text(session.url, name="Current URL")
        except Exception as e:
            self.warnings.append(
                report_teardown_problem(f"Failed to capture screenshot for {test_name}", e)
            )
            return None

        logger.info(f"Failure screenshot saved: {path}")
        return path


__all__ = [
    "FailureCapture",
    "TIMESTAMP_FORMAT",
]
