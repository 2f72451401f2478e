"""
================================================================================
Dialog Handler
================================================================================

Handling for JavaScript dialogs (alert / confirm / prompt / beforeunload)
and for page-level popups such as modals and cookie banners.

Playwright delivers dialogs as ``dialog`` events; an unhandled dialog blocks
the page. The handler records every dialog it sees and resolves it according
to its policy so tests never hang on an unexpected alert.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional

from loguru import logger


MODAL_CLOSE_SELECTORS = (".modal-close", "[data-dismiss='modal']", ".close")
COOKIE_ACCEPT_SELECTORS = (
    "#cookie-accept",
    ".cookie-accept",
    "[data-testid='cookie-accept']",
)


@dataclass(frozen=True)
class DialogRecord:
    """A dialog observed on the page."""
    type: str
    message: str
    action: str


class DialogHandler:
    """
    Records and resolves JavaScript dialogs for one page.

    Usage:
        dialogs = DialogHandler(page, policy="accept").install()
        await page.click("#delete")
        record = await dialogs.wait_for_dialog(timeout=2000)
        assert record.message == "Are you sure?"
    """

    POLICIES = ("accept", "dismiss")

    def __init__(
        self,
        page: Any,
        policy: str = "accept",
        prompt_text: Optional[str] = None,
    ):
        """
        Args:
            page: Playwright Page
            policy: "accept" or "dismiss"
            prompt_text: Text entered into prompt() dialogs when accepting
        """
        if policy not in self.POLICIES:
            raise ValueError(f"Unknown dialog policy: {policy}")
        self.page = page
        self.policy = policy
        self.prompt_text = prompt_text
        self.history: List[DialogRecord] = []
        self._arrived = asyncio.Event()

    def install(self) -> "DialogHandler":
        """Start listening for dialogs on the page."""
        self.page.on("dialog", self._on_dialog)
        return self

    def uninstall(self) -> None:
        """Stop listening. Playwright dismisses dialogs nobody listens to."""
        self.page.remove_listener("dialog", self._on_dialog)

    async def _on_dialog(self, dialog: Any) -> None:
        action = self.policy
        try:
            if action == "accept":
                if dialog.type == "prompt" and self.prompt_text is not None:
                    await dialog.accept(self.prompt_text)
                else:
                    await dialog.accept()
            else:
                await dialog.dismiss()
        except Exception as e:
            # The page may already be gone when the dialog is resolved.
            logger.error(f"Error handling {dialog.type} dialog: {e}")
            action = "error"

        record = DialogRecord(type=dialog.type, message=dialog.message, action=action)
        self.history.append(record)
        self._arrived.set()
        logger.info(f"Dialog {action}: [{record.type}] '{record.message}'")

    @property
    def last_message(self) -> Optional[str]:
        """Text of the most recent dialog, or None if none appeared."""
        return self.history[-1].message if self.history else None

    def is_dialog_seen(self) -> bool:
        return bool(self.history)

    async def wait_for_dialog(self, timeout: int = 10000) -> Optional[DialogRecord]:
        """
        Wait for the next dialog.

        Args:
            timeout: Timeout in milliseconds

        Returns:
            The DialogRecord, or None if no dialog appeared in time
        """
        self._arrived.clear()
        try:
            await asyncio.wait_for(self._arrived.wait(), timeout / 1000)
        except asyncio.TimeoutError:
            logger.warning(f"No dialog appeared within {timeout}ms")
            return None
        return self.history[-1]

    async def _click_first_present(self, selectors, what: str) -> bool:
        for selector in selectors:
            locator = self.page.locator(selector)
            try:
                if await locator.count() and await locator.first.is_visible():
                    await locator.first.click()
                    logger.info(f"Closed {what} using {selector}")
                    return True
            except Exception as e:
                logger.debug(f"Could not close {what} via {selector}: {e}")
        return False

    async def close_modal_dialogs(self) -> bool:
        """Close a visible modal if one is present. Absence is not an error."""
        return await self._click_first_present(MODAL_CLOSE_SELECTORS, "modal dialog")

    async def dismiss_cookie_banner(self) -> bool:
        """Accept a cookie consent banner if one is present."""
        return await self._click_first_present(COOKIE_ACCEPT_SELECTORS, "cookie banner")


__all__ = [
    "DialogHandler",
    "DialogRecord",
]
