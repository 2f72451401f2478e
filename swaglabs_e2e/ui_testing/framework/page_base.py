"""
================================================================================
Base Page Object
================================================================================

Foundation class for the Swag Labs Page Object Model.

A page object means "the current screen is this page". Constructing one does
not check anything; call ``verify_displayed()`` to assert the screen is there.

Provides:
    - Smart element interaction with bounded waits
    - Screen transitions that return the destination page object
    - Header queries shared by every authenticated screen (title, cart badge)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import allure
from loguru import logger
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .browser_manager import BrowserSession
from .errors import AssertionFailure, NavigationTimeoutError
from .smart_locator import SmartLocator


P = TypeVar("P", bound="BasePage")


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare where they live and what identifies them:

        class CartPage(BasePage):
            URL_PATH = "/cart.html"
            PAGE_TITLE = "Your Cart"

            async def checkout(self) -> "CheckoutInformationPage":
                await self.click("checkout_button")
                return await self._transition(CheckoutInformationPage)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(self, session: BrowserSession):
        """
        Initialize page object.

        Args:
            session: The running BrowserSession this screen belongs to
        """
        self.session = session
        self.page: Page = session.page
        self.timeout: int = session.settings.timeout_ms
        self.base_url: str = session.settings.base_url.rstrip("/")
        self.smart = SmartLocator(self.page, timeout=self.timeout)

    @property
    def url(self) -> str:
        """Full URL of this screen."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.page.url

    async def navigate(self: P, wait_for: str = "domcontentloaded") -> P:
        """
        Open this screen directly by URL.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            try:
                await self.page.goto(self.url, wait_until=wait_for, timeout=self.timeout)
            except PlaywrightTimeoutError as e:
                raise NavigationTimeoutError(self.url, self.timeout, self.page.url) from e
            logger.debug(f"Navigated to: {self.url}")
        return self

    async def wait_until_loaded(self) -> None:
        """
        Wait until the browser shows this screen's URL.

        Raises:
            NavigationTimeoutError: URL did not appear within the timeout
        """
        pattern = f"**{self.URL_PATH}*"
        try:
            await self.page.wait_for_url(pattern, timeout=self.timeout)
        except PlaywrightTimeoutError as e:
            logger.error(f"Expected {self.URL_PATH} but browser is on {self.page.url}")
            raise NavigationTimeoutError(self.URL_PATH, self.timeout, self.page.url) from e

    async def _transition(self, page_cls: Type[P]) -> P:
        """Build the destination page object once its URL is showing."""
        destination = page_cls(self.session)
        await destination.wait_until_loaded()
        logger.info(f"{type(self).__name__} -> {page_cls.__name__}")
        return destination

    # =========================================================================
    # Smart Element Interactions
    # =========================================================================

    async def click(self, element_name: str, root: Optional[Any] = None) -> None:
        with allure.step(f"Click: {element_name}"):
            await self.smart.click(element_name, root=root)

    async def fill(self, element_name: str, value: str) -> None:
        """
        Fill input element. Password values are masked in the report.
        """
        shown = "*" * len(value) if "password" in element_name.lower() else value
        with allure.step(f"Fill {element_name}: {shown}"):
            await self.smart.fill(element_name, value)

    async def get_text(self, element_name: str, root: Optional[Any] = None) -> str:
        return await self.smart.get_text(element_name, root=root)

    async def get_value(self, element_name: str) -> str:
        return await self.smart.get_value(element_name)

    async def is_visible(
        self,
        element_name: str,
        timeout: int = 2000,
        root: Optional[Any] = None,
    ) -> bool:
        """
        Check if element is visible within a short bound.

        Returns:
            True if visible, False if absent or hidden
        """
        return await self.smart.is_visible(element_name, timeout=timeout, root=root)

    async def is_enabled(self, element_name: str) -> bool:
        locator = await self.smart.locate(element_name)
        return await locator.is_enabled()

    # =========================================================================
    # Verification Helpers
    # =========================================================================

    async def verify_element_visible(self, element_name: str, description: str = "") -> None:
        """
        Raises:
            AssertionFailure: element is not visible within the timeout
        """
        if not await self.is_visible(element_name, timeout=self.timeout):
            label = description or element_name
            raise AssertionFailure(f"{label} should be visible on {type(self).__name__}")

    async def verify_text(self, element_name: str, expected: str) -> None:
        actual = await self.get_text(element_name)
        if actual != expected:
            raise AssertionFailure(
                f"{element_name}: expected '{expected}' but found '{actual}'"
            )

    async def verify_displayed(self: P) -> P:
        """
        Assert this screen is showing: URL, title text and cart link.

        Raises:
            AssertionFailure: the defining elements are not there
        """
        with allure.step(f"Verify {type(self).__name__} is displayed"):
            if self.URL_PATH not in self.page.url:
                raise AssertionFailure(
                    f"Expected URL containing '{self.URL_PATH}', got '{self.page.url}'"
                )
            await self.verify_element_visible("page_title", "Page title")
            await self.verify_text("page_title", self.PAGE_TITLE)
            await self.verify_element_visible("cart_link", "Shopping cart link")
        return self

    # =========================================================================
    # Header
    # =========================================================================

    async def get_page_title(self) -> str:
        return await self.get_text("page_title")

    async def get_cart_badge_count(self) -> int:
        """
        Number shown on the cart badge. The badge is not rendered for an
        empty cart, so absence means 0.

        Raises:
            AssertionFailure: the badge shows something other than a number
        """
        if await self.smart.count("cart_badge") == 0:
            return 0
        text = await self.smart.get_text("cart_badge")
        if not text.isdigit():
            raise AssertionFailure(f"Cart badge should show a number, got '{text}'")
        return int(text)

    async def is_cart_badge_visible(self) -> bool:
        return await self.smart.count("cart_badge") > 0

    def get_locator_health_report(self) -> str:
        return self.smart.get_health_report()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"


__all__ = [
    "BasePage",
    "PageBase",
]

# Alias for page objects preferring PageBase naming
PageBase = BasePage
