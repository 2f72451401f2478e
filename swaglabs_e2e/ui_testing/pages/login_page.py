"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Entry screen of Swag Labs. Root of the page graph:

    Login --login()--------> Products
    Login --attempt_login()-> Login (error shown)
    Login --submit()-------> Products | Login, whichever actually appeared

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import allure
from loguru import logger
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from swaglabs_e2e.ui_testing.framework.errors import (
    AssertionFailure,
    ElementTimeoutError,
    NavigationTimeoutError,
)
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

if TYPE_CHECKING:
    from .products_page import ProductsPage


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Swag Labs"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page."""
        await self.navigate()
        await self.wait_until_loaded()
        return self

    async def wait_until_loaded(self) -> None:
        # Every URL matches "/", so wait for the form instead.
        try:
            await self.smart.locate("login_button")
        except ElementTimeoutError as e:
            raise NavigationTimeoutError("login page", self.timeout, self.page.url) from e

    @allure.step("Verify login page is displayed")
    async def verify_displayed(self) -> "LoginPage":
        await self.verify_element_visible("username_input", "Username field")
        await self.verify_element_visible("password_input", "Password field")
        await self.verify_element_visible("login_button", "Login button")
        await self.verify_element_visible("login_logo", "Swag Labs logo")
        await self.verify_text("login_logo", self.PAGE_TITLE)
        logger.info("Login page is displayed")
        return self

    async def is_form_displayed(self) -> bool:
        """True when username, password and login button are all visible."""
        for element in ("username_input", "password_input", "login_button"):
            if not await self.is_visible(element):
                return False
        return True

    # =========================================================================
    # Form actions (same screen)
    # =========================================================================

    async def enter_username(self, username: str) -> "LoginPage":
        await self.fill("username_input", username)
        return self

    async def enter_password(self, password: str) -> "LoginPage":
        await self.fill("password_input", password)
        return self

    async def click_login_button(self) -> "LoginPage":
        await self.click("login_button")
        return self

    async def _submit_credentials(self, username: str, password: str) -> None:
        await self.enter_username(username)
        await self.enter_password(password)
        await self.click_login_button()

    @allure.step("Clear login form")
    async def clear_form(self) -> "LoginPage":
        await self.fill("username_input", "")
        await self.fill("password_input", "")
        return self

    # =========================================================================
    # Navigating actions
    # =========================================================================

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> "ProductsPage":
        """
        Log in with credentials expected to be accepted.

        Raises:
            AssertionFailure: the app rejected the credentials
            NavigationTimeoutError: the products screen never appeared
        """
        from .products_page import ProductsPage

        logger.info(f"Logging in as {username!r}")
        await self.dismiss_error()
        await self._submit_credentials(username, password)
        try:
            return await self._transition(ProductsPage)
        except NavigationTimeoutError:
            if await self.is_error_displayed():
                message = await self.get_error_message()
                raise AssertionFailure(f"Login as {username!r} was rejected: {message}")
            raise

    @allure.step("Attempt login expected to fail (username={username})")
    async def attempt_login(self, username: str, password: str) -> "LoginPage":
        """
        Submit credentials expected to be rejected; stays on this screen.

        Raises:
            AssertionFailure: no error message appeared
        """
        logger.info(f"Attempting login as {username!r} (expecting an error)")
        await self._submit_credentials(username, password)
        await self.verify_error_displayed()
        return self

    @allure.step("Submit login form (username={username})")
    async def submit(self, username: str, password: str) -> Union["ProductsPage", "LoginPage"]:
        """
        Submit credentials without presuming the outcome.

        Returns:
            ProductsPage if the app logged in, otherwise this LoginPage
        """
        from .products_page import ProductsPage

        # A banner left by an earlier attempt would satisfy the wait below at once.
        await self.dismiss_error()
        await self._submit_credentials(username, password)
        outcome = self.smart.all("login_error").or_(self.smart.all("inventory_item"))
        try:
            await outcome.first.wait_for(state="visible", timeout=self.timeout)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeoutError(
                "products page or login error", self.timeout, self.page.url
            ) from e

        if ProductsPage.URL_PATH in self.page.url:
            logger.info(f"Login as {username!r} succeeded")
            return ProductsPage(self.session)
        logger.info(f"Login as {username!r} rejected")
        return self

    # =========================================================================
    # Error message
    # =========================================================================

    async def is_error_displayed(self) -> bool:
        return await self.is_visible("login_error", timeout=1000)

    async def get_error_message(self) -> str:
        return await self.get_text("login_error")

    @allure.step("Dismiss login error")
    async def dismiss_error(self) -> "LoginPage":
        """Close the error banner if one is showing; no-op otherwise."""
        if await self.smart.count("login_error") == 0:
            return self
        await self.click("login_error_close")
        try:
            await self.smart.all("login_error").first.wait_for(state="hidden", timeout=self.timeout)
        except PlaywrightTimeoutError as e:
            raise ElementTimeoutError("login_error", self.timeout, "error banner did not close") from e
        return self

    async def verify_error_displayed(self) -> "LoginPage":
        await self.verify_element_visible("login_error", "Login error message")
        return self

    @allure.step("Verify login error contains '{expected}'")
    async def verify_error_message(self, expected: str) -> "LoginPage":
        await self.verify_error_displayed()
        actual = await self.get_error_message()
        if expected not in actual:
            raise AssertionFailure(
                f"Login error should contain '{expected}' but was '{actual}'"
            )
        return self

    # =========================================================================
    # Accepted usernames panel
    # =========================================================================

    async def verify_accepted_usernames_displayed(self) -> "LoginPage":
        await self.verify_element_visible("accepted_usernames", "Accepted usernames panel")
        return self

    async def get_accepted_usernames_text(self) -> str:
        return await self.get_text("accepted_usernames")
