"""
================================================================================
Checkout Information Page Object (Async / Playwright)
================================================================================

First checkout step: buyer name and postal code.

    CheckoutInformation --continue_to_overview()---> CheckoutOverview
    CheckoutInformation --submit_incomplete_form()-> CheckoutInformation
    CheckoutInformation --cancel()-----------------> Cart

The app validates first name, last name, postal code in that order and shows
only the first missing field. Entered values stay in the form after a failed
submit.

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger

from swaglabs_e2e.ui_testing.framework.errors import (
    AssertionFailure,
    NavigationTimeoutError,
)
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

if TYPE_CHECKING:
    from .cart_page import CartPage
    from .checkout_overview_page import CheckoutOverviewPage


class CheckoutInformationPage(PageBase):
    """Checkout: Your Information page object (async)."""

    URL_PATH = "/checkout-step-one.html"
    PAGE_TITLE = "Checkout: Your Information"

    @allure.step("Verify checkout information page is displayed")
    async def verify_displayed(self) -> "CheckoutInformationPage":
        await super().verify_displayed()
        await self.verify_element_visible("first_name_input", "First name field")
        await self.verify_element_visible("last_name_input", "Last name field")
        await self.verify_element_visible("postal_code_input", "Postal code field")
        await self.verify_element_visible("continue_button", "Continue button")
        await self.verify_element_visible("cancel_button", "Cancel button")
        logger.info("Checkout information page is displayed")
        return self

    # =========================================================================
    # Form
    # =========================================================================

    async def enter_first_name(self, first_name: str) -> "CheckoutInformationPage":
        await self.fill("first_name_input", first_name)
        return self

    async def enter_last_name(self, last_name: str) -> "CheckoutInformationPage":
        await self.fill("last_name_input", last_name)
        return self

    async def enter_postal_code(self, postal_code: str) -> "CheckoutInformationPage":
        await self.fill("postal_code_input", postal_code)
        return self

    @allure.step("Fill checkout information ({first_name} {last_name}, {postal_code})")
    async def fill_information(
        self,
        first_name: str,
        last_name: str,
        postal_code: str,
    ) -> "CheckoutInformationPage":
        await self.enter_first_name(first_name)
        await self.enter_last_name(last_name)
        await self.enter_postal_code(postal_code)
        return self

    async def clear_all_fields(self) -> "CheckoutInformationPage":
        return await self.fill_information("", "", "")

    async def get_first_name_value(self) -> str:
        return await self.get_value("first_name_input")

    async def get_last_name_value(self) -> str:
        return await self.get_value("last_name_input")

    async def get_postal_code_value(self) -> str:
        return await self.get_value("postal_code_input")

    async def is_continue_button_enabled(self) -> bool:
        return await self.is_enabled("continue_button")

    # =========================================================================
    # Error message
    # =========================================================================

    async def is_error_displayed(self) -> bool:
        return await self.is_visible("checkout_error", timeout=1000)

    async def get_error_message(self) -> str:
        return await self.get_text("checkout_error")

    @allure.step("Verify checkout error '{expected}'")
    async def verify_error_message(self, expected: str) -> "CheckoutInformationPage":
        await self.verify_element_visible("checkout_error", "Checkout error message")
        actual = await self.get_error_message()
        if expected not in actual:
            raise AssertionFailure(
                f"Checkout error should contain '{expected}' but was '{actual}'"
            )
        return self

    # =========================================================================
    # Navigating actions
    # =========================================================================

    @allure.step("Continue to checkout overview")
    async def continue_to_overview(self) -> "CheckoutOverviewPage":
        """
        Submit a complete form.

        Raises:
            AssertionFailure: the form was rejected with a validation error
        """
        from .checkout_overview_page import CheckoutOverviewPage

        await self.click("continue_button")
        try:
            return await self._transition(CheckoutOverviewPage)
        except NavigationTimeoutError:
            if await self.is_error_displayed():
                message = await self.get_error_message()
                raise AssertionFailure(f"Checkout information was rejected: {message}")
            raise

    @allure.step("Submit incomplete checkout form")
    async def submit_incomplete_form(self) -> "CheckoutInformationPage":
        """
        Submit a form with a missing field; stays on this screen.

        Raises:
            AssertionFailure: no validation error appeared
        """
        await self.click("continue_button")
        await self.verify_element_visible("checkout_error", "Checkout error message")
        return self

    @allure.step("Cancel checkout")
    async def cancel(self) -> "CartPage":
        from .cart_page import CartPage

        await self.click("cancel_button")
        return await self._transition(CartPage)
