"""
================================================================================
Checkout Overview Page Object (Async / Playwright)
================================================================================

Second checkout step: order summary and price totals.

    CheckoutOverview --finish()--> CheckoutComplete
    CheckoutOverview --cancel()--> Products

================================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import allure
from loguru import logger

from swaglabs_e2e.ui_testing.data.catalog import parse_price
from swaglabs_e2e.ui_testing.framework.errors import AssertionFailure
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

from .cart_page import LineItemsMixin

if TYPE_CHECKING:
    from .checkout_complete_page import CheckoutCompletePage
    from .products_page import ProductsPage


class CheckoutOverviewPage(LineItemsMixin, PageBase):
    """Checkout: Overview page object (async)."""

    URL_PATH = "/checkout-step-two.html"
    PAGE_TITLE = "Checkout: Overview"

    @allure.step("Verify checkout overview page is displayed")
    async def verify_displayed(self) -> "CheckoutOverviewPage":
        await super().verify_displayed()
        await self.verify_element_visible("finish_button", "Finish button")
        await self.verify_element_visible("cancel_button", "Cancel button")
        logger.info("Checkout overview page is displayed")
        return self

    async def verify_item_in_overview(self, item_name: str) -> "CheckoutOverviewPage":
        if not await self.is_item_listed(item_name):
            raise AssertionFailure(f"Overview should list '{item_name}'")
        return self

    # =========================================================================
    # Summary
    # =========================================================================

    async def get_subtotal(self) -> Decimal:
        """Amount from "Item total: $X"."""
        return parse_price(await self.get_text("subtotal_label"))

    async def get_tax(self) -> Decimal:
        return parse_price(await self.get_text("tax_label"))

    async def get_total(self) -> Decimal:
        return parse_price(await self.get_text("total_label"))

    async def get_payment_information(self) -> str:
        return await self.get_text("payment_info")

    async def get_shipping_information(self) -> str:
        return await self.get_text("shipping_info")

    @allure.step("Verify price summary is displayed")
    async def verify_price_total_displayed(self) -> "CheckoutOverviewPage":
        await self.verify_element_visible("subtotal_label", "Item total")
        await self.verify_element_visible("tax_label", "Tax")
        await self.verify_element_visible("total_label", "Total")
        return self

    async def verify_payment_information_displayed(self) -> "CheckoutOverviewPage":
        await self.verify_element_visible("payment_info", "Payment information")
        return self

    async def verify_shipping_information_displayed(self) -> "CheckoutOverviewPage":
        await self.verify_element_visible("shipping_info", "Shipping information")
        return self

    async def is_finish_button_enabled(self) -> bool:
        return await self.is_enabled("finish_button")

    # =========================================================================
    # Navigating actions
    # =========================================================================

    @allure.step("Finish checkout")
    async def finish(self) -> "CheckoutCompletePage":
        from .checkout_complete_page import CheckoutCompletePage

        await self.click("finish_button")
        return await self._transition(CheckoutCompletePage)

    @allure.step("Cancel checkout from overview")
    async def cancel(self) -> "ProductsPage":
        from .products_page import ProductsPage

        await self.click("cancel_button")
        return await self._transition(ProductsPage)
