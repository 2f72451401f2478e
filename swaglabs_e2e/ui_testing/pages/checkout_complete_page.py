"""
================================================================================
Checkout Complete Page Object (Async / Playwright)
================================================================================

Order confirmation screen.

    CheckoutComplete --back_home()--> Products

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger

from swaglabs_e2e.ui_testing.data.catalog import ORDER_COMPLETE_HEADER
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

if TYPE_CHECKING:
    from .products_page import ProductsPage


class CheckoutCompletePage(PageBase):
    """Checkout: Complete! page object (async)."""

    URL_PATH = "/checkout-complete.html"
    PAGE_TITLE = "Checkout: Complete!"

    @allure.step("Verify checkout complete page is displayed")
    async def verify_displayed(self) -> "CheckoutCompletePage":
        await super().verify_displayed()
        await self.verify_element_visible("complete_header", "Success header")
        await self.verify_element_visible("back_home_button", "Back home button")
        logger.info("Checkout complete page is displayed")
        return self

    async def get_header_text(self) -> str:
        return await self.get_text("complete_header")

    async def get_complete_text(self) -> str:
        return await self.get_text("complete_text")

    async def is_checkmark_icon_displayed(self) -> bool:
        return await self.is_visible("pony_express")

    @allure.step("Verify order confirmation")
    async def verify_order_confirmation(self) -> "CheckoutCompletePage":
        await self.verify_text("complete_header", ORDER_COMPLETE_HEADER)
        await self.verify_element_visible("complete_text", "Dispatch message")
        await self.verify_element_visible("pony_express", "Confirmation icon")
        return self

    @allure.step("Back home")
    async def back_home(self) -> "ProductsPage":
        from .products_page import ProductsPage

        await self.click("back_home_button")
        return await self._transition(ProductsPage)
