"""
================================================================================
Product Details Page Object (Async / Playwright)
================================================================================

Single product screen.

    ProductDetails --back_to_products()--> Products
    ProductDetails --go_to_cart()--------> Cart

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

if TYPE_CHECKING:
    from .cart_page import CartPage
    from .products_page import ProductsPage


class ProductDetailsPage(PageBase):
    """Product details page object (async)."""

    URL_PATH = "/inventory-item.html"

    @allure.step("Verify product details page is displayed")
    async def verify_displayed(self) -> "ProductDetailsPage":
        if self.URL_PATH not in self.page.url:
            raise AssertionFailure(
                f"Expected URL containing '{self.URL_PATH}', got '{self.page.url}'"
            )
        await self.verify_element_visible("details_name", "Product name")
        await self.verify_element_visible("details_description", "Product description")
        await self.verify_element_visible("details_price", "Product price")
        await self.verify_element_visible("back_to_products", "Back to products button")
        logger.info("Product details page is displayed")
        return self

    async def get_product_name(self) -> str:
        return await self.get_text("details_name")

    async def get_product_description(self) -> str:
        return await self.get_text("details_description")

    async def get_product_price(self) -> Decimal:
        return parse_price(await self.get_text("details_price"))

    async def verify_product_name(self, expected: str) -> "ProductDetailsPage":
        await self.verify_text("details_name", expected)
        return self

    @allure.step("Add product to cart from details")
    async def add_to_cart(self) -> "ProductDetailsPage":
        await self.click("add_to_cart_button")
        await self.smart.locate("remove_button")
        return self

    @allure.step("Remove product from cart on details")
    async def remove_from_cart(self) -> "ProductDetailsPage":
        await self.click("remove_button")
        await self.smart.locate("add_to_cart_button")
        return self

    async def is_add_to_cart_button_displayed(self) -> bool:
        return await self.is_visible("add_to_cart_button")

    async def is_remove_button_displayed(self) -> bool:
        return await self.is_visible("remove_button")

    async def is_product_image_displayed(self) -> bool:
        return await self.is_visible("details_image")

    async def is_back_to_products_button_displayed(self) -> bool:
        return await self.is_visible("back_to_products")

    @allure.step("Back to products")
    async def back_to_products(self) -> "ProductsPage":
        from .products_page import ProductsPage

        await self.click("back_to_products")
        return await self._transition(ProductsPage)

    @allure.step("Open cart")
    async def go_to_cart(self) -> "CartPage":
        from .cart_page import CartPage

        await self.click("cart_link")
        return await self._transition(CartPage)
