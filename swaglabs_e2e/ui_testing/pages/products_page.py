"""
================================================================================
Products Page Object (Async / Playwright)
================================================================================

Inventory listing shown after login.

    Products --open_product()--> ProductDetails
    Products --go_to_cart()----> Cart
    Products --logout()--------> Login

Product cards are addressed by their exact name, so actions on one product
never touch another.

================================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List

import allure
from loguru import logger
from playwright.async_api import Locator

from swaglabs_e2e.ui_testing.data.catalog import parse_price
from swaglabs_e2e.ui_testing.framework.errors import AssertionFailure
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

if TYPE_CHECKING:
    from .cart_page import CartPage
    from .login_page import LoginPage
    from .product_details_page import ProductDetailsPage


class ProductsPage(PageBase):
    """Products (inventory) page object (async)."""

    URL_PATH = "/inventory.html"
    PAGE_TITLE = "Products"

    @allure.step("Open products page")
    async def open(self) -> "ProductsPage":
        await self.navigate()
        await self.wait_until_loaded()
        return self

    @allure.step("Verify products page is displayed")
    async def verify_displayed(self) -> "ProductsPage":
        await super().verify_displayed()
        await self.verify_element_visible("inventory_item", "Product list")
        await self.verify_element_visible("sort_dropdown", "Sort dropdown")
        logger.info("Products page is displayed")
        return self

    def _product_card(self, product_name: str) -> Locator:
        """The inventory card whose name is exactly ``product_name``."""
        return self.smart.all("inventory_item").filter(
            has=self.page.get_by_text(product_name, exact=True)
        )

    # =========================================================================
    # Cart actions (same screen)
    # =========================================================================

    @allure.step("Add '{product_name}' to cart")
    async def add_product_to_cart(self, product_name: str) -> "ProductsPage":
        card = self._product_card(product_name)
        await self.click("add_to_cart_button", root=card)
        await self.smart.locate("remove_button", root=card)
        logger.info(f"Added to cart: {product_name}")
        return self

    async def add_products_to_cart(self, product_names) -> "ProductsPage":
        for name in product_names:
            await self.add_product_to_cart(name)
        return self

    @allure.step("Remove '{product_name}' from cart")
    async def remove_product_from_cart(self, product_name: str) -> "ProductsPage":
        card = self._product_card(product_name)
        await self.click("remove_button", root=card)
        await self.smart.locate("add_to_cart_button", root=card)
        logger.info(f"Removed from cart: {product_name}")
        return self

    async def is_add_to_cart_button_displayed(self, product_name: str) -> bool:
        return await self.is_visible("add_to_cart_button", root=self._product_card(product_name))

    async def is_remove_button_displayed(self, product_name: str) -> bool:
        return await self.is_visible("remove_button", root=self._product_card(product_name))

    async def verify_add_to_cart_button_displayed(self, product_name: str) -> "ProductsPage":
        if not await self.is_add_to_cart_button_displayed(product_name):
            raise AssertionFailure(f"'Add to cart' should be shown for {product_name}")
        return self

    async def verify_remove_button_displayed(self, product_name: str) -> "ProductsPage":
        if not await self.is_remove_button_displayed(product_name):
            raise AssertionFailure(f"'Remove' should be shown for {product_name}")
        return self

    # =========================================================================
    # Sorting
    # =========================================================================

    @allure.step("Sort products by '{sort_order}'")
    async def sort_by(self, sort_order: str) -> "ProductsPage":
        """
        Args:
            sort_order: az, za, lohi or hilo
        """
        dropdown = await self.smart.locate("sort_dropdown")
        await dropdown.select_option(sort_order)
        logger.info(f"Products sorted by {sort_order}")
        return self

    async def get_active_sort_label(self) -> str:
        return await self.get_text("active_sort_option")

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_product_names(self) -> List[str]:
        await self.smart.locate("inventory_item")
        names = await self.smart.all("item_name").all_inner_texts()
        return [name.strip() for name in names]

    async def get_product_prices(self) -> List[Decimal]:
        await self.smart.locate("inventory_item")
        prices = await self.smart.all("item_price").all_inner_texts()
        return [parse_price(price) for price in prices]

    async def get_product_count(self) -> int:
        await self.smart.locate("inventory_item")
        return await self.smart.count("inventory_item")

    async def get_product_price(self, product_name: str) -> Decimal:
        text = await self.get_text("item_price", root=self._product_card(product_name))
        return parse_price(text)

    async def get_product_description(self, product_name: str) -> str:
        return await self.get_text("item_description", root=self._product_card(product_name))

    async def is_product_displayed(self, product_name: str) -> bool:
        return await self.is_visible("item_name", root=self._product_card(product_name))

    async def verify_product_displayed(self, product_name: str) -> "ProductsPage":
        if not await self.is_product_displayed(product_name):
            raise AssertionFailure(f"Product '{product_name}' should be listed")
        return self

    # =========================================================================
    # Navigating actions
    # =========================================================================

    @allure.step("Open product details for '{product_name}'")
    async def open_product(self, product_name: str) -> "ProductDetailsPage":
        from .product_details_page import ProductDetailsPage

        await self.click("item_name", root=self._product_card(product_name))
        return await self._transition(ProductDetailsPage)

    @allure.step("Open cart")
    async def go_to_cart(self) -> "CartPage":
        from .cart_page import CartPage

        await self.click("cart_link")
        return await self._transition(CartPage)

    @allure.step("Open burger menu")
    async def open_menu(self) -> "ProductsPage":
        await self.click("menu_button")
        await self.smart.locate("logout_link")
        return self

    @allure.step("Logout")
    async def logout(self) -> "LoginPage":
        from .login_page import LoginPage

        await self.open_menu()
        await self.click("logout_link")
        login_page = LoginPage(self.session)
        await login_page.wait_until_loaded()
        logger.info("Logged out")
        return login_page
