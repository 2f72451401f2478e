"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

    Cart --continue_shopping()--> Products
    Cart --checkout()-----------> CheckoutInformation

``LineItemsMixin`` reads the item rows; the checkout overview shows the same
rows and reuses it.

================================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List

import allure
from loguru import logger
from playwright.async_api import Locator
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from swaglabs_e2e.ui_testing.data.catalog import parse_price
from swaglabs_e2e.ui_testing.data.models import CartLineItem
from swaglabs_e2e.ui_testing.framework.errors import AssertionFailure, ElementTimeoutError
from swaglabs_e2e.ui_testing.framework.page_base import PageBase

if TYPE_CHECKING:
    from .checkout_information_page import CheckoutInformationPage
    from .products_page import ProductsPage


class LineItemsMixin:
    """Queries over the cart item rows of the cart and overview screens."""

    def _item_row(self, item_name: str) -> Locator:
        return self.smart.all("cart_item").filter(
            has=self.page.get_by_text(item_name, exact=True)
        )

    async def get_item_count(self) -> int:
        """Number of rows; an empty cart has none."""
        await self.smart.locate("page_title")
        return await self.smart.count("cart_item")

    async def get_item_names(self) -> List[str]:
        names = await self.smart.all("item_name").all_inner_texts()
        return [name.strip() for name in names]

    async def get_item_prices(self) -> List[Decimal]:
        prices = await self.smart.all("item_price").all_inner_texts()
        return [parse_price(price) for price in prices]

    async def get_line_items(self) -> List[CartLineItem]:
        items = []
        rows = self.smart.all("cart_item")
        for i in range(await rows.count()):
            row = rows.nth(i)
            items.append(CartLineItem(
                name=await self.smart.get_text("item_name", root=row),
                price=parse_price(await self.smart.get_text("item_price", root=row)),
                quantity=int(await self.smart.get_text("item_quantity", root=row)),
                description=await self.smart.get_text("item_description", root=row),
            ))
        return items

    async def get_item_price(self, item_name: str) -> Decimal:
        return parse_price(await self.smart.get_text("item_price", root=self._item_row(item_name)))

    async def get_item_quantity(self, item_name: str) -> int:
        return int(await self.smart.get_text("item_quantity", root=self._item_row(item_name)))

    async def get_item_description(self, item_name: str) -> str:
        return await self.smart.get_text("item_description", root=self._item_row(item_name))

    async def is_item_listed(self, item_name: str) -> bool:
        return await self._item_row(item_name).count() > 0

    async def get_items_total(self) -> Decimal:
        return sum(await self.get_item_prices(), Decimal("0"))


class CartPage(LineItemsMixin, PageBase):
    """Cart page object (async)."""

    URL_PATH = "/cart.html"
    PAGE_TITLE = "Your Cart"

    @allure.step("Open cart page")
    async def open(self) -> "CartPage":
        await self.navigate()
        await self.wait_until_loaded()
        return self

    @allure.step("Verify cart page is displayed")
    async def verify_displayed(self) -> "CartPage":
        await super().verify_displayed()
        await self.verify_element_visible("continue_shopping", "Continue shopping button")
        await self.verify_element_visible("checkout_button", "Checkout button")
        logger.info("Cart page is displayed")
        return self

    async def is_item_in_cart(self, item_name: str) -> bool:
        return await self.is_item_listed(item_name)

    async def verify_contains_item(self, item_name: str) -> "CartPage":
        if not await self.is_item_in_cart(item_name):
            raise AssertionFailure(f"Cart should contain '{item_name}'")
        return self

    async def is_cart_empty(self) -> bool:
        return await self.get_item_count() == 0

    async def verify_cart_is_empty(self) -> "CartPage":
        count = await self.get_item_count()
        if count:
            raise AssertionFailure(f"Cart should be empty but has {count} item(s)")
        return self

    async def verify_cart_has_items(self) -> "CartPage":
        if await self.is_cart_empty():
            raise AssertionFailure("Cart should have items")
        return self

    @allure.step("Remove '{item_name}' from cart")
    async def remove_item(self, item_name: str) -> "CartPage":
        row = self._item_row(item_name)
        await self.click("remove_button", root=row)
        try:
            await row.wait_for(state="detached", timeout=self.timeout)
        except PlaywrightTimeoutError as e:
            raise ElementTimeoutError(f"cart row {item_name!r} removal", self.timeout) from e
        logger.info(f"Removed from cart: {item_name}")
        return self

    async def is_checkout_button_enabled(self) -> bool:
        return await self.is_enabled("checkout_button")

    async def is_continue_shopping_button_displayed(self) -> bool:
        return await self.is_visible("continue_shopping")

    @allure.step("Continue shopping")
    async def continue_shopping(self) -> "ProductsPage":
        from .products_page import ProductsPage

        await self.click("continue_shopping")
        return await self._transition(ProductsPage)

    @allure.step("Proceed to checkout")
    async def checkout(self) -> "CheckoutInformationPage":
        from .checkout_information_page import CheckoutInformationPage

        await self.click("checkout_button")
        return await self._transition(CheckoutInformationPage)
