"""
================================================================================
Smart Locator
================================================================================

Element location with fallback strategies for the Swag Labs screens.

    - Primary ``data-test`` selectors, id/class fallbacks
    - One bounded wait per lookup, whichever strategy matches first wins
    - Fallback usage recorded for maintenance (health report)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import ElementTimeoutError


@dataclass
class LocatorHealth:
    """
    Which strategy resolved an element.

    Attributes:
        element_name: Key in SmartLocator.LOCATORS
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Element locator with fallback strategies.

    Locator Priority Order:
        1. data-test attribute (most stable)
        2. element id
        3. CSS class

    Usage:
        >>> smart = SmartLocator(page, timeout=10000)
        >>> await smart.fill("username_input", "standard_user")
        >>> await smart.click("login_button")
        >>> item = smart.all("inventory_item").nth(0)
        >>> await smart.get_text("item_name", root=item)
    """

    # element_name -> {strategy_name: selector}
    LOCATORS: Dict[str, Dict[str, str]] = {
        # Login
        "username_input": {
            "primary": "[data-test='username']",
            "fallback_1": "#user-name",
        },
        "password_input": {
            "primary": "[data-test='password']",
            "fallback_1": "#password",
        },
        "login_button": {
            "primary": "[data-test='login-button']",
            "fallback_1": "#login-button",
        },
        "login_error": {
            "primary": "[data-test='error']",
            "fallback_1": ".error-message-container h3",
        },
        "login_error_close": {
            "primary": "[data-test='error-button']",
            "fallback_1": ".error-button",
        },
        "login_logo": {
            "primary": ".login_logo",
        },
        "accepted_usernames": {
            "primary": "[data-test='login-credentials']",
            "fallback_1": "#login_credentials",
        },

        # Header (every authenticated screen)
        "page_title": {
            "primary": "[data-test='title']",
            "fallback_1": ".title",
        },
        "cart_link": {
            "primary": "[data-test='shopping-cart-link']",
            "fallback_1": ".shopping_cart_link",
        },
        "cart_badge": {
            "primary": "[data-test='shopping-cart-badge']",
            "fallback_1": ".shopping_cart_badge",
        },
        "menu_button": {
            "primary": "#react-burger-menu-btn",
        },
        "logout_link": {
            "primary": "[data-test='logout-sidebar-link']",
            "fallback_1": "#logout_sidebar_link",
        },

        # Products
        "sort_dropdown": {
            "primary": "[data-test='product-sort-container']",
            "fallback_1": ".product_sort_container",
        },
        "active_sort_option": {
            "primary": "[data-test='active-option']",
            "fallback_1": ".active_option",
        },
        "inventory_item": {
            "primary": "[data-test='inventory-item']",
            "fallback_1": ".inventory_item",
        },
        "item_name": {
            "primary": "[data-test='inventory-item-name']",
            "fallback_1": ".inventory_item_name",
        },
        "item_price": {
            "primary": "[data-test='inventory-item-price']",
            "fallback_1": ".inventory_item_price",
        },
        "item_description": {
            "primary": "[data-test='inventory-item-desc']",
            "fallback_1": ".inventory_item_desc",
        },
        "add_to_cart_button": {
            "primary": "button[data-test^='add-to-cart']",
        },
        "remove_button": {
            "primary": "button[data-test^='remove']",
        },

        # Product details
        "details_name": {
            "primary": ".inventory_details_name",
            "fallback_1": "[data-test='inventory-item-name']",
        },
        "details_description": {
            "primary": ".inventory_details_desc",
            "fallback_1": "[data-test='inventory-item-desc']",
        },
        "details_price": {
            "primary": ".inventory_details_price",
            "fallback_1": "[data-test='inventory-item-price']",
        },
        "details_image": {
            "primary": ".inventory_details_img",
        },
        "back_to_products": {
            "primary": "[data-test='back-to-products']",
            "fallback_1": "#back-to-products",
        },

        # Cart
        "cart_item": {
            "primary": "[data-test='inventory-item']",
            "fallback_1": ".cart_item",
        },
        "item_quantity": {
            "primary": "[data-test='item-quantity']",
            "fallback_1": ".cart_quantity",
        },
        "continue_shopping": {
            "primary": "[data-test='continue-shopping']",
            "fallback_1": "#continue-shopping",
        },
        "checkout_button": {
            "primary": "[data-test='checkout']",
            "fallback_1": "#checkout",
        },

        # Checkout: information
        "first_name_input": {
            "primary": "[data-test='firstName']",
            "fallback_1": "#first-name",
        },
        "last_name_input": {
            "primary": "[data-test='lastName']",
            "fallback_1": "#last-name",
        },
        "postal_code_input": {
            "primary": "[data-test='postalCode']",
            "fallback_1": "#postal-code",
        },
        "checkout_error": {
            "primary": "[data-test='error']",
            "fallback_1": ".error-message-container h3",
        },
        "cancel_button": {
            "primary": "[data-test='cancel']",
            "fallback_1": "#cancel",
        },
        "continue_button": {
            "primary": "[data-test='continue']",
            "fallback_1": "#continue",
        },

        # Checkout: overview
        "payment_info": {
            "primary": "[data-test='payment-info-value']",
        },
        "shipping_info": {
            "primary": "[data-test='shipping-info-value']",
        },
        "subtotal_label": {
            "primary": "[data-test='subtotal-label']",
            "fallback_1": ".summary_subtotal_label",
        },
        "tax_label": {
            "primary": "[data-test='tax-label']",
            "fallback_1": ".summary_tax_label",
        },
        "total_label": {
            "primary": "[data-test='total-label']",
            "fallback_1": ".summary_total_label",
        },
        "finish_button": {
            "primary": "[data-test='finish']",
            "fallback_1": "#finish",
        },

        # Checkout: complete
        "complete_header": {
            "primary": "[data-test='complete-header']",
            "fallback_1": ".complete-header",
        },
        "complete_text": {
            "primary": "[data-test='complete-text']",
            "fallback_1": ".complete-text",
        },
        "pony_express": {
            "primary": "[data-test='pony-express']",
            "fallback_1": ".pony_express",
        },
        "back_home_button": {
            "primary": "[data-test='back-to-products']",
            "fallback_1": "#back-to-products",
        },
    }

    def __init__(self, page: Page, timeout: int = 10000):
        """
        Args:
            page: Playwright Page object
            timeout: Default wait bound in milliseconds
        """
        self.page = page
        self.timeout = timeout
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def _strategies(self, element_name: str) -> Dict[str, str]:
        try:
            return self.LOCATORS[element_name]
        except KeyError:
            raise KeyError(f"No locators defined for element: {element_name}") from None

    def all(self, element_name: str, root: Optional[Any] = None) -> Locator:
        """
        Locator matching every element for ``element_name``, without waiting.

        Used for collections (inventory items, cart rows). The strategies are
        combined so whichever selector the current build exposes matches.
        """
        scope = root if root is not None else self.page
        selectors = list(self._strategies(element_name).values())
        return scope.locator(", ".join(selectors))

    async def locate(
        self,
        element_name: str,
        timeout: Optional[int] = None,
        root: Optional[Any] = None,
        state: str = "visible",
    ) -> Locator:
        """
        Locate element using the fallback strategies.

        All strategies share one wait bounded by ``timeout``; the first
        strategy (in priority order) that matches is returned.

        Args:
            element_name: Key in LOCATORS
            timeout: Wait bound in milliseconds (defaults to the configured timeout)
            root: Optional Locator to scope the search to (e.g. one product card)
            state: Element state to wait for

        Returns:
            Playwright Locator for the found element

        Raises:
            ElementTimeoutError: No strategy matched in time
        """
        timeout = self.timeout if timeout is None else timeout
        scope = root if root is not None else self.page
        locators = self._strategies(element_name)

        try:
            await self.all(element_name, root=root).first.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            tried = "\n".join(f"  - {name}: {sel}" for name, sel in locators.items())
            logger.error(f"All locators failed for '{element_name}':\n{tried}")
            raise ElementTimeoutError(element_name, timeout, details=tried) from e

        for strategy_name, selector in locators.items():
            locator = scope.locator(selector)
            if await locator.count() == 0:
                continue
            self._record(element_name, locators, strategy_name, selector)
            return locator.first

        # Matched during the wait but detached since; let the caller's action retry.
        return self.all(element_name, root=root).first

    def _record(
        self,
        element_name: str,
        locators: Dict[str, str],
        strategy_name: str,
        selector: str,
    ) -> None:
        used_fallback = strategy_name != "primary"
        health = LocatorHealth(
            element_name=element_name,
            primary_selector=locators["primary"],
            used_fallback=used_fallback,
            fallback_name=strategy_name if used_fallback else None,
            fallback_selector=selector if used_fallback else None,
        )
        if used_fallback:
            if element_name not in self._fallback_used:
                logger.warning(
                    f"Element '{element_name}' used fallback: {strategy_name} -> {selector}"
                )
            self._fallback_used[element_name] = health
        else:
            logger.debug(f"Element '{element_name}' found: {selector}")

    async def click(self, element_name: str, timeout: Optional[int] = None,
                    root: Optional[Any] = None, **kwargs: Any) -> None:
        locator = await self.locate(element_name, timeout=timeout, root=root)
        await locator.click(**kwargs)

    async def fill(self, element_name: str, value: str, timeout: Optional[int] = None,
                   root: Optional[Any] = None) -> None:
        locator = await self.locate(element_name, timeout=timeout, root=root)
        await locator.fill(value)

    async def get_text(self, element_name: str, timeout: Optional[int] = None,
                       root: Optional[Any] = None) -> str:
        """Visible text of the element, stripped."""
        locator = await self.locate(element_name, timeout=timeout, root=root)
        return ((await locator.text_content()) or "").strip()

    async def get_value(self, element_name: str, timeout: Optional[int] = None,
                        root: Optional[Any] = None) -> str:
        """Current value of an input element."""
        locator = await self.locate(element_name, timeout=timeout, root=root)
        return await locator.input_value()

    async def is_visible(self, element_name: str, timeout: int = 2000,
                         root: Optional[Any] = None) -> bool:
        """
        Check if element is visible.

        Returns:
            True if element is visible, False otherwise (absence is not an error)
        """
        try:
            await self.locate(element_name, timeout=timeout, root=root)
            return True
        except ElementTimeoutError:
            return False

    async def count(self, element_name: str, root: Optional[Any] = None) -> int:
        """Number of matching elements right now (no waiting)."""
        return await self.all(element_name, root=root).count()

    @property
    def fallbacks_used(self) -> Dict[str, LocatorHealth]:
        return dict(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Locator health report listing elements that needed a fallback.
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "Consider updating the primary selectors:",
            "",
        ]
        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "LocatorHealth",
]
