"""
================================================================================
Products Feature UI Tests (Async / Playwright)
================================================================================

Covers:
  - Product listing against the catalog
  - Per-product price and description
  - Sorting in all four orders
  - Product details navigation
  - Add / remove round trip and cart badge

================================================================================
"""

import time

import allure
import pytest

from swaglabs_e2e.ui_testing.data.catalog import (
    PRODUCT_CATALOG,
    data_driven,
    expected_names,
    parse_price,
)
from swaglabs_e2e.ui_testing.framework.soft_assert import AssertionBatch
from swaglabs_e2e.ui_testing.pages.login_page import LoginPage
from swaglabs_e2e.ui_testing.pages.products_page import ProductsPage


@allure.epic("UI Testing")
@allure.feature("Products")
@pytest.mark.products
class TestProducts:
    """Products UI test suite (async)."""

    @allure.story("Listing")
    @allure.title("All six catalog products are listed")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_all_products_listed(self, products_page: ProductsPage):
        await products_page.verify_displayed()

        names = await products_page.get_product_names()

        assert len(names) == len(PRODUCT_CATALOG)
        assert set(names) == set(PRODUCT_CATALOG)

    @allure.story("Listing")
    @allure.title("Product price and description match the catalog")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    @data_driven("product_data")
    async def test_product_data(self, products_page: ProductsPage, name, price, description_part):
        with AssertionBatch(f"Product data: {name}") as batch:
            batch.check(await products_page.is_product_displayed(name), f"{name} listed")
            batch.equal(await products_page.get_product_price(name), parse_price(price), "price")
            batch.contains(
                await products_page.get_product_description(name),
                description_part,
                "description",
            )
            batch.check(
                await products_page.is_add_to_cart_button_displayed(name),
                "'Add to cart' shown",
            )

    @allure.story("Sorting")
    @allure.title("Products are sorted in the selected order")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    @data_driven("sorting_data")
    async def test_sorting(self, products_page: ProductsPage, sort_order, label):
        await products_page.sort_by(sort_order)

        assert await products_page.get_active_sort_label() == label
        assert await products_page.get_product_names() == expected_names(sort_order)

        if sort_order == "az":
            names = [n.lower() for n in await products_page.get_product_names()]
            assert names == sorted(names)
        elif sort_order == "lohi":
            prices = await products_page.get_product_prices()
            assert all(a <= b for a, b in zip(prices, prices[1:]))

    @allure.story("Details")
    @allure.title("Product details match the listing and lead back")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_product_details_navigation(self, products_page: ProductsPage):
        name = "Sauce Labs Backpack"
        listed_price = await products_page.get_product_price(name)

        details = await products_page.open_product(name)
        await details.verify_displayed()

        with AssertionBatch("Product details") as batch:
            batch.equal(await details.get_product_name(), name, "name")
            batch.equal(await details.get_product_price(), listed_price, "price")
            batch.contains(
                await details.get_product_description(),
                PRODUCT_CATALOG[name].description_part,
                "description",
            )
            batch.check(await details.is_product_image_displayed(), "image shown")
            batch.check(await details.is_add_to_cart_button_displayed(), "'Add to cart' shown")

        products = await details.back_to_products()
        await products.verify_displayed()

    @allure.story("Details")
    @allure.title("Adding from the details page updates the badge")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_add_to_cart_from_details(self, products_page: ProductsPage):
        details = await products_page.open_product("Sauce Labs Bike Light")

        await details.add_to_cart()
        assert await details.is_remove_button_displayed()
        assert await details.get_cart_badge_count() == 1

        cart = await details.go_to_cart()
        await cart.verify_contains_item("Sauce Labs Bike Light")

    @allure.story("Cart Controls")
    @allure.title("Add then remove restores the product control and badge")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_add_remove_round_trip(self, products_page: ProductsPage):
        name = "Sauce Labs Onesie"

        await products_page.add_product_to_cart(name)
        await products_page.verify_remove_button_displayed(name)
        assert await products_page.get_cart_badge_count() == 1

        await products_page.remove_product_from_cart(name)
        await products_page.verify_add_to_cart_button_displayed(name)
        assert await products_page.get_cart_badge_count() == 0
        assert not await products_page.is_cart_badge_visible()

    @allure.story("Cart Controls")
    @allure.title("Cart badge counts every added product")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    @data_driven("multiple_products_data")
    async def test_badge_counts_products(self, products_page: ProductsPage, product_names, expected_count):
        await products_page.add_products_to_cart(product_names)

        assert await products_page.get_cart_badge_count() == expected_count


@allure.epic("UI Testing")
@allure.feature("Performance")
@pytest.mark.performance
class TestProductsLoadTime:
    """Login-to-listing time per user."""

    @allure.story("Load Time")
    @allure.title("Products appear within the user's load budget")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    @pytest.mark.asyncio
    @data_driven("performance_data")
    async def test_products_load_time(self, login_page: LoginPage, app_config, username, max_load_ms):
        password = app_config.require("users.standard.password")

        started = time.monotonic()
        products = await login_page.login(username, password)
        await products.get_product_count()
        elapsed_ms = (time.monotonic() - started) * 1000

        allure.attach(f"{elapsed_ms:.0f} ms", name="Load time",
                      attachment_type=allure.attachment_type.TEXT)
        assert elapsed_ms <= max_load_ms, (
            f"Products took {elapsed_ms:.0f}ms for {username}, budget {max_load_ms}ms"
        )
