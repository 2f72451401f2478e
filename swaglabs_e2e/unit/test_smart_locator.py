import pytest

from swaglabs_e2e.ui_testing.framework.errors import ElementTimeoutError
from swaglabs_e2e.ui_testing.framework.smart_locator import SmartLocator

from fakes import FakePage, fallback, primary


def test_all_combines_strategies_in_priority_order():
    page = FakePage()
    locator = SmartLocator(page).all("username_input")
    assert locator.selectors == [primary("username_input"), fallback("username_input")]


@pytest.mark.asyncio
async def test_primary_selector_preferred():
    page = FakePage({primary("username_input"): [""], fallback("username_input"): [""]})
    smart = SmartLocator(page, timeout=50)

    locator = await smart.locate("username_input")

    assert locator.selectors == [primary("username_input")]
    assert smart.fallbacks_used == {}
    assert "No maintenance needed" in smart.get_health_report()


@pytest.mark.asyncio
async def test_fallback_used_when_primary_missing():
    page = FakePage({fallback("username_input"): [""]})
    smart = SmartLocator(page, timeout=50)

    locator = await smart.locate("username_input")

    assert locator.selectors == [fallback("username_input")]
    health = smart.fallbacks_used["username_input"]
    assert health.used_fallback
    assert health.fallback_name == "fallback_1"
    report = smart.get_health_report()
    assert primary("username_input") in report
    assert fallback("username_input") in report


@pytest.mark.asyncio
async def test_no_strategy_matches():
    smart = SmartLocator(FakePage(), timeout=50)

    with pytest.raises(ElementTimeoutError) as exc:
        await smart.locate("login_button")

    assert exc.value.element_name == "login_button"
    assert exc.value.timeout_ms == 50
    assert primary("login_button") in str(exc.value)
    assert fallback("login_button") in str(exc.value)


@pytest.mark.asyncio
async def test_is_visible_tolerates_absence():
    smart = SmartLocator(FakePage({primary("login_error"): ["Epic sadface"]}), timeout=50)
    assert await smart.is_visible("login_error", timeout=50)
    assert not await smart.is_visible("cart_badge", timeout=50)


@pytest.mark.asyncio
async def test_get_text_is_stripped():
    smart = SmartLocator(FakePage({fallback("page_title"): ["  Products \n"]}), timeout=50)
    assert await smart.get_text("page_title") == "Products"


def test_unknown_element():
    with pytest.raises(KeyError, match="No locators defined"):
        SmartLocator(FakePage()).all("warp_drive")
