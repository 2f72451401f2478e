"""
Browser-free stand-ins for Playwright pages used by the unit tests.

FakePage knows which selectors currently match and what text each match
carries; FakeLocator implements the subset of the Locator API the
framework calls.
"""

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from swaglabs_e2e.ui_testing.framework.smart_locator import SmartLocator


def primary(element_name):
    return SmartLocator.LOCATORS[element_name]["primary"]


def fallback(element_name):
    return SmartLocator.LOCATORS[element_name]["fallback_1"]


class FakeLocator:
    def __init__(self, page, selectors):
        self.page = page
        self.selectors = selectors

    @property
    def first(self):
        return self

    def or_(self, other):
        return FakeLocator(self.page, self.selectors + other.selectors)

    def _matches(self):
        return [(s, text) for s in self.selectors for text in self.page.elements.get(s, [])]

    async def count(self):
        return len(self._matches())

    async def wait_for(self, state="visible", timeout=None):
        present = bool(self._matches())
        if present != (state in ("visible", "attached")):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selectors}")

    async def text_content(self):
        return self._matches()[0][1]

    async def input_value(self):
        return self.page.values.get(self._matches()[0][0], "")

    async def is_enabled(self):
        return True

    async def fill(self, value):
        selector = self._matches()[0][0]
        self.page.values[selector] = value
        self.page.actions.append(("fill", selector))

    async def click(self, **kwargs):
        selector = self._matches()[0][0]
        self.page.actions.append(("click", selector))
        hook = self.page.on_click.get(selector)
        if hook:
            hook(self.page)


class FakePage:
    def __init__(self, elements=None, url="https://www.saucedemo.com/"):
        self.elements = {k: list(v) for k, v in (elements or {}).items()}
        self.url = url
        self.values = {}
        self.actions = []
        self.on_click = {}

    def locator(self, selector):
        return FakeLocator(self, [part.strip() for part in selector.split(",")])

    def show(self, selector, text=""):
        self.elements[selector] = [text]

    def hide(self, selector):
        self.elements.pop(selector, None)
