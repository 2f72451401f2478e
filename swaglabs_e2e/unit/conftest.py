from types import SimpleNamespace

import pytest

from swaglabs_e2e.ui_testing.framework.browser_manager import BrowserSettings

from fakes import FakePage


@pytest.fixture
def fake_session():
    """Build a session-like object around a FakePage with short timeouts."""
    def build(elements=None, url="https://www.saucedemo.com/"):
        page = FakePage(elements, url)
        settings = BrowserSettings(timeout_ms=50, base_url="https://www.saucedemo.com")
        return SimpleNamespace(page=page, settings=settings)
    return build
