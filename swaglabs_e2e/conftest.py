"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers the suite's markers, tags collected tests by location and adds the
run header.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "performance: Page load time checks"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free framework tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Login and logout"
    )
    config.addinivalue_line(
        "markers", "products: Product listing, sorting and details"
    )
    config.addinivalue_line(
        "markers", "cart: Shopping cart"
    )
    config.addinivalue_line(
        "markers", "checkout: Checkout flow"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add 'ui' to tests under ui_testing and 'unit' to tests under unit.
    """
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Swag Labs UI Automation Suite",
        "=" * 60,
        "",
    ]
