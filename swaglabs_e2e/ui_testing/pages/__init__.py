"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Swag Labs screens.

Each page class encapsulates:
    - Element locators (by name, see SmartLocator.LOCATORS)
    - Page-specific actions, returning the destination page object
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .products_page import ProductsPage
from .product_details_page import ProductDetailsPage
from .cart_page import CartPage
from .checkout_information_page import CheckoutInformationPage
from .checkout_overview_page import CheckoutOverviewPage
from .checkout_complete_page import CheckoutCompletePage

__all__ = [
    "LoginPage",
    "ProductsPage",
    "ProductDetailsPage",
    "CartPage",
    "CheckoutInformationPage",
    "CheckoutOverviewPage",
    "CheckoutCompletePage",
]
