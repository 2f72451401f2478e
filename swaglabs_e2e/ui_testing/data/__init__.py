"""
================================================================================
Test Data
================================================================================

Immutable datasets, record types and expected-value helpers.

Author: Automation Team
License: MIT
================================================================================
"""

from .catalog import (
    PRODUCT_CATALOG,
    SORT_LABELS,
    data_driven,
    dataset_names,
    expected_names,
    get_dataset,
    parse_price,
    products_total,
    sort_products,
)
from .models import CartLineItem, Product

__all__ = [
    "CartLineItem",
    "PRODUCT_CATALOG",
    "Product",
    "SORT_LABELS",
    "data_driven",
    "dataset_names",
    "expected_names",
    "get_dataset",
    "parse_price",
    "products_total",
    "sort_products",
]
