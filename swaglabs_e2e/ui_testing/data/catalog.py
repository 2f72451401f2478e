"""
================================================================================
Test Data Catalog
================================================================================

Named, immutable datasets for data-driven tests, plus the fixed Swag Labs
product catalog and the helpers tests use to compute expected values.

    >>> get_dataset("sorting_data")[0]
    SortingRecord(sort_order='az', label='Name (A to Z)')

    @data_driven("invalid_checkout_data")
    async def test_validation(first_name, last_name, postal_code, expected_error): ...

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Iterable, List, Mapping, NamedTuple, Tuple

import pytest

from .models import (
    CheckoutRecord,
    EndToEndRecord,
    InvalidCheckoutRecord,
    InvalidLoginRecord,
    LoginRecord,
    MultipleProductsRecord,
    PerformanceRecord,
    Product,
    ProductRecord,
    SortingRecord,
)


# ================================================================================
# Application constants
# ================================================================================

VALID_PASSWORD = "secret_sauce"

LOCKED_OUT_ERROR = "Sorry, this user has been locked out."
INVALID_CREDENTIALS_ERROR = "Username and password do not match any user in this service"
USERNAME_REQUIRED_ERROR = "Username is required"
PASSWORD_REQUIRED_ERROR = "Password is required"

FIRST_NAME_REQUIRED_ERROR = "Error: First Name is required"
LAST_NAME_REQUIRED_ERROR = "Error: Last Name is required"
POSTAL_CODE_REQUIRED_ERROR = "Error: Postal Code is required"

ORDER_COMPLETE_HEADER = "Thank you for your order!"
ORDER_COMPLETE_TEXT = (
    "Your order has been dispatched, and will arrive just as fast as the pony can get there!"
)

SORT_LABELS: Mapping[str, str] = MappingProxyType({
    "az": "Name (A to Z)",
    "za": "Name (Z to A)",
    "lohi": "Price (low to high)",
    "hilo": "Price (high to low)",
})

_PRODUCTS: Tuple[Tuple[str, str, str], ...] = (
    ("Sauce Labs Backpack", "29.99",
     "carry.allTheThings() with the sleek, streamlined Sly Pack"),
    ("Sauce Labs Bike Light", "9.99",
     "A red light isn't the desired state in testing"),
    ("Sauce Labs Bolt T-Shirt", "15.99",
     "Get your testing superhero on with the Sauce Labs bolt T-shirt"),
    ("Sauce Labs Fleece Jacket", "49.99",
     "It's not every day that you come across a midweight quarter-zip fleece jacket"),
    ("Sauce Labs Onesie", "7.99",
     "Rib snap infant onesie for the junior automation engineer"),
    ("Test.allTheThings() T-Shirt (Red)", "15.99",
     "This classic Sauce Labs t-shirt is perfect to wear when cozying"),
)

# The six products in default listing order, keyed by name
PRODUCT_CATALOG: Mapping[str, Product] = MappingProxyType({
    name: Product(name=name, price=Decimal(price), description_part=desc, position=i)
    for i, (name, price, desc) in enumerate(_PRODUCTS)
})


# ================================================================================
# Datasets
# ================================================================================

_DATASETS: Mapping[str, Tuple[NamedTuple, ...]] = MappingProxyType({
    "login_data": (
        LoginRecord("standard_user", VALID_PASSWORD, "valid", True, "Standard User"),
        LoginRecord("locked_out_user", VALID_PASSWORD, "locked", False, "Locked User"),
        LoginRecord("problem_user", VALID_PASSWORD, "valid", True, "Problem User"),
        LoginRecord("performance_glitch_user", VALID_PASSWORD, "valid", True,
                    "Performance Glitch User"),
        LoginRecord("error_user", VALID_PASSWORD, "valid", True, "Error User"),
        LoginRecord("visual_user", VALID_PASSWORD, "valid", True, "Visual User"),
    ),
    "invalid_login_data": (
        InvalidLoginRecord("invalid_user", VALID_PASSWORD, INVALID_CREDENTIALS_ERROR),
        InvalidLoginRecord("standard_user", "invalid_password", INVALID_CREDENTIALS_ERROR),
        InvalidLoginRecord("", VALID_PASSWORD, USERNAME_REQUIRED_ERROR),
        InvalidLoginRecord("standard_user", "", PASSWORD_REQUIRED_ERROR),
        InvalidLoginRecord("", "", USERNAME_REQUIRED_ERROR),
    ),
    "product_data": tuple(
        ProductRecord(p.name, p.display_price, p.description_part)
        for p in PRODUCT_CATALOG.values()
    ),
    "checkout_data": (
        CheckoutRecord("Emmanuel", "Arhu", "233", "Ghana"),
        CheckoutRecord("John", "Doe", "12345", "USA"),
        CheckoutRecord("Jane", "Smith", "SW1A 1AA", "UK"),
        CheckoutRecord("Ahmed", "Hassan", "10001", "Egypt"),
        CheckoutRecord("Maria", "Garcia", "28001", "Spain"),
    ),
    "invalid_checkout_data": (
        InvalidCheckoutRecord("", "Doe", "12345", FIRST_NAME_REQUIRED_ERROR),
        InvalidCheckoutRecord("John", "", "12345", LAST_NAME_REQUIRED_ERROR),
        InvalidCheckoutRecord("John", "Doe", "", POSTAL_CODE_REQUIRED_ERROR),
        InvalidCheckoutRecord("", "", "", FIRST_NAME_REQUIRED_ERROR),
        InvalidCheckoutRecord("", "", "12345", FIRST_NAME_REQUIRED_ERROR),
    ),
    "sorting_data": tuple(
        SortingRecord(order, label) for order, label in SORT_LABELS.items()
    ),
    "multiple_products_data": (
        MultipleProductsRecord(("Sauce Labs Backpack", "Sauce Labs Bike Light"), 2),
        MultipleProductsRecord(
            ("Sauce Labs Bolt T-Shirt", "Sauce Labs Fleece Jacket", "Sauce Labs Onesie"), 3
        ),
        MultipleProductsRecord(("Test.allTheThings() T-Shirt (Red)",), 1),
        MultipleProductsRecord(
            ("Sauce Labs Backpack", "Sauce Labs Bike Light",
             "Sauce Labs Bolt T-Shirt", "Sauce Labs Fleece Jacket"), 4
        ),
    ),
    "e2e_data": (
        EndToEndRecord("standard_user", VALID_PASSWORD,
                       ("Sauce Labs Backpack", "Sauce Labs Bike Light"),
                       "Emmanuel", "Arhu", "233"),
        EndToEndRecord("standard_user", VALID_PASSWORD,
                       ("Sauce Labs Bolt T-Shirt",),
                       "John", "Doe", "12345"),
        EndToEndRecord("performance_glitch_user", VALID_PASSWORD,
                       ("Sauce Labs Fleece Jacket", "Sauce Labs Onesie"),
                       "Jane", "Smith", "SW1A 1AA"),
    ),
    "performance_data": (
        PerformanceRecord("standard_user", 5000),
        PerformanceRecord("performance_glitch_user", 10000),
        PerformanceRecord("problem_user", 5000),
    ),
})


def dataset_names() -> List[str]:
    return sorted(_DATASETS)


def get_dataset(name: str) -> Tuple[NamedTuple, ...]:
    """
    Return the named dataset.

    Pure and deterministic: the same tuple of immutable records on every
    call, safe to iterate any number of times.

    Raises:
        KeyError: unknown dataset name
    """
    try:
        return _DATASETS[name]
    except KeyError:
        raise KeyError(
            f"Unknown dataset '{name}'. Available: {', '.join(dataset_names())}"
        ) from None


def _record_id(index: int, record: NamedTuple) -> str:
    first = record[0]
    if isinstance(first, tuple):
        label = f"{len(first)}_items"
    else:
        label = re.sub(r"[^A-Za-z0-9_]+", "_", str(first)).strip("_") or "empty"
    return f"{index}-{label}"


def data_driven(name: str):
    """
    Parametrize a test with every record of dataset ``name``.

    The test's arguments are the record's field names, in order.

    Returns:
        A ``pytest.mark.parametrize`` decorator
    """
    records = get_dataset(name)
    argnames = list(type(records[0])._fields)
    return pytest.mark.parametrize(
        argnames,
        [tuple(record) for record in records],
        ids=[_record_id(i, record) for i, record in enumerate(records)],
    )


# ================================================================================
# Expected-value helpers
# ================================================================================

def parse_price(text: str) -> Decimal:
    """
    Parse a displayed amount such as "$29.99", "Item total: $39.98" or
    "Tax: $3.20" into a Decimal.

    Raises:
        ValueError: no amount in ``text``
    """
    match = re.search(r"\$?\s*(\d+(?:\.\d+)?)", text or "")
    if not match:
        raise ValueError(f"No price found in {text!r}")
    try:
        return Decimal(match.group(1))
    except InvalidOperation as e:
        raise ValueError(f"No price found in {text!r}") from e


def sort_products(products: Iterable[Product], sort_order: str) -> List[Product]:
    """
    Expected listing order for ``sort_order`` (az, za, lohi, hilo).

    Stable: products comparing equal keep their relative input order, for
    ascending and descending orders alike.
    """
    products = list(products)
    if sort_order == "az":
        return sorted(products, key=lambda p: p.name.lower())
    if sort_order == "za":
        return sorted(products, key=lambda p: p.name.lower(), reverse=True)
    if sort_order == "lohi":
        return sorted(products, key=lambda p: p.price)
    if sort_order == "hilo":
        return sorted(products, key=lambda p: p.price, reverse=True)
    raise ValueError(f"Unknown sort order '{sort_order}'. Use one of: {', '.join(SORT_LABELS)}")


def expected_names(sort_order: str) -> List[str]:
    return [p.name for p in sort_products(PRODUCT_CATALOG.values(), sort_order)]


def products_total(names: Iterable[str]) -> Decimal:
    """Sum of catalog prices for ``names``."""
    return sum((PRODUCT_CATALOG[name].price for name in names), Decimal("0"))


__all__ = [
    "PRODUCT_CATALOG",
    "SORT_LABELS",
    "data_driven",
    "dataset_names",
    "expected_names",
    "get_dataset",
    "parse_price",
    "products_total",
    "sort_products",
]
