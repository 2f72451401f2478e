"""
Record types for the Swag Labs test data catalog.

Every dataset row is a NamedTuple, so rows are immutable and their field
names double as pytest parameter names.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple, Tuple


class LoginRecord(NamedTuple):
    username: str
    password: str
    user_type: str
    should_succeed: bool
    description: str


class InvalidLoginRecord(NamedTuple):
    username: str
    password: str
    expected_error: str


class ProductRecord(NamedTuple):
    name: str
    price: str
    description_part: str


class CheckoutRecord(NamedTuple):
    first_name: str
    last_name: str
    postal_code: str
    country: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class InvalidCheckoutRecord(NamedTuple):
    first_name: str
    last_name: str
    postal_code: str
    expected_error: str


class SortingRecord(NamedTuple):
    sort_order: str
    label: str


class MultipleProductsRecord(NamedTuple):
    product_names: Tuple[str, ...]
    expected_count: int


class EndToEndRecord(NamedTuple):
    username: str
    password: str
    product_names: Tuple[str, ...]
    first_name: str
    last_name: str
    postal_code: str


class PerformanceRecord(NamedTuple):
    username: str
    max_load_ms: int


@dataclass(frozen=True)
class Product:
    """A catalog product. ``position`` is its place in the default listing."""
    name: str
    price: Decimal
    description_part: str
    position: int

    @property
    def display_price(self) -> str:
        return f"${self.price:.2f}"


@dataclass(frozen=True)
class CartLineItem:
    """One row of the cart or checkout overview. Quantity is always 1."""
    name: str
    price: Decimal
    quantity: int = 1
    description: str = ""


__all__ = [
    "CartLineItem",
    "CheckoutRecord",
    "EndToEndRecord",
    "InvalidCheckoutRecord",
    "InvalidLoginRecord",
    "LoginRecord",
    "MultipleProductsRecord",
    "PerformanceRecord",
    "Product",
    "ProductRecord",
    "SortingRecord",
]
