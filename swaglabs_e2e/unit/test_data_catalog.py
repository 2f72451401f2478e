from decimal import Decimal

import pytest

from swaglabs_e2e.ui_testing.data.catalog import (
    PRODUCT_CATALOG,
    data_driven,
    dataset_names,
    expected_names,
    get_dataset,
    parse_price,
    products_total,
    sort_products,
)
from swaglabs_e2e.ui_testing.data.models import Product


EXPECTED_ARITY = {
    "login_data": 5,
    "invalid_login_data": 3,
    "product_data": 3,
    "checkout_data": 4,
    "invalid_checkout_data": 4,
    "sorting_data": 2,
    "multiple_products_data": 2,
    "e2e_data": 6,
    "performance_data": 2,
}


def test_every_dataset_is_known():
    assert dataset_names() == sorted(EXPECTED_ARITY)


@pytest.mark.parametrize("name", sorted(EXPECTED_ARITY))
def test_dataset_rows_have_uniform_arity(name):
    rows = get_dataset(name)
    assert rows
    assert {len(row) for row in rows} == {EXPECTED_ARITY[name]}
    assert len({type(row) for row in rows}) == 1


@pytest.mark.parametrize("name", sorted(EXPECTED_ARITY))
def test_dataset_is_immutable_and_reiterable(name):
    rows = get_dataset(name)
    assert isinstance(rows, tuple)
    assert list(rows) == list(rows)
    assert get_dataset(name) == rows
    with pytest.raises(AttributeError):
        rows[0].__setattr__(rows[0]._fields[0], "changed")


def test_unknown_dataset():
    with pytest.raises(KeyError, match="Available"):
        get_dataset("no_such_data")


def test_dataset_contents():
    assert get_dataset("checkout_data")[0][:3] == ("Emmanuel", "Arhu", "233")
    assert get_dataset("login_data")[1].should_succeed is False
    assert [r.sort_order for r in get_dataset("sorting_data")] == ["az", "za", "lohi", "hilo"]
    for row in get_dataset("multiple_products_data"):
        assert len(row.product_names) == row.expected_count
        assert set(row.product_names) <= set(PRODUCT_CATALOG)


def test_data_driven_uses_record_fields_as_argnames():
    mark = data_driven("sorting_data").mark
    argnames, argvalues = mark.args
    assert list(argnames) == ["sort_order", "label"]
    assert argvalues[0] == ("az", "Name (A to Z)")
    assert len(mark.kwargs["ids"]) == len(argvalues)
    assert len(set(mark.kwargs["ids"])) == len(argvalues)


def test_data_driven_ids_handle_empty_and_tuple_fields():
    ids = data_driven("invalid_login_data").mark.kwargs["ids"]
    assert ids[2] == "2-empty"
    ids = data_driven("multiple_products_data").mark.kwargs["ids"]
    assert ids[0] == "0-2_items"


def test_catalog_has_six_products_in_listing_order():
    assert len(PRODUCT_CATALOG) == 6
    assert [p.position for p in PRODUCT_CATALOG.values()] == list(range(6))
    assert PRODUCT_CATALOG["Sauce Labs Backpack"].price == Decimal("29.99")
    assert PRODUCT_CATALOG["Sauce Labs Backpack"].display_price == "$29.99"


@pytest.mark.parametrize("text, expected", [
    ("$29.99", Decimal("29.99")),
    ("Item total: $39.98", Decimal("39.98")),
    ("Tax: $3.20", Decimal("3.20")),
    ("Total: $ 43.18", Decimal("43.18")),
    ("7", Decimal("7")),
])
def test_parse_price(text, expected):
    assert parse_price(text) == expected


def test_parse_price_without_amount():
    with pytest.raises(ValueError):
        parse_price("Free")


def test_sort_by_name():
    assert expected_names("az")[0] == "Sauce Labs Backpack"
    assert expected_names("za")[0] == "Test.allTheThings() T-Shirt (Red)"
    names = [n.lower() for n in expected_names("az")]
    assert names == sorted(names)


def test_price_sort_is_stable_for_ties():
    lohi = expected_names("lohi")
    assert lohi[0] == "Sauce Labs Onesie"
    assert lohi[-1] == "Sauce Labs Fleece Jacket"
    # both cost 15.99; catalog order is kept in either direction
    tie = ["Sauce Labs Bolt T-Shirt", "Test.allTheThings() T-Shirt (Red)"]
    assert [n for n in lohi if n in tie] == tie
    assert [n for n in expected_names("hilo") if n in tie] == tie


def test_sort_products_keeps_input_order_for_equal_keys():
    a = Product("A", Decimal("1.00"), "", 0)
    b = Product("B", Decimal("1.00"), "", 1)
    c = Product("C", Decimal("0.50"), "", 2)
    assert sort_products([a, b, c], "lohi") == [c, a, b]
    assert sort_products([a, b, c], "hilo") == [a, b, c]


def test_sort_products_rejects_unknown_order():
    with pytest.raises(ValueError):
        sort_products(PRODUCT_CATALOG.values(), "random")


def test_products_total():
    assert products_total(["Sauce Labs Backpack", "Sauce Labs Bike Light"]) == Decimal("39.98")
    assert products_total([]) == Decimal("0")
