import math

import pytest

from cafe.errors.exceptions import ValidationError
from cafe.lib.pricing import (
    calculate_delivery_charge,
    calculate_totals,
    clean_item_title,
    parse_price,
    round_money,
    to_paise,
)


def test_delivery_under_threshold_adds_charge():
    totals = calculate_totals([{"price": "₹200", "quantity": 2}], "Delivery")
    assert totals == {"sub_total": 400.0, "gst_amount": 20.0, "delivery_charge": 20, "total": 440.0}


def test_dine_in_never_charges_delivery():
    totals = calculate_totals([{"price": "₹200", "quantity": 2}], "Dine-in")
    assert totals["delivery_charge"] == 0
    assert totals["total"] == 420.0


def test_free_delivery_at_threshold():
    totals = calculate_totals([{"price": 250, "quantity": 2}], "Delivery")
    assert totals["sub_total"] == 500.0
    assert totals["delivery_charge"] == 0
    assert totals["total"] == 525.0


def test_subtotal_below_free_delivery():
    totals = calculate_totals([{"price": 450, "quantity": 1}], "Delivery")
    assert totals == {"sub_total": 450.0, "gst_amount": 22.5, "delivery_charge": 20, "total": 492.5}


def test_subtotal_above_free_delivery():
    totals = calculate_totals([{"price": 600, "quantity": 1}], "Delivery")
    assert totals == {"sub_total": 600.0, "gst_amount": 30.0, "delivery_charge": 0, "total": 630.0}


def test_prefixed_prices_are_billed_in_full():
    items = [{"price": "Rs. 200", "quantity": 1}, {"price": "₹100", "quantity": 1}]
    totals = calculate_totals(items, "Dine-in")
    assert totals["sub_total"] == 300.0
    assert totals["total"] == 315.0


def test_gst_is_rounded_half_up():
    totals = calculate_totals([{"price": "Rs. 99.50", "quantity": 1}], "Dine-in")
    # 4.975 rounds up
    assert totals["gst_amount"] == 4.98
    assert totals["total"] == 104.48


@pytest.mark.parametrize(
    "items,order_type",
    [
        ([], "Delivery"),
        ([{"price": "free", "quantity": 1}], "Delivery"),
        ([{"price": 0, "quantity": 3}], "Dine-in"),
        ([{"price": float("inf"), "quantity": 1}], "Dine-in"),
    ],
)
def test_unbillable_carts_are_rejected(items, order_type):
    with pytest.raises(ValidationError) as exc:
        calculate_totals(items, order_type)
    assert exc.value.message == "Invalid total amount calculated."


def test_breakdown_always_adds_up():
    carts = [
        [{"price": "₹120", "quantity": 1}],
        [{"price": "₹95.50", "quantity": 3}, {"price": 40, "quantity": 1}],
        [{"price": "499", "quantity": 1}],
        [{"price": "₹180", "quantity": 4}],
    ]
    for items in carts:
        for order_type in ("Delivery", "Dine-in"):
            totals = calculate_totals(items, order_type)
            assert totals["gst_amount"] == round_money(totals["sub_total"] * 0.05)
            assert math.isclose(
                totals["total"],
                totals["sub_total"] + totals["gst_amount"] + totals["delivery_charge"],
                abs_tol=0.01,
            )
            assert totals["delivery_charge"] == calculate_delivery_charge(totals["sub_total"], order_type)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("₹120", 120.0),
        ("Rs. 99.50", 99.5),
        ("Rs. 200", 200.0),
        ("₹1,250.00", 1250.0),
        (75, 75.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


def test_extra_cheese_addons_share_one_product():
    assert clean_item_title("Extra Cheese (Margherita)") == "Extra Cheese"
    assert clean_item_title("Margherita") == "Margherita"


def test_to_paise():
    assert to_paise(440) == 44000
    assert to_paise(104.48) == 10448
