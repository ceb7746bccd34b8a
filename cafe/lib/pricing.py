import math
import re
from decimal import Decimal, ROUND_HALF_UP

import const
from cafe.enums.order import OrderType
from cafe.errors.exceptions import ValidationError

_PRICE_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def round_money(value):
    """Round half-up to paise, the way the gateway and the invoice print it."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def parse_price(price):
    """Menu prices arrive as display strings ("₹120", "Rs. 99.50") or numbers."""
    if isinstance(price, bool):
        return 0.0
    if isinstance(price, (int, float)):
        return float(price) if math.isfinite(price) else 0.0
    if not price:
        return 0.0
    match = _PRICE_NUMBER.search(str(price).replace(",", ""))
    if not match:
        return 0.0
    value = float(match.group())
    return value if math.isfinite(value) else 0.0


def clean_item_title(title):
    # add-ons are stored per dish, e.g. "Extra Cheese (Margherita)"
    if title and title.startswith("Extra Cheese ("):
        return "Extra Cheese"
    return title


def calculate_delivery_charge(sub_total, order_type):
    if order_type == OrderType.DELIVERY.value and sub_total < const.FREE_DELIVERY_THRESHOLD:
        return const.DELIVERY_CHARGE
    return 0


def calculate_totals(items, order_type):
    """Compute the financial breakdown of a cart.

    ``items`` is a sequence of mappings with ``price`` and ``quantity``.
    Returns a dict with ``sub_total``, ``gst_amount``, ``delivery_charge`` and
    ``total``. Raises ``ValidationError`` when the total is not a positive
    finite number.
    """
    sub_total = 0.0
    for item in items or []:
        quantity = item.get("quantity", 1) or 0
        sub_total += parse_price(item.get("price")) * int(quantity)

    sub_total = round_money(sub_total) if math.isfinite(sub_total) else sub_total
    gst_amount = round_money(sub_total * const.GST_RATE) if math.isfinite(sub_total) else sub_total
    delivery_charge = calculate_delivery_charge(sub_total, order_type)
    total = sub_total + gst_amount + delivery_charge

    # a delivery charge alone does not make an empty or zero-priced cart billable
    if not math.isfinite(total) or total <= 0 or sub_total <= 0:
        raise ValidationError("Invalid total amount calculated.")

    return {
        "sub_total": sub_total,
        "gst_amount": gst_amount,
        "delivery_charge": delivery_charge,
        "total": round_money(total),
    }


def to_paise(amount):
    return int(round_money(amount * const.PAISE_PER_RUPEE))
