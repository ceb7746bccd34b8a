from datetime import datetime

import pytz

import const


def short_order_id(order_id):
    return str(order_id).zfill(const.SHORT_ORDER_ID_LENGTH)[-const.SHORT_ORDER_ID_LENGTH:].upper()


def format_inr(amount):
    if amount is None:
        return "₹0"
    amount = float(amount)
    if amount.is_integer():
        return f"₹{int(amount)}"
    return f"₹{amount:.2f}"


def receipt_id():
    return f"receipt_order_{int(datetime.now().timestamp() * 1000)}"


def to_iso(value):
    if value is None:
        return None
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(pytz.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def truncate(text, length):
    if text and len(text) > length:
        return text[:length] + "..."
    return text or ""
