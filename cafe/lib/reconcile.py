import const
from cafe.enums.order import OrderType
from cafe.lib.pricing import round_money

GST_FACTOR = 1 + const.GST_RATE


def _missing(value):
    return value is None


def reconcile_financials(total, order_type, sub_total=None, gst_amount=None, delivery_charge=None):
    """Recover a display breakdown for orders saved before the financial
    columns existed. The result is for reports and invoices only and must
    never be written back to the order.
    """
    total = float(total or 0)
    assumed_delivery = None

    if _missing(sub_total):
        assumed_delivery = 0
        if (
            order_type == OrderType.DELIVERY.value
            and (total - const.DELIVERY_CHARGE) / GST_FACTOR < const.FREE_DELIVERY_THRESHOLD
        ):
            assumed_delivery = const.DELIVERY_CHARGE
        sub_total = (total - assumed_delivery) / GST_FACTOR

    if _missing(gst_amount):
        known_delivery = delivery_charge if not _missing(delivery_charge) else assumed_delivery
        if known_delivery is None:
            gst_amount = round_money(sub_total * const.GST_RATE)
        else:
            gst_amount = total - sub_total - known_delivery

    if _missing(delivery_charge):
        gap = total - sub_total - gst_amount
        delivery_charge = const.DELIVERY_CHARGE if abs(gap - const.DELIVERY_CHARGE) < 1 else 0

    return {
        "sub_total": round_money(sub_total),
        "gst_amount": round_money(gst_amount),
        "delivery_charge": round_money(delivery_charge),
        "total": round_money(total),
    }


def reconcile_order(order):
    return reconcile_financials(
        order.total_amount,
        order.order_type,
        sub_total=order.sub_total,
        gst_amount=order.gst_amount,
        delivery_charge=order.delivery_charge,
    )
