import requests
from celery import shared_task
from flask import current_app

import const
from cafe.enums.order import NotificationKind, OrderStatus
from cafe.extensions import db
from cafe.lib.logger import order_logger
from cafe.lib.reconcile import reconcile_order
from cafe.lib.string import format_inr, short_order_id
from cafe.makers.invoice import generate_invoice_pdf, invoice_filename, invoice_link_path
from cafe.models.order import Order
from cafe.third_parties import sms

# smtplib and socket errors are OSError subclasses
RETRYABLE = (OSError, requests.RequestException)

TASK_OPTIONS = {
    "bind": True,
    "autoretry_for": RETRYABLE,
    "retry_backoff": True,
    "retry_jitter": True,
    "max_retries": const.NOTIFICATION_MAX_RETRIES,
    "acks_late": True,
}


def _link(path):
    return current_app.config["SITE_URL"].rstrip("/") + path


def _load_order(order_id):
    order = db.session.get(Order, order_id)
    if not order:
        order_logger(order_id).warning("Order vanished before notification")
    return order


def sms_text(order, kind):
    short_id = short_order_id(order.id)
    if kind == NotificationKind.PLACED.value:
        invoice_link = _link(invoice_link_path(order.id))
        return sms.bill_message(order.total_amount, short_id, invoice_link)
    if kind == NotificationKind.DELIVERED.value:
        return sms.delivered_message(short_id, _link(const.RATINGS_PATH))
    if kind == NotificationKind.STATUS.value:
        return sms.update_message(short_id, order.status, _link(const.TRACKING_PATH))
    return None


def placed_email(order):
    breakdown = reconcile_order(order)
    short_id = short_order_id(order.id)
    if order.is_online:
        subject = f"Total Amount Paid #{short_id}"
        text = f"Your order for {format_inr(order.total_amount)} is confirmed."
        headline = "Order Confirmed!"
    else:
        subject = f"Order Placed #{short_id} ({order.payment_method})"
        text = f"Your order #{short_id} is placed successfully."
        headline = "Order Received!"

    context = {
        "headline": headline,
        "short_id": short_id,
        "payment_id": order.payment_id,
        "payment_method": order.payment_method,
        "items": [
            {
                "title": item.get("title"),
                "quantity": item.get("quantity"),
                "price": item.get("price"),
            }
            for item in order.item_list
        ],
        "sub_total": format_inr(breakdown["sub_total"]),
        "gst_amount": format_inr(breakdown["gst_amount"]),
        "has_delivery_charge": breakdown["delivery_charge"] > 0,
        "delivery_charge": format_inr(breakdown["delivery_charge"]),
        "total": format_inr(order.total_amount),
    }
    try:
        attachments = [(invoice_filename(order), generate_invoice_pdf(order), "application/pdf")]
    except Exception as e:
        order_logger(order.id).error(f"Invoice PDF failed, sending email without it: {e}")
        attachments = []
    return subject, text, "order_placed.html", context, attachments


def status_email(order):
    short_id = short_order_id(order.id)
    return (
        f"Order Update: {order.status} #{short_id}",
        f"Order status: {order.status}",
        "order_status.html",
        {"short_id": short_id, "status": order.status, "tracking_link": _link(const.TRACKING_PATH)},
        [],
    )


def delivered_email(order):
    short_id = short_order_id(order.id)
    return (
        f"Order Delivered! #{short_id}",
        "Your order has been delivered.",
        "order_delivered.html",
        {"short_id": short_id, "rate_link": const.RATE_US_LINK},
        [],
    )


def cancelled_email(order, reason=None, refund_amount=None):
    short_id = short_order_id(order.id)
    if refund_amount:
        subject = f"Order Cancelled #{short_id} - Refund Initiated"
        text = "Your order has been cancelled and refund initiated."
    else:
        subject = f"Order Cancelled #{short_id}"
        text = "Your order has been cancelled."
    return (
        subject,
        text,
        "order_cancelled.html",
        {
            "short_id": short_id,
            "reason": reason or "Request by user/admin",
            "refund_amount": format_inr(refund_amount) if refund_amount else None,
        },
        [],
    )


@shared_task(name="cafe.send_order_sms", **TASK_OPTIONS)
def send_order_sms(self, order_id, kind):
    log = order_logger(order_id)
    order = _load_order(order_id)
    if not order or not order.user:
        return False

    message = sms_text(order, kind)
    if not message:
        return False
    try:
        return current_app.extensions["sms_client"].send(order.user.mobile, message)
    except RETRYABLE as e:
        log.error(f"SMS '{kind}' failed (attempt {self.request.retries + 1}): {e}")
        raise


@shared_task(name="cafe.send_order_email", **TASK_OPTIONS)
def send_order_email(self, order_id, kind, extra=None):
    log = order_logger(order_id)
    order = _load_order(order_id)
    if not order or not order.user:
        return False

    extra = extra or {}
    if kind == NotificationKind.PLACED.value:
        payload = placed_email(order)
    elif kind == NotificationKind.DELIVERED.value:
        payload = delivered_email(order)
    elif kind == NotificationKind.CANCELLED.value or order.status == OrderStatus.CANCELLED.value:
        payload = cancelled_email(order, extra.get("reason"), extra.get("refund_amount"))
    else:
        payload = status_email(order)

    subject, text, template_name, context, attachments = payload
    context["customer_name"] = order.user.name
    try:
        return current_app.extensions["mailer"].send(
            order.user.email, subject, text, template_name, context, attachments
        )
    except RETRYABLE as e:
        log.error(f"Email '{kind}' failed (attempt {self.request.retries + 1}): {e}")
        raise
