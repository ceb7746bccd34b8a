import hashlib
import hmac
from io import BytesIO

from flask import current_app
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

import const
from cafe.lib.pricing import parse_price
from cafe.lib.reconcile import reconcile_order
from cafe.lib.string import truncate


def _money(value):
    return f"Rs. {float(value or 0):.2f}"


def generate_invoice_pdf(order):
    """Render an order invoice and return the PDF bytes."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    right = width - 50

    c.setFont("Helvetica-Bold", 20)
    c.drawCentredString(width / 2, height - 60, f"{const.CAFE_NAME.upper()} - INVOICE")

    c.setFont("Helvetica", 10)
    c.drawRightString(right, height - 85, f"{const.CAFE_NAME} Restaurant")
    c.drawRightString(right, height - 98, const.CAFE_ADDRESS)

    user = order.user
    created = order.created_at.strftime("%d/%m/%Y") if order.created_at else "-"
    c.setFont("Helvetica", 12)
    y = height - 130
    for line in (
        f"Order ID: {order.id}",
        f"Date: {created}",
        f"Customer: {user.name if user else 'Guest'}",
        f"Mobile: {(user.mobile if user else None) or 'N/A'}",
        "",
        f"Delivery Address: {order.delivery_address or 'Dine-in'}",
    ):
        c.drawString(50, y, line)
        y -= 16
    if order.table_number:
        c.drawString(50, y, f"Table: {order.table_number}")
        y -= 16

    y -= 14
    c.setFont("Helvetica-Bold", 12)
    c.drawString(50, y, "Item")
    c.drawString(300, y, "Qty")
    c.drawRightString(right, y, "Price")
    y -= 8
    c.line(50, y, right, y)
    y -= 16

    c.setFont("Helvetica", 12)
    for item in order.item_list:
        c.drawString(50, y, truncate(item.get("title"), const.INVOICE_TITLE_MAX))
        c.drawString(300, y, str(item.get("quantity") or 1))
        c.drawRightString(right, y, _money(parse_price(item.get("price"))))
        y -= 20
        if y < 140:
            c.showPage()
            c.setFont("Helvetica", 12)
            y = height - 60

    c.line(50, y + 10, right, y + 10)
    y -= 20

    breakdown = reconcile_order(order)
    c.setFont("Helvetica", 11)
    c.drawString(350, y, "Subtotal:")
    c.drawRightString(right, y, _money(breakdown["sub_total"]))
    y -= 20
    c.drawString(350, y, "GST (5%):")
    c.drawRightString(right, y, _money(breakdown["gst_amount"]))
    y -= 20
    c.drawString(350, y, "Delivery:")
    c.drawRightString(
        right,
        y,
        _money(breakdown["delivery_charge"]) if breakdown["delivery_charge"] else "FREE",
    )

    y -= 25
    c.setFont("Helvetica-Bold", 14)
    c.drawString(300, y, "Grand Total:")
    c.drawRightString(right, y, _money(order.total_amount))

    c.setFont("Helvetica", 10)
    c.drawCentredString(width / 2, 60, "Thank you for dining with us!")
    c.save()

    return buffer.getvalue()


def invoice_filename(order):
    return f"invoice-{order.id}.pdf"


def invoice_signature(order_id):
    """Signs the public invoice link so order ids cannot be walked."""
    return hmac.new(
        bytes(current_app.config["SECRET_KEY"], "utf-8"),
        bytes(f"invoice|{order_id}", "utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_invoice_signature(order_id, signature):
    return hmac.compare_digest(invoice_signature(order_id), str(signature or ""))


def invoice_link_path(order_id):
    return f"{const.INVOICE_PATH}?type=invoice&order_id={order_id}&sig={invoice_signature(order_id)}"
