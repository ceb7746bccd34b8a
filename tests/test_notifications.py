from cafe.lib.string import format_inr, short_order_id
from cafe.makers.invoice import invoice_link_path
from cafe.tasks.notification_tasks import cancelled_email, placed_email, sms_text
from cafe.third_parties.email import render_template


def test_sms_text_per_event(app, order_factory):
    order = order_factory(payment_id="pay_1", total=440)
    short_id = short_order_id(order.id)

    assert sms_text(order, "placed").startswith(f"Klubnika: Order #{short_id} confirmed. Amount Rs.440")
    assert sms_text(order, "placed").endswith(invoice_link_path(order.id))
    order.status = "Preparing"
    assert "is now Preparing" in sms_text(order, "status")
    assert "Rate us:" in sms_text(order, "delivered")
    assert sms_text(order, "cancelled") is None


def test_placed_email_uses_reconciled_breakdown(app, order_factory):
    order = order_factory(payment_method="Cash on Delivery", total=630)

    subject, _, template_name, context, attachments = placed_email(order)
    assert subject == f"Order Placed #{short_order_id(order.id)} (Cash on Delivery)"
    assert template_name == "order_placed.html"
    assert context["sub_total"] == "₹600"
    assert context["has_delivery_charge"] is False
    assert attachments[0][1].startswith(b"%PDF")


def test_cancelled_email_mentions_refund_only_when_refunded(app, order_factory):
    order = order_factory(payment_id="pay_1")

    subject, *_ = cancelled_email(order, "Closed early", 440)
    assert subject.endswith("Refund Initiated")
    subject, _, _, context, _ = cancelled_email(order)
    assert not subject.endswith("Refund Initiated")
    assert context["reason"] == "Request by user/admin"


def test_templates_render(app):
    html = render_template(
        "order_status.html",
        {"customer_name": "Asha", "short_id": "000042", "status": "Preparing", "tracking_link": "https://x/my-orders"},
    )
    assert "000042" in html
    assert "Preparing" in html


def test_format_inr():
    assert format_inr(440) == "₹440"
    assert format_inr(23.81) == "₹23.81"
    assert format_inr(None) == "₹0"
