from unittest import mock

import pytest
import requests
from razorpay.errors import BadRequestError

from cafe.errors.exceptions import GatewayError
from cafe.third_parties import email as email_module
from cafe.third_parties import sms as sms_module
from cafe.third_parties.email import Mailer
from cafe.third_parties.razorpay_gateway import RazorpayGateway
from cafe.third_parties.sms import SmsClient


def make_gateway():
    client = mock.Mock()
    return RazorpayGateway("rzp_key", "rzp_secret", timeout=7, client=client), client


def test_gateway_create_order_passes_timeout():
    gateway, client = make_gateway()
    client.order.create.return_value = {"id": "order_1", "amount": 44000}

    assert gateway.create_order(44000, "INR", "receipt_order_1")["id"] == "order_1"
    payload = client.order.create.call_args.args[0]
    assert payload["amount"] == 44000
    assert payload["payment_capture"] == 1
    assert client.order.create.call_args.kwargs["timeout"] == 7


def test_gateway_refund_payload():
    gateway, client = make_gateway()
    client.payment.refund.return_value = {"id": "rfnd_1"}

    gateway.refund("pay_1", 44000, notes={"order_id": "1"})
    payment_id, payload = client.payment.refund.call_args.args
    assert payment_id == "pay_1"
    assert payload == {"amount": 44000, "speed": "normal", "notes": {"order_id": "1"}}


@pytest.mark.parametrize(
    "error", [requests.Timeout("timed out"), BadRequestError("The amount is invalid")]
)
def test_gateway_failures_become_gateway_errors(error):
    gateway, client = make_gateway()
    client.payment.fetch.side_effect = error

    with pytest.raises(GatewayError) as exc:
        gateway.fetch_payment("pay_1")
    assert exc.value.status_code == 502


def test_sms_client_posts_to_provider(monkeypatch):
    post = mock.Mock()
    monkeypatch.setattr(sms_module.requests, "post", post)
    client = SmsClient("https://sms.example.com/send", "key-1", sender_id="KLBNKA", timeout=5)

    assert client.send("9800000001", "hello") is True
    kwargs = post.call_args.kwargs
    assert kwargs["headers"] == {"authorization": "key-1"}
    assert kwargs["json"]["numbers"] == "9800000001"
    assert kwargs["timeout"] == 5
    post.return_value.raise_for_status.assert_called_once()


def test_sms_client_skips_without_key_or_number(monkeypatch):
    post = mock.Mock()
    monkeypatch.setattr(sms_module.requests, "post", post)

    assert SmsClient("https://sms.example.com/send", None).send("9800000001", "hello") is False
    assert SmsClient("https://sms.example.com/send", "key-1").send("", "hello") is False
    post.assert_not_called()


def test_mailer_sends_html_with_attachment(monkeypatch):
    smtp = mock.MagicMock()
    monkeypatch.setattr(email_module.smtplib, "SMTP", smtp)
    mailer = Mailer("smtp.example.com", 587, "cafe@example.com", "pw", timeout=3)

    sent = mailer.send(
        "asha@example.com",
        "Order Update",
        "Order status: Confirmed",
        "order_status.html",
        {"short_id": "000001", "status": "Confirmed", "tracking_link": "https://x"},
        [("invoice-1.pdf", b"%PDF-1.4", "application/pdf")],
    )
    assert sent is True
    smtp.assert_called_once_with("smtp.example.com", 587, timeout=3)
    server = smtp.return_value
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("cafe@example.com", "pw")
    message = server.sendmail.call_args.args[2]
    assert "invoice-1.pdf" in message
    server.quit.assert_called_once()


def test_mailer_transport_errors_propagate(monkeypatch):
    smtp = mock.MagicMock()
    smtp.return_value.sendmail.side_effect = OSError("connection reset")
    monkeypatch.setattr(email_module.smtplib, "SMTP", smtp)
    mailer = Mailer("smtp.example.com", 587, "cafe@example.com", "pw")

    with pytest.raises(OSError):
        mailer.send("asha@example.com", "s", "t", "order_status.html", {})
    smtp.return_value.quit.assert_called_once()
