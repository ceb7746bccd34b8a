import hashlib
import hmac

import pytest

from cafe.errors.exceptions import InvalidSignatureError
from cafe.services.payment_services import PaymentService

SECRET = "rzp_test_secret"


def test_signature_is_hmac_sha256_of_order_and_payment():
    expected = hmac.new(
        SECRET.encode("utf-8"), b"order_ABC123|pay_XYZ789", hashlib.sha256
    ).hexdigest()
    assert PaymentService.compute_signature("order_ABC123", "pay_XYZ789", SECRET) == expected
    assert PaymentService.verify_signature("order_ABC123", "pay_XYZ789", expected, SECRET)


@pytest.mark.parametrize(
    "order_id,payment_id,secret",
    [
        ("order_ABC124", "pay_XYZ789", SECRET),
        ("order_ABC123", "pay_XYZ788", SECRET),
        ("order_ABC123", "pay_XYZ789", "another_secret"),
    ],
)
def test_any_change_breaks_the_signature(order_id, payment_id, secret):
    signature = PaymentService.compute_signature("order_ABC123", "pay_XYZ789", SECRET)
    with pytest.raises(InvalidSignatureError):
        PaymentService.verify_signature(order_id, payment_id, signature, secret)


def test_tampered_signature_is_rejected():
    signature = PaymentService.compute_signature("order_ABC123", "pay_XYZ789", SECRET)
    tampered = ("0" if signature[0] != "0" else "1") + signature[1:]
    with pytest.raises(InvalidSignatureError):
        PaymentService.verify_signature("order_ABC123", "pay_XYZ789", tampered, SECRET)
    with pytest.raises(InvalidSignatureError):
        PaymentService.verify_signature("order_ABC123", "pay_XYZ789", None, SECRET)


@pytest.mark.parametrize(
    "payment,label",
    [
        ({"method": "wallet", "wallet": "paytm"}, "Wallet (paytm)"),
        ({"method": "emi"}, "Pay Later / EMI"),
        ({"method": "card", "card": {"network": "Visa"}}, "Visa Card"),
        ({"method": "upi", "vpa": "asha@okaxis"}, "UPI (asha@okaxis)"),
        ({"method": "netbanking"}, "netbanking"),
        ({}, "Online"),
    ],
)
def test_payment_method_label(payment, label):
    assert PaymentService.payment_method_label(payment) == label
