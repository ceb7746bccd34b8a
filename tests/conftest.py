import hashlib
import hmac
from datetime import datetime

import fakeredis
import pytest

from cafe import create_app
from cafe.config import TestingConfig
from cafe.errors.exceptions import GatewayError
from cafe.extensions import db, redis_client
from cafe.models.order import Order
from cafe.models.product import Product
from cafe.services.auth import AuthService
from cafe.services.cart import CartService


class FakeGateway:
    def __init__(self):
        self.orders = []
        self.payments = {}
        self.refunds = []
        self.fail_refund = False

    def create_order(self, amount_paise, currency, receipt, notes=None):
        order = {
            "id": f"order_test{len(self.orders) + 1}",
            "amount": amount_paise,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }
        self.orders.append(order)
        return order

    def capture(self, payment_id, amount_paise, method="upi", **extra):
        self.payments[payment_id] = {
            "id": payment_id,
            "status": "captured",
            "amount": amount_paise,
            "method": method,
            **extra,
        }

    def fetch_payment(self, payment_id):
        return self.payments.get(payment_id, {"id": payment_id, "status": "failed", "amount": 0})

    def refund(self, payment_id, amount_paise, speed="normal", notes=None):
        self.refunds.append({"payment_id": payment_id, "amount": amount_paise, "notes": notes})
        if self.fail_refund:
            raise GatewayError("Refund rejected")
        return {"id": f"rfnd_test{len(self.refunds)}"}


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.error = None

    def send(self, to_email, subject, text, template_name, context=None, attachments=None):
        if self.error:
            raise self.error
        self.sent.append(
            {
                "to": to_email,
                "subject": subject,
                "template": template_name,
                "context": context or {},
                "attachments": attachments or [],
            }
        )
        return True


class FakeSms:
    def __init__(self):
        self.sent = []

    def send(self, mobile, message):
        self.sent.append((mobile, message))
        return True


def sign(gateway_order_id, payment_id, secret=TestingConfig.RAZORPAY_KEY_SECRET):
    return hmac.new(
        secret.encode("utf-8"),
        f"{gateway_order_id}|{payment_id}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    app.extensions["payment_gateway"] = FakeGateway()
    app.extensions["mailer"] = FakeMailer()
    app.extensions["sms_client"] = FakeSms()
    redis_client._redis_client = fakeredis.FakeStrictRedis()
    redis_client.flushall()

    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway(app):
    return app.extensions["payment_gateway"]


@pytest.fixture
def mailer(app):
    return app.extensions["mailer"]


@pytest.fixture
def sms(app):
    return app.extensions["sms_client"]


@pytest.fixture
def user(app):
    return AuthService.register("Asha Roy", "asha@example.com", "secret123", mobile="9800000001")


@pytest.fixture
def other_user(app):
    return AuthService.register("Ravi Sen", "ravi@example.com", "secret123", mobile="9800000002")


@pytest.fixture
def user_headers(user):
    return auth_header(AuthService.generate_token(user))


@pytest.fixture
def other_headers(other_user):
    return auth_header(AuthService.generate_token(other_user))


@pytest.fixture
def admin_headers(app):
    return auth_header(AuthService.generate_admin_token())


@pytest.fixture
def menu(app):
    products = [
        Product(name="Margherita", category="Pizza", price=200, is_in_stock=True),
        Product(name="Cold Coffee", category="Drinks", price=120, is_in_stock=True),
        Product(name="Extra Cheese", category="Add-ons", price=40, is_in_stock=False),
    ]
    db.session.add_all(products)
    db.session.commit()
    return products


@pytest.fixture
def filled_cart(user):
    CartService.add_item(user, "Margherita", "₹200", quantity=2)
    return user


def make_order(user, status="Pending", total=440, payment_id=None, payment_method="Online",
               order_type="Delivery", created_at=None, **fields):
    order = Order(
        user_id=user.id,
        total_amount=total,
        status=status,
        payment_id=payment_id,
        payment_method=payment_method,
        order_type=order_type,
        delivery_address="12 Park Street" if order_type == "Delivery" else None,
        table_number="4" if order_type == "Dine-in" else None,
        **fields,
    )
    order.item_list = [{"title": "Margherita", "price": "₹200", "image": "", "quantity": 2}]
    if created_at:
        order.created_at = created_at
    db.session.add(order)
    db.session.commit()
    return order


@pytest.fixture
def order_factory(user):
    def factory(**kwargs):
        owner = kwargs.pop("owner", user)
        return make_order(owner, **kwargs)

    return factory


@pytest.fixture
def march():
    return datetime(2024, 3, 15, 10, 30)
