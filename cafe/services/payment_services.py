import hashlib
import hmac
import traceback

from flask import current_app
from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError

import const
from cafe.enums.order import OrderType, RefundStatus
from cafe.errors.exceptions import (
    InvalidSignatureError,
    PaymentNotCapturedError,
    ValidationError,
)
from cafe.extensions import db, redis_client
from cafe.lib.logger import logger, order_logger
from cafe.lib.pricing import calculate_totals, round_money, to_paise
from cafe.lib.string import receipt_id
from cafe.models.refund import Refund
from cafe.services.cart import CartService
from cafe.services.notification import NotificationService
from cafe.services.order import OrderService, fulfilment_fields
from cafe.services.product import ProductService


class PaymentService:

    @staticmethod
    def gateway():
        return current_app.extensions["payment_gateway"]

    @staticmethod
    def compute_signature(gateway_order_id, payment_id, secret):
        message = f"{gateway_order_id}|{payment_id}"
        return hmac.new(
            bytes(secret, "utf-8"), bytes(message, "utf-8"), hashlib.sha256
        ).hexdigest()

    @staticmethod
    def verify_signature(gateway_order_id, payment_id, signature, secret):
        expected = PaymentService.compute_signature(gateway_order_id, payment_id, secret)
        if not hmac.compare_digest(expected, str(signature or "")):
            raise InvalidSignatureError()
        return True

    @staticmethod
    def payment_method_label(payment):
        method = payment.get("method")
        if method == "wallet":
            return f"Wallet ({payment.get('wallet')})"
        if method == "emi":
            return "Pay Later / EMI"
        if method == "card":
            card = payment.get("card") or {}
            return f"{card.get('network')} Card"
        if method == "upi":
            return f"UPI ({payment.get('vpa')})"
        return method or "Online"

    @staticmethod
    def cash_method_label(order_type):
        if order_type == OrderType.DINE_IN.value:
            return "Pay at Counter (Cash)"
        if order_type == OrderType.DELIVERY.value:
            return "Cash on Delivery"
        return "Cash"

    @staticmethod
    def checkout_items(user):
        items = CartService.get_items(user)
        if not items:
            raise ValidationError("Your cart is empty.")
        return items

    @staticmethod
    def create_payment_intent(user, order_type):
        order_type = order_type or OrderType.DELIVERY.value
        items = PaymentService.checkout_items(user)
        ProductService.ensure_in_stock(items)
        totals = calculate_totals(items, order_type)

        gateway_order = PaymentService.gateway().create_order(
            amount_paise=to_paise(totals["total"]),
            currency=const.CURRENCY,
            receipt=receipt_id(),
            notes={"user_id": str(user.id), "order_type": order_type},
        )
        logger.info(
            f"Gateway order {gateway_order.get('id')} for user {user.id}: {totals['total']}"
        )
        return gateway_order

    @staticmethod
    def _acquire_verify_lock(payment_id):
        try:
            return bool(
                redis_client.set(
                    f"cafe:verify:{payment_id}", 1, nx=True, ex=const.VERIFY_LOCK_SECONDS
                )
            )
        except RedisError as e:
            # the unique payment_id column still prevents a second order
            logger.warning(f"Verify lock unavailable for {payment_id}: {e}")
            return True

    @staticmethod
    def _release_verify_lock(payment_id):
        try:
            redis_client.delete(f"cafe:verify:{payment_id}")
        except RedisError as e:
            logger.warning(f"Could not release verify lock for {payment_id}: {e}")

    @staticmethod
    def verify_payment(user, gateway_order_id, payment_id, signature, order_type=None,
                       table_number=None, delivery_address=None, delivery_coords=None):
        """Verify a gateway payment and materialise the order.

        Returns ``(order, created)``; a repeated call for a payment that
        already produced an order returns that order with ``created=False``.
        """
        fulfilment = fulfilment_fields(order_type, table_number, delivery_address, delivery_coords)
        PaymentService.verify_signature(
            gateway_order_id,
            payment_id,
            signature,
            current_app.config["RAZORPAY_KEY_SECRET"],
        )

        existing = OrderService.find_by_payment_id(payment_id)
        if existing:
            logger.info(f"Payment {payment_id} already materialised as order {existing.id}")
            return existing, False

        if not PaymentService._acquire_verify_lock(payment_id):
            existing = OrderService.find_by_payment_id(payment_id)
            if existing:
                return existing, False
            raise ValidationError("Payment verification already in progress", status_code=409)

        try:
            payment = PaymentService.gateway().fetch_payment(payment_id)
            if payment.get("status") != "captured":
                raise PaymentNotCapturedError()

            items = PaymentService.checkout_items(user)
            totals = calculate_totals(items, fulfilment["order_type"])
            amount_paid = round_money(payment.get("amount", 0) / const.PAISE_PER_RUPEE)
            if abs(amount_paid - totals["total"]) >= 0.01:
                logger.warning(
                    f"Payment {payment_id} captured {amount_paid}, cart totals {totals['total']}"
                )

            try:
                order = OrderService.create_order(
                    user,
                    items,
                    totals,
                    fulfilment,
                    payment_method=PaymentService.payment_method_label(payment),
                    total_amount=amount_paid,
                    payment_id=payment_id,
                    gateway_order_id=gateway_order_id,
                )
            except IntegrityError:
                db.session.rollback()
                existing = OrderService.find_by_payment_id(payment_id)
                if existing:
                    return existing, False
                raise
        finally:
            PaymentService._release_verify_lock(payment_id)

        NotificationService.order_placed(order)
        return order, True

    @staticmethod
    def create_cash_order(user, order_type=None, table_number=None, delivery_address=None,
                          delivery_coords=None):
        fulfilment = fulfilment_fields(order_type, table_number, delivery_address, delivery_coords)
        items = PaymentService.checkout_items(user)
        ProductService.ensure_in_stock(items)
        totals = calculate_totals(items, fulfilment["order_type"])

        order = OrderService.create_order(
            user,
            items,
            totals,
            fulfilment,
            payment_method=PaymentService.cash_method_label(fulfilment["order_type"]),
        )
        NotificationService.order_placed(order)
        return order

    @staticmethod
    def refund_order(order, reason=None):
        """One refund attempt for the full order total. Never raises; the
        outcome is recorded in ``refunds`` and the log."""
        log = order_logger(order.id)
        refund = Refund(
            order_id=order.id,
            payment_id=order.payment_id,
            amount=order.total_amount,
            reason=reason,
        )
        try:
            result = PaymentService.gateway().refund(
                order.payment_id,
                to_paise(order.total_amount),
                speed=const.REFUND_SPEED,
                notes={
                    "reason": reason or "Customer/Admin requested cancellation",
                    "order_id": str(order.id),
                },
            )
            refund.status = RefundStatus.INITIATED.value
            refund.gateway_refund_id = (result or {}).get("id")
            log.info(f"Refund initiated: {refund.gateway_refund_id}")
        except Exception as e:
            refund.status = RefundStatus.FAILED.value
            refund.error = str(e)
            log.error(f"Refund failed for payment {order.payment_id}: {e}\n{traceback.format_exc()}")
        db.session.add(refund)
        return refund
