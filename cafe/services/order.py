from cafe.enums.order import OrderStatus, OrderType, RefundStatus
from cafe.errors.exceptions import NotFoundError, ValidationError
from cafe.extensions import db
from cafe.lib import order_state
from cafe.lib.logger import order_logger
from cafe.models.order import Order
from cafe.services.cart import CartService
from cafe.services.notification import NotificationService

ORDER_TYPES = [OrderType.DELIVERY.value, OrderType.DINE_IN.value]


def _coord(value):
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError("deliveryCoords must be numeric")


def fulfilment_fields(order_type, table_number=None, delivery_address=None, delivery_coords=None):
    """Columns that depend on the fulfilment mode; only the ones that apply are set."""
    order_type = order_type or OrderType.DELIVERY.value
    if order_type not in ORDER_TYPES:
        raise ValidationError(f"orderType must be one of: {', '.join(ORDER_TYPES)}")

    if order_type == OrderType.DINE_IN.value:
        if table_number in (None, ""):
            raise ValidationError("tableNumber is required for Dine-in orders")
        return {
            "order_type": order_type,
            "table_number": str(table_number),
            "delivery_address": None,
            "delivery_lat": None,
            "delivery_lng": None,
        }

    if not delivery_address:
        raise ValidationError("deliveryAddress is required for Delivery orders")
    coords = delivery_coords or {}
    if not isinstance(coords, dict):
        raise ValidationError("deliveryCoords must be an object with lat and lng")
    return {
        "order_type": order_type,
        "table_number": None,
        "delivery_address": delivery_address,
        "delivery_lat": _coord(coords.get("lat")),
        "delivery_lng": _coord(coords.get("lng")),
    }


class OrderService:

    @staticmethod
    def find(order_id):
        order = db.session.get(Order, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def find_by_payment_id(payment_id):
        return Order.query.filter(Order.payment_id == payment_id).first()

    @staticmethod
    def get_all():
        return Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    @staticmethod
    def get_for_user(user_id):
        return (
            Order.query.filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    @staticmethod
    def create_order(user, items, totals, fulfilment, payment_method, total_amount=None, **payment):
        """Materialise the cart as a Pending order and clear the cart in the
        same transaction. Notifications are the caller's job, after commit."""
        order = Order(
            user_id=user.id,
            sub_total=totals["sub_total"],
            gst_amount=totals["gst_amount"],
            delivery_charge=totals["delivery_charge"],
            total_amount=total_amount if total_amount is not None else totals["total"],
            status=OrderStatus.PENDING.value,
            payment_method=payment_method,
            payment_id=payment.get("payment_id"),
            gateway_order_id=payment.get("gateway_order_id"),
            **fulfilment,
        )
        order.item_list = items
        db.session.add(order)
        CartService.clear(user, commit=False)
        db.session.commit()
        order_logger(order.id).info(
            f"Order created for user {user.id}: {order.total_amount} via {payment_method}"
        )
        return order

    @staticmethod
    def update_status(order_id, status, is_admin):
        order = OrderService.find(order_id)
        previous = order.status
        order_state.check_advance(previous, status, is_admin)

        order.update(status=status)
        order_logger(order.id).info(f"Status {previous} -> {status}")

        NotificationService.status_changed(order)
        return order

    @staticmethod
    def cancel(order_id, reason, user=None, is_admin=False):
        # imported here: payment services build orders through this module
        from cafe.services.payment_services import PaymentService

        order = OrderService.find(order_id)
        is_owner = user is not None and order.user_id == user.id
        order_state.check_cancel(order.status, is_admin, is_owner)

        refund = None
        if order.payment_id:
            refund = PaymentService.refund_order(order, reason)

        order.status = OrderStatus.CANCELLED.value
        order.cancel_reason = reason
        db.session.commit()
        order_logger(order.id).info(
            f"Cancelled by {'admin' if is_admin else 'user'}; refund attempted: {refund is not None}"
        )

        refunded = refund is not None and refund.status == RefundStatus.INITIATED.value
        NotificationService.order_cancelled(
            order, reason, order.total_amount if refunded else None
        )
        return order, refund
