from cafe.enums.order import NotificationKind, OrderStatus
from cafe.lib.logger import order_logger
from cafe.services.realtime import RealtimeService
from cafe.tasks.notification_tasks import send_order_email, send_order_sms


class NotificationService:
    """Side effects of order events. Called after the order is committed;
    nothing here may raise back into the request."""

    @staticmethod
    def _enqueue(task, order_id, *args):
        try:
            task.delay(order_id, *args)
            return True
        except Exception as e:
            order_logger(order_id).error(f"Could not enqueue {task.name}: {e}")
            return False

    @staticmethod
    def order_placed(order):
        RealtimeService.new_order(order)
        NotificationService._enqueue(send_order_sms, order.id, NotificationKind.PLACED.value)
        NotificationService._enqueue(send_order_email, order.id, NotificationKind.PLACED.value)

    @staticmethod
    def status_changed(order):
        RealtimeService.status_update(order)

        if order.status == OrderStatus.DELIVERED.value:
            kind = NotificationKind.DELIVERED.value
        elif order.status != OrderStatus.PENDING.value:
            kind = NotificationKind.STATUS.value
        else:
            return

        NotificationService._enqueue(send_order_sms, order.id, kind)
        NotificationService._enqueue(send_order_email, order.id, kind)

    @staticmethod
    def order_cancelled(order, reason, refund_amount=None):
        RealtimeService.status_update(order)
        NotificationService._enqueue(
            send_order_email,
            order.id,
            NotificationKind.CANCELLED.value,
            {"reason": reason, "refund_amount": refund_amount},
        )
