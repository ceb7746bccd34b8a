import const
from cafe.extensions import socketio
from cafe.lib.logger import logger

NEW_ORDER_EVENT = "newOrder"
STATUS_UPDATE_EVENT = "orderStatusUpdate"


def user_room(user_id):
    return f"{const.USER_ROOM_PREFIX}{user_id}"


class RealtimeService:
    """Socket.IO broadcasts. Best-effort: a failed emit never fails the request."""

    @staticmethod
    def emit(event, payload, room):
        try:
            socketio.emit(event, payload, to=room)
            return True
        except Exception as e:
            logger.error(f"Socket emit '{event}' to {room} failed: {e}")
            return False

    @staticmethod
    def new_order(order):
        RealtimeService.emit(NEW_ORDER_EVENT, order.to_dict(with_user=True), const.ADMIN_ROOM)

    @staticmethod
    def status_update(order):
        payload = order.to_dict(with_user=True)
        RealtimeService.emit(STATUS_UPDATE_EVENT, payload, user_room(order.user_id))
        RealtimeService.emit(STATUS_UPDATE_EVENT, payload, const.ADMIN_ROOM)
