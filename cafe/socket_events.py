from flask_jwt_extended import decode_token
from flask_socketio import emit, join_room

import const
from cafe.extensions import socketio
from cafe.lib.logger import logger
from cafe.services.realtime import user_room


@socketio.on("join")
def on_join(data):
    token = (data or {}).get("token")
    if not token:
        emit("join_response", {"success": False, "message": "token is required"})
        return

    try:
        claims = decode_token(token)
    except Exception as e:
        logger.warning(f"Socket join rejected: {e}")
        emit("join_response", {"success": False, "message": "Invalid token"})
        return

    if claims.get("is_admin"):
        room = const.ADMIN_ROOM
    else:
        room = user_room(claims.get("sub"))
    join_room(room)
    logger.info(f"Socket joined room {room}")
    emit("join_response", {"success": True, "room": room})
