from cafe.enums.order import OrderStatus
from cafe.errors.exceptions import (
    AlreadyFinalizedError,
    AuthorizationError,
    InvalidTransitionError,
)

SEQUENCE = [
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
    OrderStatus.OUT_FOR_DELIVERY.value,
    OrderStatus.DELIVERED.value,
]

TERMINAL = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}

ALL_STATUSES = SEQUENCE + [OrderStatus.CANCELLED.value]


def is_terminal(status):
    return status in TERMINAL


def next_status(status):
    if status not in SEQUENCE or is_terminal(status):
        return None
    return SEQUENCE[SEQUENCE.index(status) + 1]


def check_advance(current, target, is_admin):
    """Validate an admin status change; returns the target status."""
    if not is_admin:
        raise AuthorizationError("Access denied. Admin only.")
    if is_terminal(current):
        raise AlreadyFinalizedError()
    if target == OrderStatus.CANCELLED.value:
        raise InvalidTransitionError("Use the cancel endpoint to cancel an order.")
    if target not in SEQUENCE:
        raise InvalidTransitionError(f"Unknown status '{target}'.")

    expected = next_status(current)
    if target != expected:
        raise InvalidTransitionError(
            f"Cannot move order from '{current}' to '{target}'; next status is '{expected}'."
        )
    return target


def check_cancel(current, is_admin, is_owner):
    if not is_admin and not is_owner:
        raise AuthorizationError("Not authorized")
    if is_terminal(current):
        raise AlreadyFinalizedError()
    if not is_admin and current != OrderStatus.PENDING.value:
        raise AuthorizationError("Order cannot be cancelled at this stage.")
    return OrderStatus.CANCELLED.value
