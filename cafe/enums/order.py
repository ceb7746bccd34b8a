from enum import Enum


class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class OrderType(Enum):
    DELIVERY = "Delivery"
    DINE_IN = "Dine-in"


class RefundStatus(Enum):
    INITIATED = "INITIATED"
    FAILED = "FAILED"


class NotificationKind(Enum):
    PLACED = "placed"
    STATUS = "status"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
