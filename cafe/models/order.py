import json

from cafe.enums.order import OrderStatus, OrderType
from cafe.extensions import db
from cafe.lib.string import to_iso
from cafe.models.base import BaseModel


class Order(db.Model, BaseModel):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    items = db.Column(db.Text, nullable=False, default="[]")

    # nullable: orders placed before the breakdown was stored only carry a total
    sub_total = db.Column(db.Float, nullable=True)
    gst_amount = db.Column(db.Float, nullable=True)
    delivery_charge = db.Column(db.Float, nullable=True)
    total_amount = db.Column(db.Float, nullable=False)

    status = db.Column(db.String(50), nullable=False, default=OrderStatus.PENDING.value)
    order_type = db.Column(db.String(20), nullable=False, default=OrderType.DELIVERY.value)
    table_number = db.Column(db.String(20), nullable=True)

    delivery_address = db.Column(db.Text, nullable=True)
    delivery_lat = db.Column(db.Float, nullable=True)
    delivery_lng = db.Column(db.Float, nullable=True)

    payment_id = db.Column(db.String(100), nullable=True, unique=True)
    gateway_order_id = db.Column(db.String(100), nullable=True)
    payment_method = db.Column(db.String(100), nullable=False, default="Online")
    cancel_reason = db.Column(db.Text, nullable=True)

    user = db.relationship("User", lazy="joined")

    @property
    def item_list(self):
        return json.loads(self.items) if self.items else []

    @item_list.setter
    def item_list(self, value):
        self.items = json.dumps(value or [], ensure_ascii=False)

    @property
    def is_online(self):
        return bool(self.payment_id)

    def to_dict(self, with_user=False):
        data = {
            "_id": self.id,
            "user": self.user_id,
            "items": self.item_list,
            "subTotal": self.sub_total,
            "gstAmount": self.gst_amount,
            "deliveryCharge": self.delivery_charge,
            "totalAmount": self.total_amount,
            "status": self.status,
            "orderType": self.order_type,
            "tableNumber": self.table_number,
            "deliveryAddress": self.delivery_address,
            "deliveryCoords": (
                {"lat": self.delivery_lat, "lng": self.delivery_lng}
                if self.delivery_lat is not None or self.delivery_lng is not None
                else None
            ),
            "paymentId": self.payment_id,
            "gatewayOrderId": self.gateway_order_id,
            "paymentMethod": self.payment_method,
            "cancelReason": self.cancel_reason,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
        if with_user and self.user:
            data["user"] = self.user.to_public()
        return data
