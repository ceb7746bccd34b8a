from cafe.enums.order import RefundStatus
from cafe.extensions import db
from cafe.lib.string import to_iso
from cafe.models.base import BaseModel


class Refund(db.Model, BaseModel):
    __tablename__ = "refunds"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)
    payment_id = db.Column(db.String(100), nullable=False)
    amount = db.Column(db.Float, nullable=False, default=0)
    reason = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=RefundStatus.INITIATED.value)
    gateway_refund_id = db.Column(db.String(100), nullable=True)
    error = db.Column(db.Text, nullable=True)

    order = db.relationship("Order")

    def to_dict(self):
        return {
            "_id": self.id,
            "orderId": self.order_id,
            "paymentId": self.payment_id,
            "amount": self.amount,
            "status": self.status,
            "gatewayRefundId": self.gateway_refund_id,
            "error": self.error,
            "createdAt": to_iso(self.created_at),
        }
