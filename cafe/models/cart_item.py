from cafe.extensions import db
from cafe.models.base import BaseModel


class CartItem(db.Model, BaseModel):
    __tablename__ = "cart_items"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    price = db.Column(db.String(50), nullable=False)
    image = db.Column(db.String(500), nullable=False, default="")
    quantity = db.Column(db.Integer, nullable=False, default=1)

    user = db.relationship("User", back_populates="cart_items")

    def to_item(self):
        """The snapshot copied into an order."""
        return {
            "title": self.title,
            "price": self.price,
            "image": self.image,
            "quantity": self.quantity,
        }
