from cafe.extensions import db
from cafe.models.base import BaseModel


class Product(db.Model, BaseModel):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True)
    category = db.Column(db.String(100), nullable=False, default="")
    price = db.Column(db.Float, nullable=False, default=0)
    image = db.Column(db.String(500), nullable=True, default="")
    is_in_stock = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self):
        return {
            "_id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "image": self.image,
            "isInStock": bool(self.is_in_stock),
        }
