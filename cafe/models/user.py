from cafe.extensions import db, bcrypt
from cafe.models.base import BaseModel


class User(db.Model, BaseModel):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, default="")
    email = db.Column(db.String(150), nullable=False, unique=True)
    mobile = db.Column(db.String(20), nullable=True)
    password = db.Column(db.String(200), nullable=True)

    cart_items = db.relationship(
        "CartItem",
        back_populates="user",
        order_by="CartItem.id",
        cascade="all, delete-orphan",
    )

    print_filter = ("password",)

    def set_password(self, password):
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password):
        if not self.password:
            return False
        return bcrypt.check_password_hash(self.password, password)

    def to_public(self):
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
        }
