from cafe.errors.exceptions import NotFoundError, ValidationError
from cafe.extensions import db
from cafe.lib.pricing import calculate_totals
from cafe.models.cart_item import CartItem


class CartService:

    @staticmethod
    def get_items(user):
        return [item.to_item() for item in user.cart_items]

    @staticmethod
    def add_item(user, title, price, image="", quantity=1):
        if quantity < 1:
            raise ValidationError("quantity must be at least 1")
        for item in user.cart_items:
            if item.title == title:
                item.quantity += quantity
                db.session.commit()
                return item
        item = CartItem(title=title, price=str(price), image=image or "", quantity=quantity)
        user.cart_items.append(item)
        db.session.commit()
        return item

    @staticmethod
    def set_quantity(user, title, quantity):
        for item in user.cart_items:
            if item.title == title:
                if quantity <= 0:
                    user.cart_items.remove(item)
                else:
                    item.quantity = quantity
                db.session.commit()
                return
        raise NotFoundError(f"'{title}' is not in your cart")

    @staticmethod
    def clear(user, commit=True):
        user.cart_items.clear()
        if commit:
            db.session.commit()

    @staticmethod
    def preview(user, order_type):
        """Cart contents with the breakdown the checkout would charge."""
        items = CartService.get_items(user)
        try:
            totals = calculate_totals(items, order_type)
        except ValidationError:
            totals = None
        return {"items": items, "orderType": order_type, "totals": totals}
