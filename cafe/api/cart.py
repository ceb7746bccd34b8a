# coding: utf8
from flask_restx import Namespace, Resource

from cafe.decorators import parameters, user_required
from cafe.enums.order import OrderType
from cafe.services.auth import AuthService
from cafe.services.cart import CartService

ns = Namespace(name="cart", description="Cart API")

ORDER_TYPE_SCHEMA = {
    "type": "string",
    "enum": [OrderType.DELIVERY.value, OrderType.DINE_IN.value],
}


def cart_json(user, order_type):
    preview = CartService.preview(user, order_type or OrderType.DELIVERY.value)
    totals = preview["totals"]
    if totals:
        preview["totals"] = {
            "subTotal": totals["sub_total"],
            "gstAmount": totals["gst_amount"],
            "deliveryCharge": totals["delivery_charge"],
            "total": totals["total"],
        }
    return preview


@ns.route("")
class APICart(Resource):

    @user_required
    @parameters(
        type="object",
        properties={"orderType": ORDER_TYPE_SCHEMA},
    )
    def get(self, args):
        user = AuthService.require_user()
        return cart_json(user, args.get("orderType"))

    @user_required
    @parameters(
        type="object",
        properties={
            "title": {"type": "string", "minLength": 1},
            "price": {"type": ["string", "number"]},
            "image": {"type": "string"},
            "quantity": {"type": "integer", "minimum": 1},
            "orderType": ORDER_TYPE_SCHEMA,
        },
        required=["title", "price"],
    )
    def post(self, args):
        user = AuthService.require_user()
        CartService.add_item(
            user,
            args["title"],
            args["price"],
            image=args.get("image", ""),
            quantity=args.get("quantity", 1),
        )
        return cart_json(user, args.get("orderType")), 201

    @user_required
    @parameters(
        type="object",
        properties={
            "title": {"type": "string", "minLength": 1},
            "quantity": {"type": "integer"},
            "orderType": ORDER_TYPE_SCHEMA,
        },
        required=["title", "quantity"],
    )
    def put(self, args):
        user = AuthService.require_user()
        CartService.set_quantity(user, args["title"], args["quantity"])
        return cart_json(user, args.get("orderType"))

    @user_required
    def delete(self):
        user = AuthService.require_user()
        CartService.clear(user)
        return cart_json(user, None)
