# coding: utf8
from flask_restx import Namespace, Resource

from cafe.decorators import parameters, user_required
from cafe.enums.order import OrderType
from cafe.errors.exceptions import ValidationError
from cafe.services.auth import AuthService
from cafe.services.payment_services import PaymentService

ns = Namespace(name="payment", description="Payment API")

ORDER_TYPE_SCHEMA = {
    "type": "string",
    "enum": [OrderType.DELIVERY.value, OrderType.DINE_IN.value],
}

FULFILMENT_PROPERTIES = {
    "orderType": ORDER_TYPE_SCHEMA,
    "tableNumber": {"type": ["string", "integer", "null"]},
    "deliveryAddress": {"type": ["string", "null"]},
    "deliveryCoords": {
        "type": ["object", "null"],
        "properties": {
            "lat": {"type": ["number", "string", "null"]},
            "lng": {"type": ["number", "string", "null"]},
        },
    },
}

# gateway checkout widgets post their own field names
GATEWAY_ALIASES = {
    "gatewayOrderId": "razorpay_order_id",
    "paymentId": "razorpay_payment_id",
    "signature": "razorpay_signature",
}


def fulfilment_args(args):
    return {
        "order_type": args.get("orderType"),
        "table_number": args.get("tableNumber"),
        "delivery_address": args.get("deliveryAddress"),
        "delivery_coords": args.get("deliveryCoords"),
    }


@ns.route("/create-order")
class APICreatePaymentOrder(Resource):

    @user_required
    @parameters(
        type="object",
        properties={"orderType": ORDER_TYPE_SCHEMA},
    )
    def post(self, args):
        user = AuthService.require_user()
        return PaymentService.create_payment_intent(user, args.get("orderType"))


@ns.route("/verify-payment")
class APIVerifyPayment(Resource):

    @user_required
    @parameters(
        type="object",
        properties={
            **FULFILMENT_PROPERTIES,
            **{name: {"type": "string"} for name in GATEWAY_ALIASES},
            **{alias: {"type": "string"} for alias in GATEWAY_ALIASES.values()},
        },
    )
    def post(self, args):
        user = AuthService.require_user()
        ids = {}
        for name, alias in GATEWAY_ALIASES.items():
            ids[name] = args.get(name) or args.get(alias)
            if not ids[name]:
                raise ValidationError(f"{name} is required")

        order, created = PaymentService.verify_payment(
            user,
            ids["gatewayOrderId"],
            ids["paymentId"],
            ids["signature"],
            **fulfilment_args(args),
        )
        return {
            "success": True,
            "message": "Payment verified" if created else "Payment already verified",
            "orderId": order.id,
        }


@ns.route("/create-cash-order")
class APICreateCashOrder(Resource):

    @user_required
    @parameters(
        type="object",
        properties=FULFILMENT_PROPERTIES,
    )
    def post(self, args):
        user = AuthService.require_user()
        order = PaymentService.create_cash_order(user, **fulfilment_args(args))
        return {
            "success": True,
            "message": "Order placed successfully",
            "orderId": order.id,
        }, 201
