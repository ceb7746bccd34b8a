# coding: utf8
from io import BytesIO

from flask import send_file
from flask_restx import Namespace, Resource

from cafe.decorators import admin_required, jwt_any, parameters, user_required
from cafe.enums.order import RefundStatus
from cafe.errors.exceptions import AuthorizationError, ValidationError
from cafe.lib.order_state import ALL_STATUSES
from cafe.makers.invoice import generate_invoice_pdf, invoice_filename, verify_invoice_signature
from cafe.services.auth import AuthService
from cafe.services.order import OrderService

ns = Namespace(name="orders", description="Order API")


def invoice_response(order):
    return send_file(
        BytesIO(generate_invoice_pdf(order)),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=invoice_filename(order),
    )


@ns.route("")
class APIOrders(Resource):

    @parameters(
        type="object",
        properties={
            "type": {"type": "string", "enum": ["invoice"]},
            "order_id": {"type": "string", "pattern": "^[0-9]+$"},
            "sig": {"type": "string"},
        },
    )
    def get(self, args):
        # invoice links sent by SMS carry a signature instead of a token
        if args.get("type") == "invoice":
            if not args.get("order_id"):
                raise ValidationError("order_id is required")
            if not verify_invoice_signature(args["order_id"], args.get("sig")):
                raise AuthorizationError("Invalid invoice link")
            return invoice_response(OrderService.find(int(args["order_id"])))
        return self.all_orders()

    @admin_required
    def all_orders(self):
        return [order.to_dict(with_user=True) for order in OrderService.get_all()]


@ns.route("/my-orders")
class APIMyOrders(Resource):

    @user_required
    def get(self):
        user = AuthService.require_user()
        return [order.to_dict() for order in OrderService.get_for_user(user.id)]


@ns.route("/<int:order_id>/invoice")
class APIOrderInvoice(Resource):

    @jwt_any
    def get(self, order_id):
        order = OrderService.find(order_id)
        if not AuthService.is_admin():
            user = AuthService.require_user()
            if order.user_id != user.id:
                raise AuthorizationError("Not authorized")
        return invoice_response(order)


@ns.route("/<int:order_id>/status")
class APIOrderStatus(Resource):

    @admin_required
    @parameters(
        type="object",
        properties={"status": {"type": "string", "enum": ALL_STATUSES}},
        required=["status"],
    )
    def put(self, args, order_id):
        order = OrderService.update_status(order_id, args["status"], is_admin=True)
        return order.to_dict(with_user=True)


@ns.route("/<int:order_id>/cancel")
class APIOrderCancel(Resource):

    @jwt_any
    @parameters(
        type="object",
        properties={"reason": {"type": ["string", "null"]}},
    )
    def put(self, args, order_id):
        is_admin = AuthService.is_admin()
        user = None if is_admin else AuthService.require_user()
        order, refund = OrderService.cancel(
            order_id, args.get("reason"), user=user, is_admin=is_admin
        )
        message = "Order cancelled successfully"
        if refund is not None and refund.status == RefundStatus.INITIATED.value:
            message = "Order cancelled and refund initiated"
        elif refund is not None:
            message = "Order cancelled; refund could not be initiated"
        return {
            "message": message,
            "order": order.to_dict(),
            "refund": refund.to_dict() if refund is not None else None,
        }
