# coding: utf8
from flask import send_file
from flask_restx import Namespace, Resource

from cafe.decorators import admin_required, parameters
from cafe.lib.logger import logger
from cafe.lib.reconcile import reconcile_order
from cafe.makers.report import XLSX_MIMETYPE, build_monthly_report, report_filename
from cafe.services.auth import AuthService
from cafe.services.report import ReportService

ns = Namespace(name="admin", description="Admin API")


def reconciled_json(order):
    breakdown = reconcile_order(order)
    return {
        "subTotal": breakdown["sub_total"],
        "gstAmount": breakdown["gst_amount"],
        "deliveryCharge": breakdown["delivery_charge"],
        "total": breakdown["total"],
    }


@ns.route("/login")
class APIAdminLogin(Resource):

    @parameters(
        type="object",
        properties={
            "username": {"type": "string"},
            "password": {"type": "string"},
        },
        required=["username", "password"],
    )
    def post(self, args):
        token = AuthService.login_admin(args.get("username"), args.get("password"))
        logger.info("Admin logged in")
        return {"token": token}


@ns.route("/invoices/stats")
class APIInvoiceStats(Resource):

    @admin_required
    def get(self):
        return ReportService.invoice_stats()


@ns.route("/invoices/download")
class APIInvoiceDownload(Resource):

    @admin_required
    @parameters(
        type="object",
        properties={
            "year": {"type": "string", "pattern": "^[0-9]{4}$"},
            "month": {"type": "string", "pattern": "^([1-9]|0[1-9]|1[0-2])$"},
            "format": {"type": "string", "enum": ["json", "xlsx"]},
        },
        required=["year", "month"],
    )
    def get(self, args):
        orders = ReportService.monthly_orders(args.get("year"), args.get("month"))

        if args.get("format") == "xlsx":
            output = build_monthly_report(orders)
            return send_file(
                output,
                mimetype=XLSX_MIMETYPE,
                as_attachment=True,
                download_name=report_filename(args["year"], int(args["month"])),
            )

        result = []
        for order in orders:
            data = order.to_dict(with_user=True)
            data["reconciled"] = reconciled_json(order)
            result.append(data)
        return result
