# coding: utf8
from flask import Blueprint
from flask_restx import Api

from cafe.api.admin import ns as admin_ns
from cafe.api.auth import ns as auth_ns
from cafe.api.cart import ns as cart_ns
from cafe.api.menu import ns as menu_ns
from cafe.api.order import ns as order_ns
from cafe.api.payment import ns as payment_ns
from cafe.errors.handler import api_error_handler

bp = Blueprint("api", __name__, url_prefix="/api")

api = Api(bp, version="1.0", title="Klubnika Cafe API", description="Cafe ordering API", doc="/docs/")

api.add_namespace(ns=auth_ns)
api.add_namespace(ns=admin_ns)
api.add_namespace(ns=menu_ns)
api.add_namespace(ns=cart_ns)
api.add_namespace(ns=order_ns)
api.add_namespace(ns=payment_ns)


@api.errorhandler(Exception)
def handle_api_error(error):
    return api_error_handler(error)
