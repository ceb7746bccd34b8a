# coding: utf8
from flask_restx import Namespace, Resource

from cafe.decorators import admin_required, parameters
from cafe.services.product import ProductService

ns = Namespace(name="menu", description="Menu API")


@ns.route("")
class APIMenu(Resource):

    @parameters(
        type="object",
        properties={"category": {"type": "string"}},
    )
    def get(self, args):
        products = ProductService.get_menu(args.get("category", ""))
        return [product.to_dict() for product in products]


@ns.route("/<int:product_id>/stock")
class APIMenuStock(Resource):

    @admin_required
    @parameters(
        type="object",
        properties={"isInStock": {"type": "boolean"}},
        required=["isInStock"],
    )
    def put(self, args, product_id):
        product = ProductService.set_stock(product_id, args["isInStock"])
        return product.to_dict()
