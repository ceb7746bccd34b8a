from cafe.errors.exceptions import NotFoundError, StockError
from cafe.extensions import db
from cafe.lib.logger import logger
from cafe.lib.pricing import clean_item_title
from cafe.models.product import Product


class ProductService:

    @staticmethod
    def get_menu(category=""):
        query = Product.query
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(Product.category.asc(), Product.name.asc()).all()

    @staticmethod
    def set_stock(product_id, is_in_stock):
        product = db.session.get(Product, product_id)
        if not product:
            raise NotFoundError("Product not found")
        product.update(is_in_stock=bool(is_in_stock))
        logger.info(f"Product {product.name} in stock: {product.is_in_stock}")
        return product

    @staticmethod
    def find_unavailable(items):
        """Titles from ``items`` whose catalogue product is sold out.

        Items with no catalogue entry are not blocked.
        """
        titles = {clean_item_title(item.get("title")) for item in items}
        products = Product.query.filter(Product.name.in_(titles)).all()
        stock = {product.name: product.is_in_stock for product in products}

        unavailable = []
        for item in items:
            check_title = clean_item_title(item.get("title"))
            if check_title in stock and not stock[check_title]:
                unavailable.append(item.get("title"))
        return unavailable

    @staticmethod
    def ensure_in_stock(items):
        unavailable = ProductService.find_unavailable(items)
        if unavailable:
            raise StockError(
                f"Items sold out: {', '.join(unavailable)}", details={"unavailable": unavailable}
            )
