"""
Catalog routes Blueprint - customers and products.

Routes:
    GET/POST/PUT  customers             GET/DELETE  customers/{customer_id}
    GET/POST/PUT  products              GET/DELETE  products/{product_id}
    POST          products/image
"""

import azure.functions as func

from triggers.customers import CustomersTrigger, CustomerItemTrigger
from triggers.products import ProductsTrigger, ProductItemTrigger, ProductImageTrigger


def create_blueprint(services) -> func.Blueprint:
    """Build the customer/product Blueprint bound to a service container."""
    bp = func.Blueprint()

    customers_trigger = CustomersTrigger(services)
    customer_item_trigger = CustomerItemTrigger(services)
    products_trigger = ProductsTrigger(services)
    product_item_trigger = ProductItemTrigger(services)
    product_image_trigger = ProductImageTrigger(services)

    @bp.route(route="customers", methods=["GET", "POST", "PUT"])
    def customers_collection(req: func.HttpRequest) -> func.HttpResponse:
        return customers_trigger.handle_request(req)

    @bp.route(route="customers/{customer_id}", methods=["GET", "DELETE"])
    def customer_item(req: func.HttpRequest) -> func.HttpResponse:
        return customer_item_trigger.handle_request(req)

    @bp.route(route="products/image", methods=["POST"])
    def product_image(req: func.HttpRequest) -> func.HttpResponse:
        """Multipart image upload; returns the blob URL."""
        return product_image_trigger.handle_request(req)

    @bp.route(route="products", methods=["GET", "POST", "PUT"])
    def products_collection(req: func.HttpRequest) -> func.HttpResponse:
        return products_trigger.handle_request(req)

    @bp.route(route="products/{product_id}", methods=["GET", "DELETE"])
    def product_item(req: func.HttpRequest) -> func.HttpResponse:
        return product_item_trigger.handle_request(req)

    return bp
