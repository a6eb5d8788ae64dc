# ============================================================================
# PRODUCT HTTP TRIGGERS
# ============================================================================
# STATUS: Trigger layer - /api/products/*
# EXPORTS: ProductsTrigger, ProductItemTrigger, ProductImageTrigger
# DEPENDENCIES: azure.functions, services.ProductService, triggers.multipart
# ============================================================================
"""
Product HTTP Triggers.

Routes:
    GET        /api/products?q=term          - List, optional name search
    POST, PUT  /api/products                 - Upsert (full replace) from JSON body
    POST       /api/products/image           - Multipart image upload, returns blob URL
    GET        /api/products/{product_id}    - Single product
    DELETE     /api/products/{product_id}    - Delete product and its stored image

Example Usage:
    curl -X POST "https://{app-url}/api/products/image" -F "file=@boots.jpg"
    curl -X POST "https://{app-url}/api/products" \\
        -d '{"rowKey":"P1","name":"Boots","price":129.99,"imageUrl":"<url from above>"}'
"""

from typing import Any, Dict, List

import azure.functions as func

from exceptions import ValidationError
from .http_base import RetailApiTrigger
from .multipart import parse_multipart


class ProductsTrigger(RetailApiTrigger):
    """Collection endpoint."""

    def __init__(self, services):
        super().__init__("products", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST", "PUT"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        if req.method == "GET":
            q = self.extract_query_params(req, optional_params=["q"]).get("q")
            products = self.services.products.list_products(q)
            return {
                "count": len(products),
                "query": q,
                "products": [p.to_dict() for p in products]
            }

        product = self.services.products.upsert_product(self.extract_json_body(req))
        return {"product": product.to_dict()}


class ProductItemTrigger(RetailApiTrigger):
    """Single-product endpoint."""

    def __init__(self, services):
        super().__init__("product_item", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        product_id = self.require_route_param(req, "product_id")

        if req.method == "DELETE":
            self.services.products.delete_product(product_id)
            return {"deleted": product_id}

        return {"product": self.services.products.get_product(product_id).to_dict()}


class ProductImageTrigger(RetailApiTrigger):
    """POST /api/products/image - first file part is stored."""

    def __init__(self, services):
        super().__init__("product_image", services)

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        files, _ = parse_multipart(req)
        if not files:
            raise ValidationError("No file uploaded")

        upload = files[0]
        url = self.services.products.upload_image(upload.filename, upload.content, upload.content_type)
        return {
            "url": url,
            "filename": upload.filename,
            "size": upload.size,
            "content_type": upload.content_type
        }
