# ============================================================================
# PRODUCT SERVICE
# ============================================================================
# STATUS: Service - Product CRUD plus product images in blob storage
# EXPORTS: ProductService
# DEPENDENCIES: infrastructure.tables (products), infrastructure.blob
# ============================================================================
"""
Product Service.

Handles:
- Product upsert/list/search/get/delete on the products table
- Image upload to the product image container ({uuid}_{filename})
- Image cleanup when a product is deleted (only blobs in our container)
"""

from typing import Any, List, Optional

from core.models import ProductRecord
from core.utils import unique_object_name
from exceptions import ResourceNotFoundError, ValidationError
from infrastructure.interface_repository import IProductRepository, IBlobRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ProductService")


class ProductService:
    """
    Product business logic.

    Args:
        product_repo: Products table
        blob_repo: Blob storage for images
        image_container: Container holding product images
    """

    def __init__(self, product_repo: IProductRepository, blob_repo: IBlobRepository, image_container: str):
        self.products = product_repo
        self.blobs = blob_repo
        self.image_container = image_container

    # =========================================================================
    # CRUD
    # =========================================================================

    def upsert_product(self, payload: Any) -> ProductRecord:
        """
        Create or fully replace a product from a JSON body.

        Raises:
            ValidationError: rowKey/name blank, or price missing/non-numeric/negative
        """
        product = ProductRecord.from_payload(payload)
        self.products.upsert_product(product)
        logger.info(f"Product upserted: {product.row_key} ({product.name})")
        return product

    def list_products(self, q: Optional[str] = None) -> List[ProductRecord]:
        """
        List products, optionally filtered by case-insensitive substring of name.
        """
        products = self.products.list_products()
        if q and q.strip():
            needle = q.strip().lower()
            products = [p for p in products if needle in (p.name or "").lower()]
        return sorted(products, key=lambda p: p.name.lower())

    def get_product(self, product_id: str) -> ProductRecord:
        product = self.products.get_product(product_id)
        if product is None:
            raise ResourceNotFoundError(f"Product not found: {product_id}")
        return product

    def delete_product(self, product_id: str) -> None:
        """
        Delete a product and, if it is stored with us, its image blob.

        Deleting an unknown product is a no-op.
        """
        product = self.products.get_product(product_id)
        if product is not None and product.image_url:
            blob_name = self.blobs.blob_name_from_url(self.image_container, product.image_url)
            if blob_name:
                self.blobs.delete_blob(self.image_container, blob_name)
                logger.info(f"Deleted image {blob_name} for product {product_id}")

        self.products.delete_product(product_id)
        logger.info(f"Product deleted: {product_id}")

    # =========================================================================
    # IMAGES
    # =========================================================================

    def upload_image(self, filename: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store an image as {uuid}_{filename} in the product image container.

        Returns:
            Blob URL to save as the product's imageUrl

        Raises:
            ValidationError: Empty file
        """
        if not data:
            raise ValidationError("No file uploaded")
        blob_name = unique_object_name(filename or "upload.bin")
        url = self.blobs.upload_blob(
            self.image_container,
            blob_name,
            data,
            content_type=content_type or "application/octet-stream"
        )
        logger.info(f"Product image uploaded: {blob_name}")
        return url
