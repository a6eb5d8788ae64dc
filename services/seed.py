# ============================================================================
# SAMPLE DATA SEEDING
# ============================================================================
# STATUS: Service - Development-only sample product seeding
# EXPORTS: SeedService, SAMPLE_PRODUCTS
# DEPENDENCIES: requests (optional image download), infrastructure repos
# ============================================================================
"""
Sample Data Seeding.

Inserts a handful of sample products when the products table is empty
(or always, when forced). With download_images enabled, each sample image
is fetched over HTTP and re-hosted in the product image container so the
catalog does not depend on the external image host.
"""

from typing import Optional, Tuple

import requests

from config.defaults import AppDefaults
from core.models import ProductRecord
from core.utils import generate_record_id, unique_object_name
from infrastructure.interface_repository import IProductRepository, IBlobRepository
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "SeedService")


# (name, description, price, image url)
SAMPLE_PRODUCTS: Tuple[Tuple[str, str, float, str], ...] = (
    ("Cozy Knit Sweater", "Soft warm sweater", 79.99, "https://picsum.photos/seed/p1/800/600"),
    ("Leather Ankle Boots", "Stylish leather boots", 129.99, "https://picsum.photos/seed/p2/800/600"),
    ("Classic Trench Coat", "Timeless outerwear", 149.99, "https://picsum.photos/seed/p3/800/600"),
    ("Cashmere Scarf", "Luxurious scarf", 49.99, "https://picsum.photos/seed/p4/800/600"),
    ("Slim Fit Jeans", "Comfort stretch denim", 59.99, "https://picsum.photos/seed/p5/800/600"),
)


class SeedService:
    """
    Seeds sample products.

    Args:
        product_repo: Products table
        blob_repo: Blob storage (used only when download_images is set)
        image_container: Product image container
        download_images: Re-host sample images in blob storage
        session: requests session (injectable for tests)
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        blob_repo: IBlobRepository,
        image_container: str,
        download_images: bool = False,
        session: Optional[requests.Session] = None
    ):
        self.products = product_repo
        self.blobs = blob_repo
        self.image_container = image_container
        self.download_images = download_images
        self.session = session or requests.Session()

    def _rehost_image(self, index: int, source_url: str) -> str:
        """
        Download an image and upload it to blob storage.

        Raises:
            requests.RequestException: If the download fails
        """
        response = self.session.get(source_url, timeout=AppDefaults.SEED_HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
        content_type = response.headers.get("Content-Type", "image/jpeg")
        blob_name = unique_object_name(f"seed-{index}.jpg")
        return self.blobs.upload_blob(self.image_container, blob_name, response.content, content_type=content_type)

    @log_exceptions(ComponentType.SERVICE, "SeedService")
    def seed_products(self, force: bool = False) -> int:
        """
        Insert the sample products.

        Args:
            force: Seed even if products already exist

        Returns:
            Number of products inserted (0 when skipped)
        """
        if not force and self.products.list_products():
            logger.info("Products table already populated, skipping seed")
            return 0

        inserted = 0
        for index, (name, description, price, image_url) in enumerate(SAMPLE_PRODUCTS):
            if self.download_images:
                image_url = self._rehost_image(index, image_url)

            self.products.upsert_product(ProductRecord(
                row_key=generate_record_id(),
                name=name,
                description=description,
                price=price,
                image_url=image_url,
            ))
            inserted += 1

        logger.info(f"🌱 Seeded {inserted} sample products")
        return inserted
