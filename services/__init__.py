"""
Service Container - Explicit Construction (No Globals!)

All services are built here from an explicit set of repositories. Nothing
looks up its own storage client: function_app.py creates the repositories
once per worker, calls create_services(), and hands the container to the
triggers and web interfaces.

If you don't see it in ServiceContainer, it's not wired.

Example:
    repos = RepositoryFactory.create_repositories(config.storage)
    services = create_services(repos, config)
    services.orders.enqueue_raw(body)
"""

from dataclasses import dataclass
from typing import Any, Dict

from config import AppConfig
from core.processor import OrderProcessor
from .order_service import OrderService
from .customer_service import CustomerService
from .product_service import ProductService
from .contract_service import ContractService
from .queue_drain import OrderQueueDrainer
from .seed import SeedService


@dataclass
class ServiceContainer:
    """Everything the HTTP, queue and web layers need."""

    orders: OrderService
    customers: CustomerService
    products: ProductService
    contracts: ContractService
    processor: OrderProcessor
    drainer: OrderQueueDrainer
    seeder: SeedService
    repositories: Dict[str, Any]
    config: AppConfig


def create_services(repos: Dict[str, Any], config: AppConfig) -> ServiceContainer:
    """
    Wire services to repositories.

    Args:
        repos: Output of RepositoryFactory.create_repositories (or test fakes)
        config: Application configuration
    """
    processor = OrderProcessor(repos['order_repo'])
    return ServiceContainer(
        orders=OrderService(
            repos['order_repo'],
            repos['customer_repo'],
            repos['product_repo'],
            repos['queue_repo'],
            config.queues
        ),
        customers=CustomerService(repos['customer_repo']),
        products=ProductService(repos['product_repo'], repos['blob_repo'], config.storage.blob_container),
        contracts=ContractService(repos['file_repo'], config.storage.file_share_name),
        processor=processor,
        drainer=OrderQueueDrainer(processor, repos['queue_repo'], config.queues),
        seeder=SeedService(
            repos['product_repo'],
            repos['blob_repo'],
            config.storage.blob_container,
            download_images=config.seed_download_images
        ),
        repositories=repos,
        config=config,
    )


__all__ = [
    'ServiceContainer',
    'create_services',
    'OrderService',
    'CustomerService',
    'ProductService',
    'ContractService',
    'OrderQueueDrainer',
    'SeedService',
]
