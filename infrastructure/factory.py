# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for all repository instances
# PURPOSE: Build Azure Storage clients once and wrap them in repositories
# EXPORTS: RepositoryFactory
# DEPENDENCIES: azure-data-tables, azure-storage-blob, azure-storage-queue,
#               azure-storage-file-share, azure-identity, config
# ENTRY_POINTS: RepositoryFactory.create_repositories()
# ============================================================================

"""
Repository Factory - Central Creation Point

The single point where Azure Storage service clients are created. Called once
per worker from function_app.py; the resulting repositories are passed
explicitly into services, the order processor and the web interfaces.

Authentication:
    - Connection string (STORAGE_CONNECTION_STRING / AzureWebJobsStorage)
    - Otherwise DefaultAzureCredential against STORAGE_ACCOUNT_NAME, with
      one credential shared by all four service clients
"""

from typing import Dict, Any, Optional

from azure.data.tables import TableServiceClient
from azure.identity import DefaultAzureCredential
from azure.storage.blob import BlobServiceClient
from azure.storage.fileshare import ShareServiceClient
from azure.storage.queue import QueueServiceClient

from config import StorageConfig, get_config
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


# ============================================================================
# REPOSITORY FACTORY - Central creation point
# ============================================================================

class RepositoryFactory:
    """
    Factory for creating repository instances.

    Design Philosophy:
    - Single factory for all repository types
    - Service clients (and the credential) created once and shared
    - Repositories never look up their own clients
    """

    @staticmethod
    def create_service_clients(storage: StorageConfig) -> Dict[str, Any]:
        """
        Create the four Azure Storage service clients.

        Args:
            storage: Storage configuration

        Returns:
            Dict with table_service, blob_service, queue_service, share_service
        """
        if storage.uses_connection_string:
            logger.info("🔐 Creating storage clients from connection string")
            cs = storage.connection_string
            return {
                'table_service': TableServiceClient.from_connection_string(cs),
                'blob_service': BlobServiceClient.from_connection_string(cs),
                'queue_service': QueueServiceClient.from_connection_string(cs),
                'share_service': ShareServiceClient.from_connection_string(cs),
            }

        logger.info(f"🔐 Creating storage clients with DefaultAzureCredential for account: {storage.account_name}")
        credential = DefaultAzureCredential()
        return {
            'table_service': TableServiceClient(endpoint=storage.account_url('table'), credential=credential),
            'blob_service': BlobServiceClient(account_url=storage.account_url('blob'), credential=credential),
            'queue_service': QueueServiceClient(account_url=storage.account_url('queue'), credential=credential),
            'share_service': ShareServiceClient(
                account_url=storage.account_url('file'),
                credential=credential,
                token_intent='backup'
            ),
        }

    @staticmethod
    def create_repositories(
        storage: Optional[StorageConfig] = None,
        clients: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create all repository instances.

        Args:
            storage: Storage configuration (uses get_config().storage if not provided)
            clients: Pre-built service clients (see create_service_clients)

        Returns:
            Dictionary with order_repo, customer_repo, product_repo,
            queue_repo, blob_repo and file_repo

        Example:
            repos = RepositoryFactory.create_repositories()
            order = repos['order_repo'].get_order("O1")
        """
        from .tables import OrderRepository, CustomerRepository, ProductRepository
        from .queue import QueueRepository
        from .blob import BlobRepository
        from .file_share import FileShareRepository

        if storage is None:
            storage = get_config().storage
        if clients is None:
            clients = RepositoryFactory.create_service_clients(storage)

        logger.info("🏭 Creating storage repositories")
        repos = {
            'order_repo': OrderRepository(clients['table_service'], storage.orders_table),
            'customer_repo': CustomerRepository(clients['table_service'], storage.customers_table),
            'product_repo': ProductRepository(clients['table_service'], storage.products_table),
            'queue_repo': QueueRepository(clients['queue_service']),
            'blob_repo': BlobRepository(clients['blob_service'], public_access=storage.blob_public_access),
            'file_repo': FileShareRepository(clients['share_service']),
        }
        logger.info("✅ All repositories created successfully")
        return repos
