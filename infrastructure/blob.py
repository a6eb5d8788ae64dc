# ============================================================================
# BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Product image upload/delete over a shared BlobServiceClient
# EXPORTS: BlobRepository
# INTERFACES: IBlobRepository
# DEPENDENCIES: azure-storage-blob, azure-core
# ENTRY_POINTS: RepositoryFactory.create_repositories()['blob_repo']
# ============================================================================

"""
Blob Storage Repository.

Product images are uploaded here and referenced from product rows by URL.
When a product is deleted, its image is removed only if the stored URL
points into the product image container of this account; external URLs
are left alone.

Usage:
    blob_repo = RepositoryFactory.create_repositories(config.storage)['blob_repo']
    url = blob_repo.upload_blob('productimages', name, data, 'image/png')
"""

from typing import Dict, Optional
from urllib.parse import urlparse, unquote

from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings
from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError

from exceptions import StoreUnavailableError
from infrastructure.interface_repository import IBlobRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobRepository")


class BlobRepository(IBlobRepository):
    """
    Blob storage repository with cached container clients.

    Args:
        blob_service: Shared BlobServiceClient (built by RepositoryFactory)
        public_access: Create missing containers with anonymous blob read
            access so browsers can load product images directly
    """

    def __init__(self, blob_service: BlobServiceClient, public_access: bool = True):
        self.blob_service = blob_service
        self.public_access = public_access
        self._container_clients: Dict[str, ContainerClient] = {}

    def _get_container_client(self, container: str) -> ContainerClient:
        """
        Get or create cached container client, creating the container on first use.
        """
        if container not in self._container_clients:
            container_client = self.blob_service.get_container_client(container)
            try:
                container_client.create_container(public_access="blob" if self.public_access else None)
                logger.info(f"✅ Created container: {container}")
            except ResourceExistsError:
                logger.debug(f"Container already exists: {container}")
            except AzureError as e:
                logger.error(f"❌ Error creating container {container}: {e}")
                raise StoreUnavailableError(f"Container {container} unavailable: {e}") from e
            self._container_clients[container] = container_client
        return self._container_clients[container]

    def upload_blob(
        self,
        container: str,
        blob_name: str,
        data: bytes,
        content_type: str = "application/octet-stream"
    ) -> str:
        """
        Write blob from bytes (overwrites).

        Returns:
            Blob URL

        Raises:
            StoreUnavailableError: If the upload fails
        """
        blob_client = self._get_container_client(container).get_blob_client(blob_name)
        logger.debug(f"Writing blob: {container}/{blob_name} ({len(data)} bytes)")
        try:
            blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type)
            )
        except AzureError as e:
            logger.error(f"Failed to write blob {container}/{blob_name}: {e}")
            raise StoreUnavailableError(f"Failed to write blob {container}/{blob_name}: {e}") from e

        logger.info(f"✅ Wrote blob: {container}/{blob_name} ({len(data)} bytes)")
        return blob_client.url

    def delete_blob(self, container: str, blob_name: str) -> bool:
        """
        Delete a blob.

        Returns:
            True if deleted, False if not found
        """
        blob_client = self._get_container_client(container).get_blob_client(blob_name)
        try:
            blob_client.delete_blob()
        except ResourceNotFoundError:
            logger.warning(f"Blob not found for deletion: {container}/{blob_name}")
            return False
        except AzureError as e:
            logger.error(f"Failed to delete blob: {e}")
            raise StoreUnavailableError(f"Failed to delete blob {container}/{blob_name}: {e}") from e

        logger.info(f"Deleted blob: {container}/{blob_name}")
        return True

    def blob_name_from_url(self, container: str, url: str) -> Optional[str]:
        """
        Extract the blob name from a URL in container on this account.

        Handles both public endpoints (https://acct.blob.core.windows.net/c/b)
        and path-style emulator endpoints (http://127.0.0.1:10000/devstoreaccount1/c/b).

        Returns:
            Blob name, or None if the URL points elsewhere
        """
        if not url:
            return None
        base = urlparse(self.blob_service.url)
        target = urlparse(url)
        if target.netloc.lower() != base.netloc.lower():
            return None

        prefix = f"{base.path.rstrip('/')}/{container}/"
        path = unquote(target.path)
        if not path.startswith(prefix):
            return None
        return path[len(prefix):] or None
