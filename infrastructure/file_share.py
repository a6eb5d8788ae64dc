# ============================================================================
# FILE SHARE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Files repository
# PURPOSE: Contract documents in the root directory of a file share
# EXPORTS: FileShareRepository
# INTERFACES: IFileShareRepository
# DEPENDENCIES: azure-storage-file-share, azure-core
# ENTRY_POINTS: RepositoryFactory.create_repositories()['file_repo']
# ============================================================================

"""
File Share Repository.

Only the share root is used; subdirectories are ignored by list_files.
Shares are created on first use (idempotent).
"""

from typing import Dict, List

from azure.storage.fileshare import ShareServiceClient, ShareClient, ShareDirectoryClient
from azure.core.exceptions import AzureError, ResourceExistsError
from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError

from core.models import ContractFile
from exceptions import StoreUnavailableError, ResourceNotFoundError
from infrastructure.interface_repository import IFileShareRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "FileShareRepository")


class FileShareRepository(IFileShareRepository):
    """
    Azure Files repository over a shared ShareServiceClient.
    """

    def __init__(self, share_service: ShareServiceClient):
        self.share_service = share_service
        self._share_clients: Dict[str, ShareClient] = {}

    def _get_share_client(self, share: str) -> ShareClient:
        if share not in self._share_clients:
            share_client = self.share_service.get_share_client(share)
            try:
                share_client.create_share()
                logger.info(f"✅ Created file share: {share}")
            except ResourceExistsError:
                logger.debug(f"File share already exists: {share}")
            except AzureError as e:
                logger.error(f"❌ Error creating file share {share}: {e}")
                raise StoreUnavailableError(f"File share {share} unavailable: {e}") from e
            self._share_clients[share] = share_client
        return self._share_clients[share]

    def _root(self, share: str) -> ShareDirectoryClient:
        return self._get_share_client(share).get_directory_client("")

    def upload_file(self, share: str, file_name: str, data: bytes) -> None:
        """
        Create (or overwrite) a file in the share root.

        Raises:
            StoreUnavailableError: If the upload fails
        """
        file_client = self._root(share).get_file_client(file_name)
        try:
            file_client.upload_file(data)
        except AzureError as e:
            logger.error(f"Failed to upload {share}/{file_name}: {e}")
            raise StoreUnavailableError(f"Failed to upload {share}/{file_name}: {e}") from e
        logger.info(f"✅ Uploaded file: {share}/{file_name} ({len(data)} bytes)")

    def list_files(self, share: str) -> List[ContractFile]:
        """
        Files in the share root with size and last-modified time.
        """
        root = self._root(share)
        result = []
        try:
            for item in root.list_directories_and_files():
                if item["is_directory"]:
                    continue
                properties = root.get_file_client(item["name"]).get_file_properties()
                result.append(ContractFile(
                    name=item["name"],
                    size=properties.size or 0,
                    uploaded_on=properties.last_modified,
                ))
        except AzureError as e:
            logger.error(f"Failed to list files in {share}: {e}")
            raise StoreUnavailableError(f"Failed to list files in {share}: {e}") from e

        logger.debug(f"📂 Listed {len(result)} files in {share}")
        return result

    def download_file(self, share: str, file_name: str) -> bytes:
        """
        Read a whole file into memory.

        Raises:
            ResourceNotFoundError: If the file does not exist
            StoreUnavailableError: On any other storage failure
        """
        file_client = self._root(share).get_file_client(file_name)
        try:
            return file_client.download_file().readall()
        except AzureResourceNotFoundError as e:
            raise ResourceNotFoundError(f"File not found: {file_name}") from e
        except AzureError as e:
            logger.error(f"Failed to download {share}/{file_name}: {e}")
            raise StoreUnavailableError(f"Failed to download {share}/{file_name}: {e}") from e

    def delete_file(self, share: str, file_name: str) -> bool:
        """
        Delete a file.

        Returns:
            True if deleted, False if not found
        """
        file_client = self._root(share).get_file_client(file_name)
        try:
            file_client.delete_file()
        except AzureResourceNotFoundError:
            logger.warning(f"File not found for deletion: {share}/{file_name}")
            return False
        except AzureError as e:
            logger.error(f"Failed to delete {share}/{file_name}: {e}")
            raise StoreUnavailableError(f"Failed to delete {share}/{file_name}: {e}") from e

        logger.info(f"Deleted file: {share}/{file_name}")
        return True
