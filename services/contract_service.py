# ============================================================================
# CONTRACT SERVICE
# ============================================================================
# STATUS: Service - Contract documents on Azure Files
# EXPORTS: ContractService, safe_file_name
# ============================================================================
"""
Contract Service.

Contracts live in the root of the contracts file share. Uploaded files are
stored as {uuid}_{original name} so re-uploads never overwrite each other.
"""

from typing import List

from core.models import ContractFile, UploadedFile
from core.utils import unique_object_name
from exceptions import ValidationError
from infrastructure.interface_repository import IFileShareRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ContractService")


def safe_file_name(name: str) -> str:
    """
    Strip any client-side directory part from an uploaded file name.

    >>> safe_file_name("scans/2025/contract.pdf")
    'contract.pdf'
    """
    base = (name or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    return base or "upload.bin"


class ContractService:
    """Contract file business logic."""

    def __init__(self, file_repo: IFileShareRepository, share_name: str):
        self.files = file_repo
        self.share_name = share_name

    def upload(self, files: List[UploadedFile]) -> List[str]:
        """
        Store every file part in the share root.

        Returns:
            Stored names, in upload order

        Raises:
            ValidationError: No files supplied
        """
        if not files:
            raise ValidationError("No file part found.")

        stored = []
        for upload in files:
            final_name = unique_object_name(safe_file_name(upload.filename))
            self.files.upload_file(self.share_name, final_name, upload.content)
            stored.append(final_name)

        logger.info(f"Uploaded {len(stored)} contract file(s) to {self.share_name}")
        return stored

    def list_contracts(self) -> List[ContractFile]:
        return sorted(self.files.list_files(self.share_name), key=lambda f: f.name)

    def download(self, name: str) -> bytes:
        """
        Raises:
            ResourceNotFoundError: Unknown file
        """
        return self.files.download_file(self.share_name, name)

    def delete(self, name: str) -> bool:
        """Delete a contract; unknown names are a no-op (returns False)."""
        deleted = self.files.delete_file(self.share_name, name)
        if deleted:
            logger.info(f"Contract deleted: {name}")
        return deleted
