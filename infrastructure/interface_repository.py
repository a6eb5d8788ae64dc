"""
Repository Abstract Base Classes - Single Point of Truth.

Enforces exact method signatures across all repository implementations
(Azure-backed ones and the in-memory fakes used by tests), preventing
parameter name mismatches. All parameter names, return types, and method
signatures are defined here and nowhere else.

Philosophy: "Define once, enforce everywhere"

Exports:
    IOrderRepository: Orders table interface
    ICustomerRepository: Customers table interface
    IProductRepository: Products table interface
    IQueueRepository: Storage queue interface
    IBlobRepository: Blob storage interface
    IFileShareRepository: Azure Files interface
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

from core.models import OrderRecord, CustomerRecord, ProductRecord, ContractFile


# ============================================================================
# TABLE REPOSITORIES
# ============================================================================

class IOrderRepository(ABC):
    """
    Order repository interface with EXACT method signatures.

    Writes are full replaces keyed by order_id; there is no version check.
    """

    @abstractmethod
    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Get order by ID, or None if absent"""
        pass

    @abstractmethod
    def upsert_order(self, order: OrderRecord) -> None:
        """Create or fully replace the row at order.order_id"""
        pass

    @abstractmethod
    def delete_order(self, order_id: str) -> None:
        """Delete the row at order_id - absent key is a no-op"""
        pass

    @abstractmethod
    def list_orders(self) -> List[OrderRecord]:
        """All orders in the ORDER partition"""
        pass


class ICustomerRepository(ABC):
    """
    Customer repository interface with EXACT method signatures.
    """

    @abstractmethod
    def get_customer(self, customer_id: str) -> Optional[CustomerRecord]:
        pass

    @abstractmethod
    def upsert_customer(self, customer: CustomerRecord) -> None:
        pass

    @abstractmethod
    def delete_customer(self, customer_id: str) -> None:
        """Absent key is a no-op"""
        pass

    @abstractmethod
    def list_customers(self) -> List[CustomerRecord]:
        pass


class IProductRepository(ABC):
    """
    Product repository interface with EXACT method signatures.
    """

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        pass

    @abstractmethod
    def upsert_product(self, product: ProductRecord) -> None:
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        """Absent key is a no-op"""
        pass

    @abstractmethod
    def list_products(self) -> List[ProductRecord]:
        pass


# ============================================================================
# QUEUE REPOSITORY
# ============================================================================

class IQueueRepository(ABC):
    """
    Queue repository interface with EXACT method signatures.
    All queue operations must go through implementations of this interface.

    Message text is sent exactly as given; encoding (base64 or raw) is the
    caller's decision.
    """

    @abstractmethod
    def ensure_queue(self, queue_name: str) -> None:
        """Create the queue if it does not exist (idempotent)"""
        pass

    @abstractmethod
    def send_message(self, queue_name: str, content: str) -> str:
        """
        Send message text to the specified queue.

        Args:
            queue_name: Target queue name
            content: Message text (already encoded)

        Returns:
            Message ID

        Raises:
            StoreUnavailableError: If the queue service rejects or cannot be reached
        """
        pass

    @abstractmethod
    def receive_messages(
        self,
        queue_name: str,
        max_messages: int = 1,
        visibility_timeout: int = 30
    ) -> List[Dict[str, Any]]:
        """
        Receive messages from queue.

        Returns:
            List of dicts with id, content (raw text), pop_receipt, dequeue_count
        """
        pass

    @abstractmethod
    def delete_message(self, queue_name: str, message_id: str, pop_receipt: str) -> bool:
        """
        Delete (acknowledge) a message.

        Returns:
            True if deleted successfully
        """
        pass

    @abstractmethod
    def get_queue_length(self, queue_name: str) -> int:
        """Approximate number of messages in queue"""
        pass


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

class IBlobRepository(ABC):
    """
    Interface for blob storage operations.
    """

    @abstractmethod
    def upload_blob(
        self,
        container: str,
        blob_name: str,
        data: bytes,
        content_type: str = "application/octet-stream"
    ) -> str:
        """Upload (overwrite) a blob and return its URL"""
        pass

    @abstractmethod
    def delete_blob(self, container: str, blob_name: str) -> bool:
        """Delete a blob; returns False if it did not exist"""
        pass

    @abstractmethod
    def blob_name_from_url(self, container: str, url: str) -> Optional[str]:
        """Blob name if url points into container on this account, else None"""
        pass


# ============================================================================
# FILE SHARE REPOSITORY
# ============================================================================

class IFileShareRepository(ABC):
    """
    Interface for Azure Files operations (share root only).
    """

    @abstractmethod
    def upload_file(self, share: str, file_name: str, data: bytes) -> None:
        """Create or overwrite a file in the share root"""
        pass

    @abstractmethod
    def list_files(self, share: str) -> List[ContractFile]:
        """Files in the share root (directories excluded)"""
        pass

    @abstractmethod
    def download_file(self, share: str, file_name: str) -> bytes:
        """
        Read a whole file.

        Raises:
            ResourceNotFoundError: If the file does not exist
        """
        pass

    @abstractmethod
    def delete_file(self, share: str, file_name: str) -> bool:
        """Delete a file; returns False if it did not exist"""
        pass
