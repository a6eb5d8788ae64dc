# ============================================================================
# QUEUE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - order queue over azure-storage-queue
# PURPOSE: Order queue access with client reuse and idempotent queue creation
# EXPORTS: QueueRepository
# INTERFACES: IQueueRepository
# DEPENDENCIES: azure-storage-queue, azure-core
# ENTRY_POINTS: RepositoryFactory.create_repositories()['queue_repo']
# ============================================================================

"""
Order Queue Repository

Wraps a QueueServiceClient built once per worker by RepositoryFactory and
passed in explicitly. Queue clients are cached per queue name.

Message text goes out exactly as given: the order service decides whether
to base64-wrap it, and the consumer accepts either form. Reliability comes
from the SDK's own retry policy and the queue's at-least-once delivery; no
extra retry loop is layered on top.

Usage:
    repos = RepositoryFactory.create_repositories(config.storage)
    message_id = repos['queue_repo'].send_message("orderqueue", text)
"""

from azure.storage.queue import QueueServiceClient, QueueClient
from azure.core.exceptions import AzureError, ResourceExistsError
from typing import List, Dict, Any

from exceptions import StoreUnavailableError
from infrastructure.interface_repository import IQueueRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "QueueRepository")


class QueueRepository(IQueueRepository):
    """
    Storage queue repository over a shared QueueServiceClient.
    """

    def __init__(self, queue_service: QueueServiceClient):
        self.queue_service = queue_service
        self._clients: Dict[str, QueueClient] = {}
        self._ensured: set = set()

    def _client(self, queue_name: str) -> QueueClient:
        """
        Get or create a cached queue client.

        Args:
            queue_name: Queue name

        Returns:
            QueueClient for queue_name (one per name per worker)
        """
        if queue_name not in self._clients:
            logger.debug(f"📦 New QueueClient: {queue_name}")
            self._clients[queue_name] = self.queue_service.get_queue_client(queue_name)
        return self._clients[queue_name]

    def ensure_queue(self, queue_name: str) -> None:
        """
        Create the queue if missing (idempotent, once per worker per queue).

        Raises:
            StoreUnavailableError: If the queue service cannot be reached
        """
        if queue_name in self._ensured:
            return
        queue_client = self._client(queue_name)
        try:
            queue_client.create_queue()
            logger.info(f"✅ Queue {queue_name} created")
        except ResourceExistsError:
            logger.debug(f"Queue {queue_name} exists")
        except AzureError as e:
            logger.error(f"❌ Error creating queue {queue_name}: {e}")
            raise StoreUnavailableError(f"Queue {queue_name} unavailable: {e}") from e
        self._ensured.add(queue_name)

    def send_message(self, queue_name: str, content: str) -> str:
        """
        Send message text to the specified queue.

        Args:
            queue_name: Target queue name
            content: Message text, already encoded by the caller

        Returns:
            Message ID

        Raises:
            StoreUnavailableError: If the send fails
        """
        self.ensure_queue(queue_name)
        queue_client = self._client(queue_name)

        logger.debug(f"Message size: {len(content)} chars")
        try:
            response = queue_client.send_message(content)
        except AzureError as e:
            logger.error(f"❌ Failed to send message to {queue_name}: {e}")
            raise StoreUnavailableError(f"Failed to send message to {queue_name}: {e}") from e

        logger.info(f"📤 Message sent to {queue_name}. ID: {response.id}")
        return response.id

    def receive_messages(
        self,
        queue_name: str,
        max_messages: int = 1,
        visibility_timeout: int = 30
    ) -> List[Dict[str, Any]]:
        """
        Receive a batch and hide it for visibility_timeout seconds.

        Content is returned as delivered (no decoding); pass it to
        OrderProcessor.process, which handles both base64 and raw JSON.

        Args:
            queue_name: Source queue
            max_messages: Batch size, 1-32
            visibility_timeout: Seconds before an undeleted message reappears

        Returns:
            Dicts with id, content, pop_receipt, dequeue_count, inserted_on
        """
        self.ensure_queue(queue_name)
        queue_client = self._client(queue_name)

        try:
            messages = queue_client.receive_messages(
                max_messages=max_messages,
                visibility_timeout=visibility_timeout
            )
            result = []
            for msg in messages:
                result.append({
                    'id': msg.id,
                    'content': msg.content,
                    'pop_receipt': msg.pop_receipt,
                    'dequeue_count': msg.dequeue_count,
                    'inserted_on': msg.inserted_on.isoformat() if msg.inserted_on else None,
                })
                if len(result) >= max_messages:
                    break
        except AzureError as e:
            logger.error(f"❌ Receive from {queue_name} failed: {e}")
            raise StoreUnavailableError(f"Failed to receive from {queue_name}: {e}") from e

        logger.info(f"📥 {len(result)} message(s) received from {queue_name}")
        return result

    def delete_message(self, queue_name: str, message_id: str, pop_receipt: str) -> bool:
        """
        Remove a processed message (acknowledge).

        Returns:
            False when the delete failed (the message will reappear)
        """
        queue_client = self._client(queue_name)

        try:
            queue_client.delete_message(message_id, pop_receipt)
            logger.debug(f"🗑️ {queue_name}: deleted {message_id}")
            return True
        except AzureError as e:
            logger.error(f"❌ {queue_name}: delete of {message_id} failed: {e}")
            return False

    def get_queue_length(self, queue_name: str) -> int:
        """
        Approximate message count from the queue properties.

        Raises:
            StoreUnavailableError: If queue properties cannot be read
        """
        self.ensure_queue(queue_name)
        queue_client = self._client(queue_name)

        try:
            properties = queue_client.get_queue_properties()
        except AzureError as e:
            logger.error(f"❌ Properties of {queue_name} unavailable: {e}")
            raise StoreUnavailableError(f"Queue {queue_name} unavailable: {e}") from e

        count = properties.approximate_message_count or 0
        logger.debug(f"📊 {queue_name}: ~{count} message(s)")
        return count
