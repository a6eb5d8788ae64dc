# ============================================================================
# ORDER QUEUE DRAIN
# ============================================================================
# STATUS: Service - Manual order queue processing
# PURPOSE: Process pending order messages without the queue trigger
# EXPORTS: OrderQueueDrainer
# ============================================================================
"""
Order Queue Drain.

Receives pending messages from the order queue, runs each through the same
OrderProcessor the queue trigger uses, and deletes it once processed.
Useful locally when the storage queue trigger is disabled.

A message whose processing raises is left on the queue; it becomes visible
again after the visibility timeout, matching trigger redelivery semantics.
"""

from typing import Any, Dict, Optional

from config import QueueConfig
from core.processor import OrderProcessor
from infrastructure.interface_repository import IQueueRepository
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "OrderQueueDrainer")


class OrderQueueDrainer:
    """Drains the order queue through an OrderProcessor."""

    def __init__(self, processor: OrderProcessor, queue_repo: IQueueRepository, queue_config: QueueConfig):
        self.processor = processor
        self.queue = queue_repo
        self.queue_config = queue_config

    @log_exceptions(ComponentType.SERVICE, "OrderQueueDrainer")
    def drain(self, max_messages: Optional[int] = None) -> Dict[str, Any]:
        """
        Process one batch of messages.

        Args:
            max_messages: Batch size (defaults to the configured max, capped at 32)

        Returns:
            Summary: received count, per-outcome counts, failed ids and
            processed-but-unacked ids
        """
        queue_name = self.queue_config.queue_name
        batch = min(max_messages or self.queue_config.max_messages, 32)

        messages = self.queue.receive_messages(
            queue_name,
            max_messages=batch,
            visibility_timeout=self.queue_config.visibility_timeout
        )

        outcomes: Dict[str, int] = {}
        failed = []
        unacked = []
        for msg in messages:
            try:
                outcome = self.processor.process(
                    msg['content'],
                    message_id=msg['id'],
                    dequeue_count=msg.get('dequeue_count')
                )
            except Exception as e:
                # Left un-acked: redelivered after the visibility timeout
                logger.warning(f"Message {msg['id']} left on queue after failure: {e}")
                failed.append(msg['id'])
                continue

            outcomes[outcome.value] = outcomes.get(outcome.value, 0) + 1
            if not self.queue.delete_message(queue_name, msg['id'], msg['pop_receipt']):
                # Applied but not acked: it will be redelivered and applied again
                logger.warning(f"Message {msg['id']} processed but could not be deleted")
                unacked.append(msg['id'])

        logger.info(f"Drained {len(messages)} message(s) from {queue_name}: {outcomes}")
        return {
            "queue": queue_name,
            "received": len(messages),
            "outcomes": outcomes,
            "failed": failed,
            "unacked": unacked,
        }
