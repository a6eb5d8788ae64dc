# ============================================================================
# ORDER QUEUE HANDLER
# ============================================================================
# STATUS: Trigger layer - Storage queue message processing
# PURPOSE: Handle messages from the order queue (STORAGE_QUEUE_NAME)
# EXPORTS: handle_order_message
# DEPENDENCIES: azure.functions, core.processor
# ============================================================================
"""
Order Queue Message Handler Module.

Handles messages from the order storage queue. host.json sets
messageEncoding to "none", so the body arrives exactly as the producer
wrote it (base64-wrapped or raw JSON) and OrderProcessor does the decode.

Usage:
    from triggers.order_queue import handle_order_message

    @app.queue_trigger(
        arg_name="msg",
        queue_name="%STORAGE_QUEUE_NAME%",
        connection="AzureWebJobsStorage"
    )
    def process_order_queue(msg: func.QueueMessage) -> None:
        handle_order_message(msg, services.processor)

Exceptions are re-raised: the Functions host then retries the message and,
after maxDequeueCount attempts, moves it to the poison queue.
"""

import time
import uuid

import azure.functions as func

from core.models import ProcessOutcome
from core.processor import OrderProcessor
from util_logger import LoggerFactory, ComponentType, LogContext

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "OrderQueueHandler")


def handle_order_message(msg: func.QueueMessage, processor: OrderProcessor) -> ProcessOutcome:
    """
    Process one order queue message.

    Args:
        msg: Storage queue message
        processor: OrderProcessor wired to the orders table

    Returns:
        ProcessOutcome from the processor
    """
    correlation_id = str(uuid.uuid4())[:8]
    start_time = time.time()

    dims = LogContext(
        message_id=msg.id,
        dequeue_count=msg.dequeue_count,
        correlation_id=correlation_id
    ).to_dict()
    dims['insertion_time'] = msg.insertion_time.isoformat() if msg.insertion_time else None

    logger.info(
        f"[{correlation_id}] 📬 ORDER QUEUE MESSAGE RECEIVED",
        extra={'custom_dimensions': dims}
    )

    try:
        outcome = processor.process(
            msg.get_body(),
            message_id=msg.id,
            dequeue_count=msg.dequeue_count
        )
    except Exception as e:
        elapsed = time.time() - start_time
        logger.error(
            f"[{correlation_id}] ❌ Order message {msg.id} failed after {elapsed:.3f}s "
            f"(attempt {msg.dequeue_count}): {e}",
            extra={'custom_dimensions': dims}
        )
        raise

    elapsed = time.time() - start_time
    logger.info(f"[{correlation_id}] ✅ Order message {msg.id} -> {outcome.value} in {elapsed:.3f}s")
    return outcome
