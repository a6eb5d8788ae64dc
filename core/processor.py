"""
Order Processor - applies order queue messages to the orders table.

Invoked once per delivered message by the queue trigger. Flow:

    decode -> (malformed? log + discard)
           -> dispatch on action
                CreateOrUpdate -> build OrderRecord with defaults -> replace by key
                Delete         -> delete by key (absent key is a no-op)
                other          -> log + discard

The write is an unconditional replace keyed by orderId, so redelivery of the
same message converges to the same row. Unexpected errors are logged and
re-raised so the Functions host applies its retry and poison-queue policy.

Exports:
    OrderProcessor
"""

from datetime import datetime
from typing import Callable, Optional, Union

from core.codec import decode_order_message
from core.models import OrderAction, OrderMessage, OrderRecord, ProcessOutcome
from core.utils import utc_now
from exceptions import MalformedMessageError, UnknownActionError
from infrastructure.interface_repository import IOrderRepository
from util_logger import LoggerFactory, ComponentType


class OrderProcessor:
    """
    Consumes order messages.

    Args:
        order_repository: Order store handle (passed in, never looked up)
        clock: Returns the processing time used for a missing orderDate
    """

    def __init__(self, order_repository: IOrderRepository, clock: Callable[[], datetime] = utc_now):
        self.orders = order_repository
        self.clock = clock
        self.logger = LoggerFactory.create_logger(ComponentType.PROCESSOR, "OrderProcessor")

    def process(
        self,
        raw: Union[str, bytes],
        message_id: Optional[str] = None,
        dequeue_count: Optional[int] = None
    ) -> ProcessOutcome:
        """
        Process one queue message.

        Args:
            raw: Message text as delivered by the queue
            message_id: Queue message id, for log correlation
            dequeue_count: Delivery attempt number, for log correlation

        Returns:
            ProcessOutcome describing what was done

        Raises:
            Any storage error, after logging it
        """
        dims = {'message_id': message_id, 'dequeue_count': dequeue_count}

        result = decode_order_message(raw)
        if not result.is_ok:
            error = MalformedMessageError(result.error.detail)
            self.logger.warning(
                f"Invalid message payload, discarding: {error}",
                extra={'custom_dimensions': dims}
            )
            return ProcessOutcome.DISCARDED_MALFORMED

        message = result.message
        dims['order_id'] = message.order_id
        dims['base64'] = result.was_base64

        try:
            return self._dispatch(message, dims)
        except Exception as e:
            self.logger.error(
                f"Failed processing order message for {message.order_id}: {e}",
                exc_info=True,
                extra={'custom_dimensions': dims}
            )
            raise

    def _dispatch(self, message: OrderMessage, dims: dict) -> ProcessOutcome:
        action = message.parsed_action

        if action is OrderAction.CREATE_OR_UPDATE:
            record = OrderRecord.from_message(message, now=self.clock())
            self.orders.upsert_order(record)
            self.logger.info(
                f"Order {record.order_id} upserted (status={record.status})",
                extra={'custom_dimensions': dims}
            )
            return ProcessOutcome.UPSERTED

        if action is OrderAction.DELETE:
            self.orders.delete_order(message.order_id)
            self.logger.info(
                f"Order {message.order_id} deleted",
                extra={'custom_dimensions': dims}
            )
            return ProcessOutcome.DELETED

        self.logger.warning(
            f"{UnknownActionError(message.action)}, discarding message for {message.order_id}",
            extra={'custom_dimensions': dims}
        )
        return ProcessOutcome.DISCARDED_UNKNOWN_ACTION
