"""
Azure Storage Queue Configuration.

Provides configuration for:
    - Order queue name
    - Producer-side base64 wrapping
    - Receive settings used by the manual drain path

The queue trigger binds to the same name through the
%STORAGE_QUEUE_NAME% app setting expression in function_app.py.

Exports:
    QueueConfig: Pydantic queue configuration model
    QueueNames: Queue name constants
"""

import os
from pydantic import BaseModel, Field

from .defaults import QueueDefaults


class QueueNames:
    """Queue name constants for easy access."""
    ORDERS = QueueDefaults.ORDERS_QUEUE


class QueueConfig(BaseModel):
    """
    Azure Storage Queue configuration for the order pipeline.
    """

    queue_name: str = Field(
        default=QueueDefaults.ORDERS_QUEUE,
        description="Storage queue carrying order messages"
    )

    encode_base64: bool = Field(
        default=QueueDefaults.ENCODE_BASE64,
        description="Wrap outgoing message text in base64 before sending"
    )

    visibility_timeout: int = Field(
        default=QueueDefaults.VISIBILITY_TIMEOUT_SECONDS,
        ge=1,
        le=7 * 24 * 3600,
        description="Seconds a received message stays hidden before redelivery"
    )

    max_messages: int = Field(
        default=QueueDefaults.MAX_MESSAGES_PER_RECEIVE,
        ge=1,
        le=32,
        description="Maximum messages per receive call (Azure limit is 32)"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            queue_name=os.environ.get("STORAGE_QUEUE_NAME", QueueDefaults.ORDERS_QUEUE),
            encode_base64=os.environ.get(
                "STORAGE_QUEUE_BASE64", str(QueueDefaults.ENCODE_BASE64)
            ).lower() == "true",
            visibility_timeout=int(os.environ.get(
                "STORAGE_QUEUE_VISIBILITY_TIMEOUT", str(QueueDefaults.VISIBILITY_TIMEOUT_SECONDS)
            )),
            max_messages=int(os.environ.get(
                "STORAGE_QUEUE_MAX_MESSAGES", str(QueueDefaults.MAX_MESSAGES_PER_RECEIVE)
            )),
        )
