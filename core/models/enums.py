"""
Pure Enumeration Types for the Order Pipeline.

No business logic - pure type definitions only.

Exports:
    OrderAction: Queue message actions
    ProcessOutcome: Result of processing one queue message
    OrderStatus: Well-known order status values
"""

from enum import Enum
from typing import Optional


class OrderAction(Enum):
    """
    Actions carried by an order queue message.

    Wire values are matched case-insensitively ("createorupdate" is valid).
    """

    CREATE_OR_UPDATE = "CreateOrUpdate"
    DELETE = "Delete"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['OrderAction']:
        """Return the matching action, or None if the value is not recognized."""
        if not isinstance(value, str):
            return None
        needle = value.strip().lower()
        for action in cls:
            if action.value.lower() == needle:
                return action
        return None


class ProcessOutcome(Enum):
    """
    What the queue processor did with one message.

    Only UPSERTED and DELETED touch the orders table.
    """

    UPSERTED = "upserted"
    DELETED = "deleted"
    DISCARDED_MALFORMED = "discarded_malformed"
    DISCARDED_UNKNOWN_ACTION = "discarded_unknown_action"


class OrderStatus(Enum):
    """
    Status values used by the admin UI.

    The orders table stores status as free text, so values outside this set
    are preserved as-is.
    """

    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
