"""
Order Models - queue message, persisted row and line items.

Wire format (UTF-8 JSON, optionally base64-wrapped on the queue):

    {"action": "CreateOrUpdate", "orderId": "O1", "customerId": "C1",
     "status": "Pending", "totalAmount": 12.5,
     "orderDate": "2025-01-01T00:00:00Z",
     "itemsJson": "[{\"productId\": \"P1\", \"quantity\": 2, \"price\": 6.25}]"}

Exports:
    OrderMessage: Decoded queue message
    OrderRecord: Row in the orders table
    OrderItem: Element of itemsJson
    OrderDetails: Order joined with its customer and product names
"""

import json
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from config.defaults import OrderDefaults
from core.utils import canonicalize_keys
from .catalog import CustomerRecord
from .enums import OrderAction


class OrderMessage(BaseModel):
    """
    Order message as carried on the order queue.

    action is kept as raw text: an unrecognized action is a dispatch
    decision made by the processor, not a decode failure.
    """

    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(..., description="CreateOrUpdate or Delete (case-insensitive)")
    order_id: str = Field(..., alias="orderId", min_length=1)
    customer_id: Optional[str] = Field(default=None, alias="customerId")
    status: Optional[str] = Field(default=None)
    total_amount: Optional[float] = Field(default=None, alias="totalAmount")
    order_date: Optional[datetime] = Field(default=None, alias="orderDate")
    items_json: Optional[str] = Field(default=None, alias="itemsJson")

    WIRE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "action", "orderId", "customerId", "status",
        "totalAmount", "orderDate", "itemsJson",
    )

    @property
    def parsed_action(self) -> Optional[OrderAction]:
        return OrderAction.parse(self.action)

    def to_wire(self) -> str:
        """Serialize to the JSON text placed on the queue (None fields omitted)."""
        return json.dumps(self.model_dump(mode="json", by_alias=True, exclude_none=True))


class OrderItem(BaseModel):
    """
    One line of an order.

    product_name is filled in by the read path from the products table;
    it is never part of the stored itemsJson.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(default="", alias="productId")
    quantity: int = Field(default=0)
    price: float = Field(default=0.0)
    product_name: Optional[str] = Field(default=None, alias="productName", exclude=True)

    WIRE_FIELDS: ClassVar[Tuple[str, ...]] = ("productId", "quantity", "price")

    @property
    def total_price(self) -> float:
        return self.quantity * self.price

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        data["productName"] = self.product_name
        data["totalPrice"] = self.total_price
        return data


def parse_items(items_json: Optional[str]) -> List[OrderItem]:
    """
    Parse an itemsJson string into line items.

    Invalid JSON, a non-array document or a malformed element yields an
    empty list rather than an error; the order is still displayable.
    """
    if not items_json:
        return []
    try:
        raw_items = json.loads(items_json)
    except (TypeError, ValueError):
        return []
    if not isinstance(raw_items, list):
        return []

    items = []
    try:
        for raw in raw_items:
            if not isinstance(raw, dict):
                return []
            items.append(OrderItem(**canonicalize_keys(raw, OrderItem.WIRE_FIELDS)))
    except PydanticValidationError:
        return []
    return items


def items_total(items: List[OrderItem]) -> float:
    """Sum of quantity * price over all lines."""
    return sum(item.total_price for item in items)


class OrderRecord(BaseModel):
    """
    Row in the orders table (partition ORDER, RowKey = order_id).

    Written only by the queue processor as a full replace, so the last
    applied CreateOrUpdate for an id defines every field.
    """

    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(..., alias="orderId")
    customer_id: str = Field(default=OrderDefaults.CUSTOMER_ID, alias="customerId")
    status: str = Field(default=OrderDefaults.STATUS)
    total_amount: float = Field(default=OrderDefaults.TOTAL_AMOUNT, alias="totalAmount")
    order_date: datetime = Field(..., alias="orderDate")
    items_json: str = Field(default=OrderDefaults.ITEMS_JSON, alias="itemsJson")

    @classmethod
    def from_message(cls, message: OrderMessage, now: datetime) -> 'OrderRecord':
        """
        Build the row for a CreateOrUpdate message, defaulting absent fields.

        Args:
            message: Decoded message
            now: Processing time, used when the message has no orderDate
        """
        return cls(
            order_id=message.order_id,
            customer_id=message.customer_id if message.customer_id is not None else OrderDefaults.CUSTOMER_ID,
            status=message.status if message.status is not None else OrderDefaults.STATUS,
            total_amount=message.total_amount if message.total_amount is not None else OrderDefaults.TOTAL_AMOUNT,
            order_date=message.order_date if message.order_date is not None else now,
            items_json=message.items_json if message.items_json is not None else OrderDefaults.ITEMS_JSON,
        )

    def items(self) -> List[OrderItem]:
        return parse_items(self.items_json)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class OrderDetails(BaseModel):
    """Order joined with its customer and line items (read path only)."""

    order: OrderRecord
    customer: CustomerRecord
    items: List[OrderItem] = Field(default_factory=list)

    @property
    def total_price(self) -> float:
        return items_total(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": self.order.to_dict(),
            "customer": self.customer.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "totalPrice": self.total_price,
        }
