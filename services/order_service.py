# ============================================================================
# ORDER SERVICE
# ============================================================================
# STATUS: Service - Order write pipeline producer and order read paths
# PURPOSE: Enqueue order messages; read orders with customer/product joins
# EXPORTS: OrderService
# DEPENDENCIES: infrastructure (explicit repository handles), core.codec
# ============================================================================
"""
Order Service.

Writes to the orders table never happen here directly (except the status
edit): they are published to the order queue and applied by OrderProcessor.
Handles:
- Enqueueing raw order JSON (POST /api/orders/enqueue)
- Creating orders from the admin UI (new id, status Processing, queued)
- Queued deletes
- Reads with customer and product name joins
- Status-only edits (read, change Status, replace)

Exports:
    OrderService
"""

import json
from typing import Any, Dict, List

from config import QueueConfig, OrderDefaults
from core.codec import encode_queue_payload
from core.models import (
    OrderAction, OrderMessage, OrderRecord, OrderDetails, CustomerRecord,
    parse_items, items_total
)
from core.utils import generate_record_id, utc_now
from exceptions import ValidationError, ResourceNotFoundError
from infrastructure.interface_repository import (
    IOrderRepository, ICustomerRepository, IProductRepository, IQueueRepository
)
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "OrderService")


class OrderService:
    """
    Business logic for orders.

    All collaborators are passed in; nothing is looked up globally.
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        customer_repo: ICustomerRepository,
        product_repo: IProductRepository,
        queue_repo: IQueueRepository,
        queue_config: QueueConfig
    ):
        self.orders = order_repo
        self.customers = customer_repo
        self.products = product_repo
        self.queue = queue_repo
        self.queue_config = queue_config

    # =========================================================================
    # ENQUEUE (write pipeline producer)
    # =========================================================================

    def enqueue_raw(self, body: str) -> Dict[str, Any]:
        """
        Publish an arbitrary request body onto the order queue.

        The body is not parsed here; the consumer decides whether it is a
        valid order message.

        Args:
            body: Request body text

        Returns:
            Acknowledgement dict: status, message_id, queue

        Raises:
            ValidationError: Empty or whitespace-only body
            StoreUnavailableError: Queue publish failed
        """
        if body is None or not body.strip():
            raise ValidationError("Empty body.")

        queue_name = self.queue_config.queue_name
        content = encode_queue_payload(body, base64_wrap=self.queue_config.encode_base64)

        self.queue.ensure_queue(queue_name)
        message_id = self.queue.send_message(queue_name, content)

        logger.info(
            f"📤 Order message enqueued on {queue_name} (id={message_id}, base64={self.queue_config.encode_base64})"
        )
        return {
            "status": "queued",
            "message_id": message_id,
            "queue": queue_name,
        }

    def enqueue_message(self, message: OrderMessage) -> Dict[str, Any]:
        """Serialize an OrderMessage and publish it."""
        return self.enqueue_raw(message.to_wire())

    def create_order(self, customer_id: str, items_json: str) -> Dict[str, Any]:
        """
        Create an order from the admin UI.

        Builds a CreateOrUpdate message with a new id, status Processing and
        totalAmount computed from the items, then enqueues it. The order
        appears in the table once the processor has consumed the message.

        Raises:
            ValidationError: customer_id or items_json blank, or items_json not a JSON array
        """
        if not customer_id or not str(customer_id).strip() or not items_json or not str(items_json).strip():
            raise ValidationError("Customer and items are required.")
        if not isinstance(items_json, str):
            raise ValidationError("itemsJson must be a JSON array")

        try:
            raw_items = json.loads(items_json)
        except ValueError as e:
            raise ValidationError(f"itemsJson is not valid JSON: {e}") from e
        if not isinstance(raw_items, list):
            raise ValidationError("itemsJson must be a JSON array")

        order_id = generate_record_id()
        message = OrderMessage(
            action=OrderAction.CREATE_OR_UPDATE.value,
            order_id=order_id,
            customer_id=customer_id,
            status=OrderDefaults.UI_CREATED_STATUS,
            total_amount=items_total(parse_items(items_json)),
            order_date=utc_now(),
            items_json=items_json,
        )
        ack = self.enqueue_message(message)
        logger.info(f"Order {order_id} created for customer {customer_id}")
        return {"order_id": order_id, **ack}

    def delete_order(self, order_id: str) -> Dict[str, Any]:
        """Enqueue a Delete for order_id (applied by the processor)."""
        if not order_id or not order_id.strip():
            raise ValidationError("order_id is required")
        message = OrderMessage(action=OrderAction.DELETE.value, order_id=order_id)
        ack = self.enqueue_message(message)
        return {"order_id": order_id, **ack}

    # =========================================================================
    # READ
    # =========================================================================

    def list_orders(self) -> List[OrderRecord]:
        """All orders, newest first."""
        return sorted(self.orders.list_orders(), key=lambda o: o.order_date, reverse=True)

    def get_order(self, order_id: str) -> OrderRecord:
        """
        Raises:
            ResourceNotFoundError: Unknown order id
        """
        order = self.orders.get_order(order_id)
        if order is None:
            raise ResourceNotFoundError(f"Order not found: {order_id}")
        return order

    def get_order_details(self, order_id: str) -> OrderDetails:
        """
        Order joined with its customer and product names.

        A missing customer or product is shown as a placeholder rather than
        failing the whole page. Invalid itemsJson yields no items.

        Raises:
            ResourceNotFoundError: Unknown order id
        """
        order = self.get_order(order_id)

        customer = self.customers.get_customer(order.customer_id) if order.customer_id else None
        if customer is None:
            customer = CustomerRecord.not_found()

        items = order.items()
        for item in items:
            product = self.products.get_product(item.product_id) if item.product_id else None
            item.product_name = product.name if product is not None else "Product not found"

        return OrderDetails(order=order, customer=customer, items=items)

    # =========================================================================
    # STATUS EDIT
    # =========================================================================

    def update_status(self, order_id: str, status: str) -> OrderRecord:
        """
        Change only the status of an existing order.

        Raises:
            ValidationError: Blank status
            ResourceNotFoundError: Unknown order id
        """
        if status is None or not str(status).strip():
            raise ValidationError("status is required")

        order = self.get_order(order_id)
        updated = order.model_copy(update={"status": str(status).strip()})
        self.orders.upsert_order(updated)
        logger.info(f"Order {order_id} status: {order.status} -> {updated.status}")
        return updated
