# ============================================================================
# ORDER HTTP TRIGGERS
# ============================================================================
# STATUS: Trigger layer - /api/orders/*
# PURPOSE: Enqueue order messages, read orders, edit status, drain the queue
# EXPORTS: OrderEnqueueTrigger, OrdersTrigger, OrderItemTrigger,
#          OrderStatusTrigger, OrderDrainTrigger
# DEPENDENCIES: azure.functions, services.OrderService, services.OrderQueueDrainer
# ============================================================================
"""
Order HTTP Triggers.

Routes:
    POST   /api/orders/enqueue              - Publish raw body to the order queue (202)
    GET    /api/orders                      - List orders, newest first
    POST   /api/orders                      - Create order from {customerId, itemsJson} (202)
    POST   /api/orders/drain?max=N          - Process one batch without the queue trigger
    GET    /api/orders/{order_id}           - Order with customer and product names
    DELETE /api/orders/{order_id}           - Enqueue a Delete (202)
    PUT    /api/orders/{order_id}/status    - Change status only

Writes other than the status edit are asynchronous: the caller gets 202 and
the order table changes once the queue processor has run.

Example Usage:
    curl -X POST "https://{app-url}/api/orders/enqueue" \\
        -H "Content-Type: application/json" \\
        -d '{"action":"CreateOrUpdate","orderId":"O9","customerId":"C9","status":"Processing"}'
"""

import json
from typing import Any, Dict, List

import azure.functions as func

from core.utils import canonicalize_keys
from .http_base import RetailApiTrigger


class OrderEnqueueTrigger(RetailApiTrigger):
    """POST /api/orders/enqueue - body is forwarded unparsed."""

    def __init__(self, services):
        super().__init__("orders_enqueue", services)

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def get_success_status(self, req: func.HttpRequest) -> int:
        return 202

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_text_body(req)
        return self.services.orders.enqueue_raw(body)


class OrdersTrigger(RetailApiTrigger):
    """GET/POST /api/orders."""

    def __init__(self, services):
        super().__init__("orders", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST"]

    def get_success_status(self, req: func.HttpRequest) -> int:
        return 202 if req.method == "POST" else 200

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        if req.method == "GET":
            orders = self.services.orders.list_orders()
            return {
                "count": len(orders),
                "orders": [order.to_dict() for order in orders]
            }

        body = self.extract_json_body(req)
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        fields = canonicalize_keys(body, ("customerId", "itemsJson"))

        items_json = fields.get("itemsJson")
        if isinstance(items_json, list):
            # Accept a JSON array as well as the string form the UI posts
            items_json = json.dumps(items_json)

        return self.services.orders.create_order(fields.get("customerId"), items_json)


class OrderItemTrigger(RetailApiTrigger):
    """GET/DELETE /api/orders/{order_id}."""

    def __init__(self, services):
        super().__init__("order_item", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    def get_success_status(self, req: func.HttpRequest) -> int:
        return 202 if req.method == "DELETE" else 200

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        order_id = self.require_route_param(req, "order_id")

        if req.method == "DELETE":
            return self.services.orders.delete_order(order_id)

        return self.services.orders.get_order_details(order_id).to_dict()


class OrderStatusTrigger(RetailApiTrigger):
    """PUT /api/orders/{order_id}/status with body {"status": "..."}."""

    def __init__(self, services):
        super().__init__("order_status", services)

    def get_allowed_methods(self) -> List[str]:
        return ["PUT"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        order_id = self.require_route_param(req, "order_id")
        body = self.extract_json_body(req)
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")

        status = canonicalize_keys(body, ("status",)).get("status")
        updated = self.services.orders.update_status(order_id, status)
        return {"order": updated.to_dict()}


class OrderDrainTrigger(RetailApiTrigger):
    """POST /api/orders/drain - one receive batch through OrderProcessor."""

    def __init__(self, services):
        super().__init__("orders_drain", services)

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        params = self.extract_query_params(req, optional_params=["max"])
        max_messages = None
        if "max" in params:
            try:
                max_messages = int(params["max"])
            except ValueError:
                raise ValueError(f"max must be an integer, got {params['max']!r}")
            if max_messages < 1:
                raise ValueError("max must be at least 1")

        return self.services.drainer.drain(max_messages)
