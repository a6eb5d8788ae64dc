"""
Order routes Blueprint.

Routes:
    POST   orders/enqueue
    GET    orders, POST orders
    POST   orders/drain
    GET    orders/{order_id}, DELETE orders/{order_id}
    PUT    orders/{order_id}/status
"""

import azure.functions as func

from triggers.orders import (
    OrderEnqueueTrigger, OrdersTrigger, OrderItemTrigger, OrderStatusTrigger, OrderDrainTrigger
)


def create_blueprint(services) -> func.Blueprint:
    """Build the order Blueprint bound to a service container."""
    bp = func.Blueprint()

    enqueue_trigger = OrderEnqueueTrigger(services)
    orders_trigger = OrdersTrigger(services)
    item_trigger = OrderItemTrigger(services)
    status_trigger = OrderStatusTrigger(services)
    drain_trigger = OrderDrainTrigger(services)

    @bp.route(route="orders/enqueue", methods=["POST"])
    def orders_enqueue(req: func.HttpRequest) -> func.HttpResponse:
        """Publish an order message (raw body) to the order queue. Returns 202."""
        return enqueue_trigger.handle_request(req)

    @bp.route(route="orders/drain", methods=["POST"])
    def orders_drain(req: func.HttpRequest) -> func.HttpResponse:
        """Process one batch of queued order messages without the queue trigger."""
        return drain_trigger.handle_request(req)

    @bp.route(route="orders", methods=["GET", "POST"])
    def orders_collection(req: func.HttpRequest) -> func.HttpResponse:
        """List orders, or create one from {customerId, itemsJson} (queued, 202)."""
        return orders_trigger.handle_request(req)

    @bp.route(route="orders/{order_id}/status", methods=["PUT"])
    def order_status(req: func.HttpRequest) -> func.HttpResponse:
        """Change only the status of an existing order."""
        return status_trigger.handle_request(req)

    @bp.route(route="orders/{order_id}", methods=["GET", "DELETE"])
    def order_item(req: func.HttpRequest) -> func.HttpResponse:
        """Order details, or queue a Delete (202)."""
        return item_trigger.handle_request(req)

    return bp
