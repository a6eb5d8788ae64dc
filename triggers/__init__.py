"""
Triggers Package.

Azure Functions HTTP and queue trigger implementations.

HTTP Endpoints:
    /api/health, /api/livez: Health and liveness
    /api/orders/*: Order enqueue, reads, status edit, queue drain
    /api/customers/*, /api/products/*: Catalog CRUD
    /api/contracts/*: Contract file upload/list/download/delete

Queue:
    triggers.order_queue.handle_order_message: order queue consumer

Exports:
    Base classes only. Trigger instances are built in function_app.py with
    the service container.
"""

# Only import base classes to avoid initialization at import time
from .http_base import BaseHttpTrigger, SystemMonitoringTrigger, RetailApiTrigger

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
    'RetailApiTrigger',
]
