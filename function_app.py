"""
Azure Functions entry point for the Retail Hub.

This module wires the admin app (customers, products, orders, contracts)
and the order write pipeline onto one Function App.

Architecture:
    HTTP API / admin pages -> Services -> Repositories -> Azure Storage
                                  |                      (Tables, Blobs,
                         OrderService.enqueue_raw          Queue, Files)
                                  |
                             order queue  --queue trigger-->  OrderProcessor
                                                                   |
                                                             orders table

Order write pipeline:
    - POST /api/orders/enqueue publishes the request body (base64-wrapped by
      default) to the order queue and returns 202.
    - The queue trigger decodes each message (base64 or raw JSON, keys
      matched case-insensitively) and replaces or deletes the order row.
    - Malformed messages and unknown actions are logged and discarded.
      Storage errors propagate so the host retries and eventually moves the
      message to the poison queue.

Exports:
    app: Azure Function App instance
    services: ServiceContainer shared by every trigger in this worker

Endpoints:
    Core System:
        GET  /api/health - Storage reachability per component
        GET  /api/livez  - Liveness probe, no dependencies

    Orders:
        POST   /api/orders/enqueue
        GET    /api/orders, POST /api/orders
        POST   /api/orders/drain?max=N
        GET    /api/orders/{order_id}, DELETE /api/orders/{order_id}
        PUT    /api/orders/{order_id}/status

    Catalog:
        GET/POST/PUT  /api/customers, GET/DELETE /api/customers/{customer_id}
        GET/POST/PUT  /api/products,  GET/DELETE /api/products/{product_id}
        POST          /api/products/image

    Contracts:
        GET/POST   /api/contracts, GET/DELETE /api/contracts/{file_name}

    Admin pages:
        GET  /api/interface/{name} - home, customers, products, orders, order, contracts

Environment Variables:
    AzureWebJobsStorage: Connection string for the Functions runtime (and
        the app, unless STORAGE_CONNECTION_STRING is set)
    STORAGE_CONNECTION_STRING: Storage connection string for the app
    STORAGE_ACCOUNT_NAME: Account for DefaultAzureCredential when no connection string
    STORAGE_QUEUE_NAME: Order queue (also bound by the queue trigger)
    SEED_ON_STARTUP: Insert sample products when the products table is empty
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.data.tables").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)

# Application modules (our code)
from config import get_config
from infrastructure import RepositoryFactory
from services import create_services
from util_logger import LoggerFactory, ComponentType
from routes import create_orders_blueprint, create_catalog_blueprint, create_contracts_blueprint
from triggers.health import HealthCheckTrigger
from triggers.livez import livez_trigger
from triggers.order_queue import handle_order_message
from web_interfaces import unified_interface_handler

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

# ========================================================================
# EXPLICIT WIRING - one set of storage clients per worker process
# ========================================================================

config = get_config()
LoggerFactory.set_level("DEBUG" if config.debug_mode else config.log_level)
repositories = RepositoryFactory.create_repositories(config.storage)
services = create_services(repositories, config)

logger.info(
    f"✅ Services wired (environment={config.environment}, queue={config.queues.queue_name})"
)

if config.seed_on_startup:
    try:
        seeded = services.seeder.seed_products()
        logger.info(f"🌱 Startup seed complete: {seeded} product(s)")
    except Exception as e:
        # Sample data is optional; the app must still start
        logger.error(f"⚠️ Startup seed failed, continuing without sample data: {e}", exc_info=True)

# Initialize function app with HTTP auth level
app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# ============================================================================
# BLUEPRINT REGISTRATIONS
# ============================================================================

app.register_functions(create_orders_blueprint(services))
app.register_functions(create_catalog_blueprint(services))
app.register_functions(create_contracts_blueprint(services))

logger.info("✅ Blueprints registered: orders, catalog, contracts")

health_check_trigger = HealthCheckTrigger(services)


@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint using HTTP trigger base class."""
    return health_check_trigger.handle_request(req)


@app.route(route="livez", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def livez(req: func.HttpRequest) -> func.HttpResponse:
    """Liveness probe - is the app alive? No dependencies checked."""
    return livez_trigger.handle_request(req)


@app.route(route="interface/{name}", methods=["GET"])
def web_interface_unified(req: func.HttpRequest) -> func.HttpResponse:
    """
    Admin web pages.

    GET /api/interface/{name}

    Pages register themselves with @InterfaceRegistry.register('name');
    unknown names return 404.
    """
    return unified_interface_handler(req, services)


# ============================================================================
# ORDER QUEUE TRIGGER
# ============================================================================
# host.json sets extensions.queues.messageEncoding = "none" so the body is
# handed over untouched; the processor performs the base64-or-raw decode.
# ============================================================================

@app.queue_trigger(
    arg_name="msg",
    queue_name="%STORAGE_QUEUE_NAME%",
    connection="AzureWebJobsStorage"
)
def process_order_queue(msg: func.QueueMessage) -> None:
    """Apply one order message to the orders table."""
    handle_order_message(msg, services.processor)
