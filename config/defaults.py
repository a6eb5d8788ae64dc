"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - StorageDefaults: table, container, share names and entity partitions
    - QueueDefaults: order queue name and message handling
    - AppDefaults: environment, logging, seeding

Usage:
    from config.defaults import StorageDefaults

    # In Pydantic Field definitions:
    orders_table: str = Field(default=StorageDefaults.ORDERS_TABLE, ...)
"""


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Azure Storage resource names.

    Each entity type lives in its own table under a single fixed partition,
    so RowKey alone identifies a record.
    """

    CUSTOMERS_TABLE = "customers"
    PRODUCTS_TABLE = "products"
    ORDERS_TABLE = "orders"

    BLOB_CONTAINER = "productimages"
    FILE_SHARE_NAME = "contracts"
    BLOB_PUBLIC_ACCESS = True

    # Partition keys
    CUSTOMER_PARTITION = "CUSTOMER"
    PRODUCT_PARTITION = "PRODUCT"
    ORDER_PARTITION = "ORDER"

    # Local development storage (Azurite)
    DEVELOPMENT_CONNECTION_STRING = "UseDevelopmentStorage=true"


# =============================================================================
# QUEUE DEFAULTS
# =============================================================================

class QueueDefaults:
    """
    Storage queue defaults for the order write pipeline.

    The Functions host must deliver message text untouched (host.json
    extensions.queues.messageEncoding = "none") so the processor can accept
    both base64-wrapped and raw JSON producers.
    """

    ORDERS_QUEUE = "orderqueue"
    ENCODE_BASE64 = True
    VISIBILITY_TIMEOUT_SECONDS = 30
    MAX_MESSAGES_PER_RECEIVE = 16


# =============================================================================
# ORDER DEFAULTS
# =============================================================================

class OrderDefaults:
    """
    Field defaults applied when a CreateOrUpdate message omits them.
    """

    STATUS = "Pending"
    TOTAL_AMOUNT = 0.0
    ITEMS_JSON = "[]"
    CUSTOMER_ID = ""

    # Status assigned to orders created from the admin UI
    UI_CREATED_STATUS = "Processing"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """
    Application-wide defaults.

    Controls environment name, logging and development seeding.
    """

    DEBUG_MODE = False
    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"

    # Sample product seeding (development only)
    SEED_ON_STARTUP = False
    SEED_DOWNLOAD_IMAGES = False
    SEED_HTTP_TIMEOUT_SECONDS = 15
