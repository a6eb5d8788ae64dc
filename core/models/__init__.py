"""
Core Data Models Package.

Contains pure data structures without storage or transport logic.

Exports:
    OrderAction, ProcessOutcome, OrderStatus: Enums
    OrderMessage, OrderRecord, OrderItem, OrderDetails: Order models
    CustomerRecord, ProductRecord: Catalog models
    ContractFile, UploadedFile: File models
"""

# Enums
from .enums import (
    OrderAction,
    ProcessOutcome,
    OrderStatus
)

# Catalog models
from .catalog import (
    CustomerRecord,
    ProductRecord
)

# Order models
from .order import (
    OrderMessage,
    OrderRecord,
    OrderItem,
    OrderDetails,
    parse_items,
    items_total
)

# File models
from .files import (
    ContractFile,
    UploadedFile
)

__all__ = [
    'OrderAction',
    'ProcessOutcome',
    'OrderStatus',
    'CustomerRecord',
    'ProductRecord',
    'OrderMessage',
    'OrderRecord',
    'OrderItem',
    'OrderDetails',
    'parse_items',
    'items_total',
    'ContractFile',
    'UploadedFile',
]
