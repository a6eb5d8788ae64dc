"""
Routes module - Azure Functions Blueprint definitions.

Each module exposes create_blueprint(services), so the routes are bound to
an explicit service container instead of module-level singletons.

Structure:
    orders.py     - Order pipeline and order reads (orders/*)
    catalog.py    - Customers and products (customers/*, products/*)
    contracts.py  - Contract files (contracts/*)

Usage:
    app.register_functions(create_orders_blueprint(services))
"""

from .orders import create_blueprint as create_orders_blueprint
from .catalog import create_blueprint as create_catalog_blueprint
from .contracts import create_blueprint as create_contracts_blueprint

__all__ = [
    'create_orders_blueprint',
    'create_catalog_blueprint',
    'create_contracts_blueprint',
]
