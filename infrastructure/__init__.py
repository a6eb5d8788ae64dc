"""
Infrastructure Package - Lazy Loading Implementation.

Provides all repository implementations with lazy loading to prevent
premature initialization of storage clients, loggers, and environment
variable reads.

Why Lazy Loading is Essential in Azure Functions:

    Cold Start -> Import Modules -> Runtime Init -> Ready for Triggers
         |              |                |               |
      ~500ms      NO ENV VARS!     ENV VARS SET    NOW SAFE TO USE

    - function_app.py imports this package during indexing
    - Importing it must not touch the Azure SDK or read configuration
    - The actual import happens ONLY when a class is first used, which is
      when RepositoryFactory.create_repositories() is called

Exports:
    RepositoryFactory
    OrderRepository, CustomerRepository, ProductRepository
    QueueRepository, BlobRepository, FileShareRepository
    IOrderRepository, ICustomerRepository, IProductRepository,
    IQueueRepository, IBlobRepository, IFileShareRepository
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .tables import OrderRepository as _OrderRepository
    from .queue import QueueRepository as _QueueRepository


_LAZY_IMPORTS = {
    'RepositoryFactory': '.factory',
    'OrderRepository': '.tables',
    'CustomerRepository': '.tables',
    'ProductRepository': '.tables',
    'QueueRepository': '.queue',
    'BlobRepository': '.blob',
    'FileShareRepository': '.file_share',
    'IOrderRepository': '.interface_repository',
    'ICustomerRepository': '.interface_repository',
    'IProductRepository': '.interface_repository',
    'IQueueRepository': '.interface_repository',
    'IBlobRepository': '.interface_repository',
    'IFileShareRepository': '.interface_repository',
}


def __getattr__(name: str):
    """
    Lazy import repository classes when first accessed.
    """
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='infrastructure')
        return getattr(module, name)
    raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = list(_LAZY_IMPORTS.keys())
