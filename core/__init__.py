"""
Core Order Pipeline Components.

Structure:
    models/: Pure data structures (orders, catalog, files)
    codec.py: Queue text -> OrderMessage decoding
    processor.py: Applies decoded messages to the orders table
    utils.py: Id and key helpers

Exports:
    OrderProcessor: Queue consumer
    decode_order_message, encode_queue_payload: Queue codec
"""

from . import models

# Lazy imports to avoid circular dependencies with infrastructure
_LAZY_IMPORTS = {
    'OrderProcessor': '.processor',
    'decode_order_message': '.codec',
    'encode_queue_payload': '.codec',
    'DecodeResult': '.codec',
}


def __getattr__(name):
    """Lazy import core classes to avoid circular dependencies."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='core')
        return getattr(module, name)
    raise AttributeError(f"module 'core' has no attribute '{name}'")


__all__ = [
    'OrderProcessor',
    'decode_order_message',
    'encode_queue_payload',
    'DecodeResult',
    'models',
]
