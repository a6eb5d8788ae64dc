"""
Order interface module.

Exports:
    OrderDetailInterface: Single order with customer and line items
"""

from .interface import OrderDetailInterface

__all__ = ['OrderDetailInterface']
