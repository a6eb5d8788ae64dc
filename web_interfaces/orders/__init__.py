"""
Orders interface module.

Exports:
    OrdersInterface: Order list, new order form and status edits
"""

from .interface import OrdersInterface

__all__ = ['OrdersInterface']
