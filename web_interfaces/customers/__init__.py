"""
Customers interface module.

Exports:
    CustomersInterface: Customer list and upsert form
"""

from .interface import CustomersInterface

__all__ = ['CustomersInterface']
