"""
Products interface module.

Exports:
    ProductsInterface: Product catalog with search and image upload
"""

from .interface import ProductsInterface

__all__ = ['ProductsInterface']
