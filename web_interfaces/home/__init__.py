"""
Home interface module.

Exports:
    HomeInterface: Landing page with record counts and links
"""

from .interface import HomeInterface

__all__ = ['HomeInterface']
