"""
Contracts interface module.

Exports:
    ContractsInterface: Contract file list and upload
"""

from .interface import ContractsInterface

__all__ = ['ContractsInterface']
