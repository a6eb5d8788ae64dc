# ============================================================================
# BASE REPOSITORY - PURE ABSTRACT CLASS
# ============================================================================
# STATUS: Infrastructure - Repository hierarchy root
# PURPOSE: Common error handling and logging for all storage repositories
# ============================================================================
"""
Base Repository - Pure Abstract Class.

Abstract base repository class that all storage-specific repositories inherit from.
Contains NO storage implementation details, only error translation and
logging infrastructure.

Architecture:
    BaseRepository (this file - pure abstract)
        |
    Storage-specific bases (TableRepository)
        |
    Domain-specific repositories (OrderRepository, CustomerRepository, ...)

Error translation:
    azure.core ResourceNotFoundError -> left to the caller (usually a no-op or None)
    any other AzureError             -> StoreUnavailableError (chained)

Exports:
    BaseRepository: Abstract base class for repositories
"""

from abc import ABC
from contextlib import contextmanager
from typing import Optional, Dict, Any
import logging

from azure.core.exceptions import AzureError, ResourceNotFoundError as AzureResourceNotFoundError

from exceptions import ContractViolationError, StoreUnavailableError
from util_logger import LoggerFactory, ComponentType


class BaseRepository(ABC):
    """
    Pure abstract base repository with common error handling.

    Subclasses MUST call super().__init__() before any storage setup.
    """

    def __init__(self):
        self.logger = self._setup_logger()
        self.logger.debug(f"🏛️ {self.__class__.__name__} base initialized")

    def _setup_logger(self) -> logging.Logger:
        """Component-specific logger named after the concrete repository class."""
        return LoggerFactory.create_logger(
            ComponentType.REPOSITORY,
            self.__class__.__name__
        )

    def _require_type(self, value: Any, expected: type, operation: str) -> None:
        """
        Raises:
            ContractViolationError: value is not an instance of expected (caller bug)
        """
        if not isinstance(value, expected):
            raise ContractViolationError(
                f"{self.__class__.__name__}.{operation} expects {expected.__name__}, "
                f"got {type(value).__name__}"
            )

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Consistent error handling for storage calls.

        Azure "not found" errors pass through untouched so callers can decide
        whether absence is an error. Every other SDK failure is logged and
        re-raised as StoreUnavailableError with the original chained.

        Usage:
            with self._error_context("order upsert", order_id):
                self.table.upsert_entity(entity, mode=UpdateMode.REPLACE)
        """
        try:
            yield
        except AzureResourceNotFoundError:
            raise
        except AzureError as e:
            error_msg = f"❌ {operation} failed"
            if entity_id:
                error_msg += f" for {entity_id}"
            error_msg += f": {e}"
            self.logger.error(error_msg)
            raise StoreUnavailableError(error_msg) from e

    def _log_operation_result(
        self,
        success: bool,
        operation: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log operation results with consistent formatting.

        Success: "✅ {operation}: {entity_id} | {details}"  (INFO)
        Failure: "⚠️ {operation} failed: {entity_id} | {details}"  (WARNING)
        """
        if success:
            msg = f"✅ {operation}: {entity_id}"
        else:
            msg = f"⚠️ {operation} failed: {entity_id}"

        if details:
            msg += f" | {details}"

        if success:
            self.logger.info(msg)
        else:
            self.logger.warning(msg)
