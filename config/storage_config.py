"""
Azure Storage Configuration.

Provides configuration for:
    - Storage account authentication (connection string or managed identity)
    - Table names (customers, products, orders)
    - Blob container for product images
    - File share for contract documents

Authentication:
    A connection string wins when present. Otherwise the account name is
    combined with DefaultAzureCredential (managed identity in Azure,
    Azure CLI locally).

Exports:
    StorageConfig: Pydantic storage configuration model
"""

import os
from typing import Optional
from pydantic import BaseModel, Field

from .defaults import StorageDefaults


class StorageConfig(BaseModel):
    """
    Azure Storage account configuration.

    Resource names match the ones the admin web app and the functions share,
    so both sides read and write the same tables.
    """

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Storage connection string (STORAGE_CONNECTION_STRING, falls back to AzureWebJobsStorage)"
    )

    account_name: Optional[str] = Field(
        default=None,
        description="Storage account name for DefaultAzureCredential auth (alternative to connection string)"
    )

    customers_table: str = Field(
        default=StorageDefaults.CUSTOMERS_TABLE,
        description="Table holding CUSTOMER entities"
    )

    products_table: str = Field(
        default=StorageDefaults.PRODUCTS_TABLE,
        description="Table holding PRODUCT entities"
    )

    orders_table: str = Field(
        default=StorageDefaults.ORDERS_TABLE,
        description="Table holding ORDER entities written by the queue processor"
    )

    blob_container: str = Field(
        default=StorageDefaults.BLOB_CONTAINER,
        description="Blob container for product images"
    )

    file_share_name: str = Field(
        default=StorageDefaults.FILE_SHARE_NAME,
        description="Azure Files share for contract documents"
    )

    blob_public_access: bool = Field(
        default=StorageDefaults.BLOB_PUBLIC_ACCESS,
        description="Create the image container with anonymous blob read access so browsers can load images"
    )

    @property
    def uses_connection_string(self) -> bool:
        """True when clients should be built from the connection string."""
        return bool(self.connection_string)

    def account_url(self, service: str) -> str:
        """
        Build the service endpoint for managed identity auth.

        Args:
            service: One of 'table', 'blob', 'queue', 'file'

        Raises:
            ValueError: If no account name is configured
        """
        if not self.account_name:
            raise ValueError(
                "STORAGE_ACCOUNT_NAME must be set when no storage connection string is configured"
            )
        return f"https://{self.account_name}.{service}.core.windows.net"

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration with secrets masked."""
        return {
            "connection_string": '***MASKED***' if self.connection_string else None,
            "account_name": self.account_name,
            "tables": {
                "customers": self.customers_table,
                "products": self.products_table,
                "orders": self.orders_table
            },
            "blob_container": self.blob_container,
            "file_share_name": self.file_share_name,
            "blob_public_access": self.blob_public_access
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            connection_string=os.environ.get("STORAGE_CONNECTION_STRING") or os.environ.get("AzureWebJobsStorage"),
            account_name=os.environ.get("STORAGE_ACCOUNT_NAME"),
            customers_table=os.environ.get("STORAGE_CUSTOMERS_TABLE", StorageDefaults.CUSTOMERS_TABLE),
            products_table=os.environ.get("STORAGE_PRODUCTS_TABLE", StorageDefaults.PRODUCTS_TABLE),
            orders_table=os.environ.get("STORAGE_ORDERS_TABLE", StorageDefaults.ORDERS_TABLE),
            blob_container=os.environ.get("STORAGE_BLOB_CONTAINER", StorageDefaults.BLOB_CONTAINER),
            file_share_name=os.environ.get("STORAGE_FILE_SHARE_NAME", StorageDefaults.FILE_SHARE_NAME),
            blob_public_access=os.environ.get(
                "STORAGE_BLOB_PUBLIC_ACCESS", str(StorageDefaults.BLOB_PUBLIC_ACCESS)
            ).lower() == "true",
        )
