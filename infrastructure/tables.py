# ============================================================================
# TABLE STORAGE REPOSITORIES
# ============================================================================
# STATUS: Infrastructure - Azure Table Storage repositories
# PURPOSE: Orders, customers and products tables over azure-data-tables
# EXPORTS: TableRepository, OrderRepository, CustomerRepository, ProductRepository
# DEPENDENCIES: azure-data-tables, azure-core
# ============================================================================
"""
Table Storage Repositories.

One table per entity type, one fixed partition per table, RowKey = record id:

    orders     PartitionKey=ORDER     CustomerId, Status, TotalAmount, OrderDate, ItemsJson
    customers  PartitionKey=CUSTOMER  FullName, Email, Phone
    products   PartitionKey=PRODUCT   Name, Description, Price, ImageUrl

All writes use UpdateMode.REPLACE: the stored row is exactly the last record
written, with no merge of older properties and no ETag check.

Usage:
    from infrastructure.factory import RepositoryFactory
    repos = RepositoryFactory.create_repositories(config.storage)
    repos['order_repo'].upsert_order(record)
"""

from typing import Dict, Iterator, List, Optional

from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError
from azure.data.tables import TableServiceClient, TableClient, TableEntity, UpdateMode

from config.defaults import StorageDefaults
from core.models import OrderRecord, CustomerRecord, ProductRecord
from core.utils import utc_now
from .base import BaseRepository
from .interface_repository import IOrderRepository, ICustomerRepository, IProductRepository


# ============================================================================
# STORAGE-SPECIFIC BASE
# ============================================================================

class TableRepository(BaseRepository):
    """
    Single-partition table access.

    The table is created on first use (idempotent) and the TableClient is
    reused for the lifetime of the repository.
    """

    def __init__(self, table_service: TableServiceClient, table_name: str, partition_key: str):
        super().__init__()
        self.table_service = table_service
        self.table_name = table_name
        self.partition_key = partition_key
        self._table_client: Optional[TableClient] = None

    @property
    def table(self) -> TableClient:
        if self._table_client is None:
            with self._error_context(f"create table {self.table_name}"):
                self._table_client = self.table_service.create_table_if_not_exists(self.table_name)
            self.logger.debug(f"📦 Table client ready: {self.table_name}")
        return self._table_client

    def _get_entity(self, row_key: str) -> Optional[TableEntity]:
        with self._error_context(f"{self.table_name} read", row_key):
            try:
                return self.table.get_entity(partition_key=self.partition_key, row_key=row_key)
            except AzureResourceNotFoundError:
                return None

    def _replace_entity(self, row_key: str, properties: Dict) -> None:
        entity = {"PartitionKey": self.partition_key, "RowKey": row_key}
        entity.update(properties)
        with self._error_context(f"{self.table_name} upsert", row_key):
            self.table.upsert_entity(entity=entity, mode=UpdateMode.REPLACE)
        self._log_operation_result(True, f"{self.table_name} upsert", row_key)

    def _delete_entity(self, row_key: str) -> None:
        with self._error_context(f"{self.table_name} delete", row_key):
            try:
                self.table.delete_entity(partition_key=self.partition_key, row_key=row_key)
            except AzureResourceNotFoundError:
                self.logger.debug(f"{self.table_name} delete: {row_key} already absent")
                return
        self._log_operation_result(True, f"{self.table_name} delete", row_key)

    def _query_partition(self) -> Iterator[TableEntity]:
        with self._error_context(f"{self.table_name} query"):
            yield from self.table.query_entities(
                "PartitionKey eq @pk",
                parameters={"pk": self.partition_key}
            )


# ============================================================================
# ORDERS
# ============================================================================

class OrderRepository(TableRepository, IOrderRepository):
    """Orders table (partition ORDER)."""

    def __init__(self, table_service: TableServiceClient, table_name: str = StorageDefaults.ORDERS_TABLE):
        super().__init__(table_service, table_name, StorageDefaults.ORDER_PARTITION)

    @staticmethod
    def _to_record(entity: TableEntity) -> OrderRecord:
        return OrderRecord(
            order_id=entity["RowKey"],
            customer_id=entity.get("CustomerId") or "",
            status=entity.get("Status") or "",
            total_amount=float(entity.get("TotalAmount") or 0.0),
            order_date=entity.get("OrderDate") or utc_now(),
            items_json=entity.get("ItemsJson") or "[]",
        )

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        entity = self._get_entity(order_id)
        return self._to_record(entity) if entity is not None else None

    def upsert_order(self, order: OrderRecord) -> None:
        self._require_type(order, OrderRecord, "upsert_order")
        self._replace_entity(order.order_id, {
            "CustomerId": order.customer_id,
            "Status": order.status,
            "TotalAmount": float(order.total_amount),
            "OrderDate": order.order_date,
            "ItemsJson": order.items_json,
        })

    def delete_order(self, order_id: str) -> None:
        self._delete_entity(order_id)

    def list_orders(self) -> List[OrderRecord]:
        return [self._to_record(e) for e in self._query_partition()]


# ============================================================================
# CUSTOMERS
# ============================================================================

class CustomerRepository(TableRepository, ICustomerRepository):
    """Customers table (partition CUSTOMER)."""

    def __init__(self, table_service: TableServiceClient, table_name: str = StorageDefaults.CUSTOMERS_TABLE):
        super().__init__(table_service, table_name, StorageDefaults.CUSTOMER_PARTITION)

    @staticmethod
    def _to_record(entity: TableEntity) -> CustomerRecord:
        return CustomerRecord(
            row_key=entity["RowKey"],
            full_name=entity.get("FullName") or "",
            email=entity.get("Email") or "",
            phone=entity.get("Phone") or "",
        )

    def get_customer(self, customer_id: str) -> Optional[CustomerRecord]:
        entity = self._get_entity(customer_id)
        return self._to_record(entity) if entity is not None else None

    def upsert_customer(self, customer: CustomerRecord) -> None:
        self._require_type(customer, CustomerRecord, "upsert_customer")
        self._replace_entity(customer.row_key, {
            "FullName": customer.full_name,
            "Email": customer.email,
            "Phone": customer.phone,
        })

    def delete_customer(self, customer_id: str) -> None:
        self._delete_entity(customer_id)

    def list_customers(self) -> List[CustomerRecord]:
        return [self._to_record(e) for e in self._query_partition()]


# ============================================================================
# PRODUCTS
# ============================================================================

class ProductRepository(TableRepository, IProductRepository):
    """Products table (partition PRODUCT)."""

    def __init__(self, table_service: TableServiceClient, table_name: str = StorageDefaults.PRODUCTS_TABLE):
        super().__init__(table_service, table_name, StorageDefaults.PRODUCT_PARTITION)

    @staticmethod
    def _to_record(entity: TableEntity) -> ProductRecord:
        return ProductRecord(
            row_key=entity["RowKey"],
            name=entity.get("Name") or "",
            description=entity.get("Description") or "",
            price=max(float(entity.get("Price") or 0.0), 0.0),
            image_url=entity.get("ImageUrl") or "",
        )

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        entity = self._get_entity(product_id)
        return self._to_record(entity) if entity is not None else None

    def upsert_product(self, product: ProductRecord) -> None:
        self._require_type(product, ProductRecord, "upsert_product")
        self._replace_entity(product.row_key, {
            "Name": product.name,
            "Description": product.description,
            "Price": float(product.price),
            "ImageUrl": product.image_url,
        })

    def delete_product(self, product_id: str) -> None:
        self._delete_entity(product_id)

    def list_products(self) -> List[ProductRecord]:
        return [self._to_record(e) for e in self._query_partition()]
