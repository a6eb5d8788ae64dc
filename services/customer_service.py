# ============================================================================
# CUSTOMER SERVICE
# ============================================================================
# STATUS: Service - Customer CRUD over the customers table
# EXPORTS: CustomerService
# ============================================================================
"""
Customer Service.

Thin mapping between API payloads and the customers table.
"""

from typing import Any, List

from core.models import CustomerRecord
from exceptions import ResourceNotFoundError
from infrastructure.interface_repository import ICustomerRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "CustomerService")


class CustomerService:
    """Customer business logic."""

    def __init__(self, customer_repo: ICustomerRepository):
        self.customers = customer_repo

    def upsert_customer(self, payload: Any) -> CustomerRecord:
        """
        Create or fully replace a customer from a JSON body.

        Raises:
            ValidationError: rowKey or fullName missing/blank
        """
        customer = CustomerRecord.from_payload(payload)
        self.customers.upsert_customer(customer)
        logger.info(f"Customer upserted: {customer.row_key}")
        return customer

    def delete_customer(self, customer_id: str) -> None:
        self.customers.delete_customer(customer_id)
        logger.info(f"Customer deleted: {customer_id}")

    def list_customers(self) -> List[CustomerRecord]:
        return sorted(self.customers.list_customers(), key=lambda c: c.full_name.lower())

    def get_customer(self, customer_id: str) -> CustomerRecord:
        customer = self.customers.get_customer(customer_id)
        if customer is None:
            raise ResourceNotFoundError(f"Customer not found: {customer_id}")
        return customer
