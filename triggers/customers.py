# ============================================================================
# CUSTOMER HTTP TRIGGERS
# ============================================================================
# STATUS: Trigger layer - /api/customers/*
# EXPORTS: CustomersTrigger, CustomerItemTrigger
# DEPENDENCIES: azure.functions, services.CustomerService
# ============================================================================
"""
Customer HTTP Triggers.

Routes:
    GET        /api/customers                 - List customers
    POST, PUT  /api/customers                 - Upsert (full replace) from JSON body
    GET        /api/customers/{customer_id}   - Single customer
    DELETE     /api/customers/{customer_id}   - Delete (missing is a no-op)

Body keys are matched case-insensitively: rowKey and fullName are required,
email and phone default to "".
"""

from typing import Any, Dict, List

import azure.functions as func

from .http_base import RetailApiTrigger


class CustomersTrigger(RetailApiTrigger):
    """Collection endpoint."""

    def __init__(self, services):
        super().__init__("customers", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST", "PUT"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        if req.method == "GET":
            customers = self.services.customers.list_customers()
            return {
                "count": len(customers),
                "customers": [c.to_dict() for c in customers]
            }

        customer = self.services.customers.upsert_customer(self.extract_json_body(req))
        return {"customer": customer.to_dict()}


class CustomerItemTrigger(RetailApiTrigger):
    """Single-customer endpoint."""

    def __init__(self, services):
        super().__init__("customer_item", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        customer_id = self.require_route_param(req, "customer_id")

        if req.method == "DELETE":
            self.services.customers.delete_customer(customer_id)
            return {"deleted": customer_id}

        return {"customer": self.services.customers.get_customer(customer_id).to_dict()}
