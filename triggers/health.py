"""
Health Check HTTP Trigger.

System health monitoring endpoint for GET /api/health.

Components Monitored:
    - Order queue (reachable, approximate message count)
    - Tables (orders, customers, products point reads)
    - Contracts file share (listing)

Returns 200 when every component is healthy and 503 otherwise.

Exports:
    HealthCheckTrigger: Health check trigger class
"""

import sys
from typing import Dict, Any, List

import azure.functions as func
from .http_base import SystemMonitoringTrigger

# RowKey that is never written; a point read for it proves the table answers
_PROBE_KEY = "__health_probe__"


class HealthCheckTrigger(SystemMonitoringTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self, services):
        super().__init__("health_check")
        self.services = services

    def get_allowed_methods(self) -> List[str]:
        """Health check only supports GET."""
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Check every storage primitive the app depends on.

        Returns:
            Health status data
        """
        config = self.services.config
        repos = self.services.repositories

        health_data = {
            "status": "healthy",
            "components": {},
            "environment": {
                "environment": config.environment,
                "storage_account": config.storage.account_name,
                "auth": "connection_string" if config.storage.uses_connection_string else "managed_identity",
                "python_version": sys.version.split()[0],
            },
            "errors": []
        }

        checks = [
            self.check_component_health(
                "order_queue",
                lambda: self._check_queue(repos['queue_repo'], config.queues.queue_name),
                "Order write pipeline queue"
            ),
            self.check_component_health(
                "orders_table",
                lambda: {"reachable": True, "probe_found": repos['order_repo'].get_order(_PROBE_KEY) is not None},
                "Orders table"
            ),
            self.check_component_health(
                "customers_table",
                lambda: {"reachable": True, "probe_found": repos['customer_repo'].get_customer(_PROBE_KEY) is not None},
                "Customers table"
            ),
            self.check_component_health(
                "products_table",
                lambda: {"reachable": True, "probe_found": repos['product_repo'].get_product(_PROBE_KEY) is not None},
                "Products table"
            ),
            self.check_component_health(
                "contracts_share",
                lambda: {"file_count": len(repos['file_repo'].list_files(config.storage.file_share_name))},
                "Contracts file share"
            ),
        ]

        for check in checks:
            health_data["components"][check["component"]] = check
            if check["status"] == "unhealthy":
                health_data["status"] = "unhealthy"
                health_data["errors"].append(f"{check['component']}: {check.get('error', 'unhealthy')}")

        return health_data

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Status follows the component results instead of the base mapping.

        Returns:
            - 200 OK when all components are healthy
            - 503 Service Unavailable when any component is unhealthy
            - 500 Internal Server Error for unexpected errors
        """
        request_id = self._generate_request_id()

        if req.method not in self.get_allowed_methods():
            return self._create_error_response(
                error="Method not allowed",
                message=f"Method {req.method} not allowed. Allowed: GET",
                status_code=405,
                request_id=request_id
            )

        try:
            health_data = self.process_request(req)
        except Exception as e:
            self.logger.error(f"💥 [{self.trigger_name}] Health check error: {e}", exc_info=True)
            return self._create_error_response(
                error="Internal server error",
                message=f"Health check failed: {e}",
                status_code=500,
                request_id=request_id
            )

        if health_data["errors"]:
            self.logger.warning(f"🩺 Unhealthy components: {'; '.join(health_data['errors'])}")

        return self._json_response(
            {**health_data, "request_id": request_id, "timestamp": self.get_system_timestamp()},
            status_code=200 if health_data["status"] == "healthy" else 503,
            request_id=request_id,
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
        )

    @staticmethod
    def _check_queue(queue_repo, queue_name: str) -> Dict[str, Any]:
        queue_repo.ensure_queue(queue_name)
        return {
            "queue_name": queue_name,
            "message_count": queue_repo.get_queue_length(queue_name)
        }
