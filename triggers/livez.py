"""
Lightweight Liveness Check HTTP Trigger.

Fast endpoint for load balancer health checks. Returns a minimal response
to verify the Function App process is running.

This endpoint has no external dependencies: no table, queue, blob or file
share calls and no config validation. If it responds, the app is alive.

For storage reachability, use /api/health instead.

Exports:
    LivenessCheckTrigger: Liveness check trigger class
    livez_trigger: Singleton trigger instance
"""

from typing import Dict, Any, List
import azure.functions as func
from .http_base import SystemMonitoringTrigger


class LivenessCheckTrigger(SystemMonitoringTrigger):
    """Ultra-lightweight liveness check - no external dependencies."""

    def __init__(self):
        super().__init__("livez")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        return {
            "status": "alive",
            "timestamp": self.get_system_timestamp()
        }


# Singleton instance
livez_trigger = LivenessCheckTrigger()
