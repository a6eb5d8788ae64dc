"""
HTTP Trigger Base Class.

Every Retail Hub HTTP endpoint is a subclass of BaseHttpTrigger. Subclasses
implement process_request() and get_allowed_methods(); the base class owns
method checks, request ids, JSON envelopes and the exception -> status map.

Status mapping:
    ValueError (incl. ValidationError)        -> 400
    PermissionError                           -> 403
    ResourceNotFoundError, FileNotFoundError  -> 404
    anything else (incl. StoreUnavailableError) -> 500, with debug info

Every response carries request_id and timestamp in the body and the
X-Request-ID header.

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    RetailApiTrigger: Base class for order/customer/product/contract endpoints
    SystemMonitoringTrigger: Base class for health and liveness
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union
import json
import sys
import uuid
from datetime import datetime, timezone

import azure.functions as func
from exceptions import ResourceNotFoundError
from util_logger import LoggerFactory, ComponentType, LogContext


# (exception types, status, error label, log level); first match wins
_ERROR_MAP: List[Tuple[Tuple[Type[BaseException], ...], int, str, str]] = [
    ((ValueError,), 400, "Bad request", "warning"),
    ((PermissionError,), 403, "Forbidden", "warning"),
    ((ResourceNotFoundError, FileNotFoundError), 404, "Not found", "info"),
]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseHttpTrigger(ABC):
    """
    Abstract base for Azure Functions HTTP triggers.

    Args:
        trigger_name: Short name used in logs and debug output
            (e.g. "orders_enqueue", "health_check")
    """

    def __init__(self, trigger_name: str):
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> Union[Dict[str, Any], func.HttpResponse]:
        """
        Endpoint logic.

        Return a dict to be wrapped in the JSON envelope, or a ready-made
        HttpResponse (file downloads) which is passed through with the
        request id header added. Raise the exceptions listed in the module
        docstring for error responses.
        """

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """HTTP methods this endpoint accepts, e.g. ["GET", "POST"]."""

    def get_success_status(self, req: func.HttpRequest) -> int:
        """Status code for a successful dict response. Queued writes return 202."""
        return 200

    # ========================================================================
    # REQUEST HANDLING
    # ========================================================================

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Entry point called from the function_app / blueprint route.

        Never raises: every failure becomes a JSON error response.
        """
        request_id = self._generate_request_id()
        dims = LogContext(request_id=request_id).to_dict()

        self.logger.info(
            f"🌐 [{self.trigger_name}] {req.method} {req.url}",
            extra={'custom_dimensions': dims}
        )

        allowed = self.get_allowed_methods()
        if req.method not in allowed:
            return self._create_error_response(
                error="Method not allowed",
                message=f"Method {req.method} not allowed. Allowed: {', '.join(allowed)}",
                status_code=405,
                request_id=request_id
            )

        try:
            result = self.process_request(req)
        except Exception as e:
            return self._map_exception(e, request_id, dims)

        if isinstance(result, func.HttpResponse):
            result.headers["X-Request-ID"] = request_id
            response = result
        else:
            response = self._json_response(
                {**result, "request_id": request_id, "timestamp": _utc_timestamp()},
                status_code=self.get_success_status(req),
                request_id=request_id
            )

        self.logger.info(
            f"✅ [{self.trigger_name}] {response.status_code}",
            extra={'custom_dimensions': dims}
        )
        return response

    def _map_exception(self, error: Exception, request_id: str, dims: Dict[str, Any]) -> func.HttpResponse:
        for types, status_code, label, level in _ERROR_MAP:
            if isinstance(error, types):
                getattr(self.logger, level)(
                    f"❌ [{self.trigger_name}] {label}: {error}",
                    extra={'custom_dimensions': dims}
                )
                return self._create_error_response(label, str(error), status_code, request_id)

        self.logger.error(
            f"💥 [{self.trigger_name}] Internal error: {error}",
            exc_info=True,
            extra={'custom_dimensions': dims}
        )
        return self._create_error_response(
            "Internal server error", str(error), 500, request_id, include_debug_info=True
        )

    # ========================================================================
    # PARAMETER AND BODY HELPERS
    # ========================================================================

    def extract_path_params(self, req: func.HttpRequest, required_params: List[str]) -> Dict[str, str]:
        """
        Required route parameters.

        Raises:
            ValueError: Any parameter missing or empty
        """
        params = {name: req.route_params.get(name) for name in required_params}
        missing = [name for name, value in params.items() if not value]
        if missing:
            raise ValueError(f"Missing required path parameters: {', '.join(missing)}")
        return params

    def extract_query_params(self, req: func.HttpRequest,
                             required_params: Optional[List[str]] = None,
                             optional_params: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Query string parameters; empty values count as absent.

        Raises:
            ValueError: A required parameter is missing
        """
        required_params = required_params or []
        wanted = list(required_params) + list(optional_params or [])
        params = {name: req.params.get(name) for name in wanted if req.params.get(name)}

        missing = [name for name in required_params if name not in params]
        if missing:
            raise ValueError(f"Missing required query parameters: {', '.join(missing)}")
        return params

    def extract_json_body(self, req: func.HttpRequest, required: bool = True) -> Optional[Any]:
        """
        Parsed JSON body.

        Raises:
            ValueError: Body missing (when required) or not valid JSON
        """
        raw = req.get_body()
        if not raw or not raw.strip():
            if required:
                raise ValueError("Request body is required")
            return None

        try:
            return json.loads(raw)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in request body: {e}") from e

    def extract_text_body(self, req: func.HttpRequest) -> str:
        """Request body decoded as UTF-8 (undecodable bytes are a 400)."""
        try:
            return req.get_body().decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"Request body is not valid UTF-8: {e}") from e

    # ========================================================================
    # RESPONSE BUILDERS
    # ========================================================================

    def _generate_request_id(self) -> str:
        return uuid.uuid4().hex[:8]

    def _json_response(self, payload: Dict[str, Any], status_code: int, request_id: str,
                       headers: Optional[Dict[str, str]] = None) -> func.HttpResponse:
        return func.HttpResponse(
            json.dumps(payload, default=str),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id, **(headers or {})}
        )

    def _create_error_response(self, error: str, message: str, status_code: int,
                               request_id: str, include_debug_info: bool = False) -> func.HttpResponse:
        payload = {
            "error": error,
            "message": message,
            "request_id": request_id,
            "timestamp": _utc_timestamp()
        }
        if include_debug_info:
            payload["debug"] = {
                "trigger_name": self.trigger_name,
                "python_version": sys.version.split()[0]
            }
        return self._json_response(payload, status_code, request_id)


# ============================================================================
# SPECIALIZED BASE CLASSES
# ============================================================================

class RetailApiTrigger(BaseHttpTrigger):
    """
    Base for the order, customer, product and contract endpoints.

    The service container is passed in at construction; triggers never
    build their own storage clients.
    """

    def __init__(self, trigger_name: str, services):
        super().__init__(trigger_name)
        self.services = services

    def require_route_param(self, req: func.HttpRequest, name: str) -> str:
        return self.extract_path_params(req, [name])[name]


class SystemMonitoringTrigger(BaseHttpTrigger):
    """Base for health and liveness endpoints."""

    def get_system_timestamp(self) -> str:
        return _utc_timestamp()

    def check_component_health(
        self,
        component_name: str,
        check_function: Callable[[], Any],
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Run one component probe.

        The component is unhealthy when the probe raises, returns
        {"_status": "unhealthy"}, returns a truthy "error" or returns
        {"exists": False}. Otherwise it is healthy.

        Returns:
            {component, description, status, details | error, checked_at}
        """
        entry = {
            "component": component_name,
            "description": description or f"{component_name} health check",
        }
        try:
            result = check_function()
        except Exception as e:
            self.logger.warning(f"⚠️ Health check failed for {component_name}: {e}")
            entry.update(status="unhealthy", error=str(e), checked_at=self.get_system_timestamp())
            return entry

        status = "healthy"
        if isinstance(result, dict):
            if "_status" in result:
                status = result.pop("_status")
            elif result.get("error") or result.get("exists") is False:
                status = "unhealthy"

        entry.update(status=status, details=result, checked_at=self.get_system_timestamp())
        return entry
