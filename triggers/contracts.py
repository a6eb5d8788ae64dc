# ============================================================================
# CONTRACT HTTP TRIGGERS
# ============================================================================
# STATUS: Trigger layer - /api/contracts/*
# EXPORTS: ContractsTrigger, ContractItemTrigger
# DEPENDENCIES: azure.functions, services.ContractService, triggers.multipart
# ============================================================================
"""
Contract HTTP Triggers.

Routes:
    GET     /api/contracts               - List files in the contracts share
    POST    /api/contracts               - Multipart upload, one or more files
    GET     /api/contracts/{file_name}   - Download (application/octet-stream)
    DELETE  /api/contracts/{file_name}   - Delete (missing is a no-op)
"""

from typing import Any, Dict, List, Union
from urllib.parse import quote

import azure.functions as func

from .http_base import RetailApiTrigger
from .multipart import parse_multipart


class ContractsTrigger(RetailApiTrigger):
    """Collection endpoint."""

    def __init__(self, services):
        super().__init__("contracts", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        if req.method == "GET":
            contracts = self.services.contracts.list_contracts()
            return {
                "count": len(contracts),
                "contracts": [c.to_dict() for c in contracts]
            }

        files, _ = parse_multipart(req)
        stored = self.services.contracts.upload(files)
        return {
            "uploaded": stored,
            "count": len(stored)
        }


def content_disposition(file_name: str) -> str:
    """
    Attachment header for file_name.

    The quoted filename is an ASCII fallback with quotes, backslashes and
    control characters removed; filename* carries the exact name UTF-8
    percent-encoded.
    """
    fallback = "".join(
        ch for ch in file_name
        if 32 <= ord(ch) < 127 and ch not in '"\\'
    ) or "download"
    return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(file_name, safe="")}'


class ContractItemTrigger(RetailApiTrigger):
    """Single-file endpoint. GET streams the file back as an attachment."""

    def __init__(self, services):
        super().__init__("contract_item", services)

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    def process_request(self, req: func.HttpRequest) -> Union[Dict[str, Any], func.HttpResponse]:
        file_name = self.require_route_param(req, "file_name")

        if req.method == "DELETE":
            deleted = self.services.contracts.delete(file_name)
            return {"file_name": file_name, "deleted": deleted}

        content = self.services.contracts.download(file_name)
        return func.HttpResponse(
            body=content,
            status_code=200,
            mimetype="application/octet-stream",
            headers={"Content-Disposition": content_disposition(file_name)}
        )
