# ============================================================================
# MULTIPART FORM-DATA PARSING
# ============================================================================
# STATUS: Trigger helper - used by products/image and contracts uploads
# PURPOSE: Split a multipart/form-data body into file parts and form fields
# EXPORTS: parse_multipart
# DEPENDENCIES: azure.functions
# ============================================================================
"""
Multipart form-data parsing.

Boundary-based parsing of the raw request body (the stdlib cgi module is
gone in Python 3.13). Every part carrying a filename is returned as an
UploadedFile, so one request may upload several files.

Validation errors are raised as ValueError and surface as 400 through
BaseHttpTrigger.
"""

import re
from typing import Dict, List, Tuple

import azure.functions as func

from core.models import UploadedFile


def _extract_boundary(content_type: str) -> str:
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("boundary="):
            boundary = part[9:]
            if boundary.startswith('"') and boundary.endswith('"'):
                boundary = boundary[1:-1]
            return boundary
    return ""


def parse_multipart(req: func.HttpRequest) -> Tuple[List[UploadedFile], Dict[str, str]]:
    """
    Parse multipart/form-data from an Azure Functions request.

    Args:
        req: Azure Functions HTTP request

    Returns:
        Tuple of (files, form_fields). Parts with a filename are files,
        the rest are plain form fields.

    Raises:
        ValueError: Content-Type missing, not multipart/form-data, or no boundary
    """
    content_type = req.headers.get("Content-Type", "")
    if not content_type:
        raise ValueError("Content-Type header missing.")

    if "multipart/form-data" not in content_type.lower():
        raise ValueError("Content-Type must be multipart/form-data.")

    boundary = _extract_boundary(content_type)
    if not boundary:
        raise ValueError("Missing multipart boundary.")

    body = req.get_body() or b""
    boundary_bytes = ("--" + boundary).encode("utf-8")

    files: List[UploadedFile] = []
    form_fields: Dict[str, str] = {}

    for part in body.split(boundary_bytes):
        # Preamble, epilogue and the closing "--" marker carry no headers
        if part.startswith(b"\r\n"):
            part = part[2:]
        if not part.strip() or part.strip() == b"--":
            continue

        header_end = part.find(b"\r\n\r\n")
        if header_end == -1:
            continue

        header_section = part[:header_end].decode("utf-8", errors="replace")
        part_body = part[header_end + 4:]
        if part_body.endswith(b"\r\n"):
            part_body = part_body[:-2]

        name_match = re.search(r'\bname="([^"]*)"', header_section)
        filename_match = re.search(r'filename="([^"]*)"', header_section)
        part_content_type_match = re.search(r'Content-Type:\s*(.+)', header_section, re.IGNORECASE)

        if not name_match:
            continue

        field_name = name_match.group(1)

        if filename_match and filename_match.group(1):
            files.append(UploadedFile(
                filename=filename_match.group(1),
                content=part_body,
                content_type=(
                    part_content_type_match.group(1).strip()
                    if part_content_type_match else "application/octet-stream"
                ),
                field_name=field_name,
            ))
        else:
            form_fields[field_name] = part_body.decode("utf-8", errors="replace")

    return files, form_fields
