"""
Request builders for trigger tests.
"""

import json

import azure.functions as func


BOUNDARY = "----retailhubtestboundary"


def build_multipart(files=(), fields=None, boundary: str = BOUNDARY) -> bytes:
    """
    Encode (field_name, filename, content_type, content) tuples as multipart/form-data.
    """
    chunks = []
    for name, value in (fields or {}).items():
        chunks.append(
            f'--{boundary}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'.encode("utf-8")
        )
    for field_name, filename, content_type, content in files:
        header = (
            f'--{boundary}\r\n'
            f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
            f'Content-Type: {content_type}\r\n\r\n'
        ).encode("utf-8")
        chunks.append(header + content + b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode("utf-8"))
    return b"".join(chunks)


def build_request(method="GET", url="/api/test", body=b"", headers=None, params=None,
                  route_params=None, json_body=None) -> func.HttpRequest:
    """Build a func.HttpRequest; json_body is serialized and typed as JSON."""
    if json_body is not None:
        body = json.dumps(json_body).encode("utf-8")
        headers = {"Content-Type": "application/json", **(headers or {})}
    if isinstance(body, str):
        body = body.encode("utf-8")
    return func.HttpRequest(
        method=method,
        url=url,
        headers=headers or {},
        params=params or {},
        route_params=route_params or {},
        body=body,
    )


def read_json(response: func.HttpResponse):
    return json.loads(response.get_body())
