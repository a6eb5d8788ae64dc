"""
Trigger test fixtures building real azure.functions request objects.
"""

import pytest

from tests.factories.http_requests import BOUNDARY, build_multipart, build_request


@pytest.fixture
def make_request():
    """Factory fixture: build a func.HttpRequest."""
    return build_request


@pytest.fixture
def multipart_request():
    """Factory fixture: POST with a multipart/form-data body."""
    def _make(url, files=(), fields=None):
        return build_request(
            "POST",
            url,
            body=build_multipart(files, fields),
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
        )
    return _make
