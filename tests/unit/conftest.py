"""
Unit test fixtures: factory-built payloads and a processor on fake storage.
"""

import pytest

from tests.factories.model_factories import (
    make_customer,
    make_product,
    make_order_record,
)


@pytest.fixture
def customer_data():
    """Return randomized customer payload dict."""
    return make_customer()


@pytest.fixture
def product_data():
    """Return randomized product payload dict."""
    return make_product()


@pytest.fixture
def order_record_data():
    """Return randomized OrderRecord constructor dict."""
    return make_order_record()


@pytest.fixture
def order_repo(fake_repos):
    return fake_repos['order_repo']


@pytest.fixture
def processor(order_repo, fixed_now):
    """OrderProcessor over the fake orders table with a fixed clock."""
    from core.processor import OrderProcessor
    return OrderProcessor(order_repo, clock=lambda: fixed_now)
