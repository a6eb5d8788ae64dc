"""
Shared test setup: import path, storage env defaults and the service container.

Sets up the test environment so all production code can be imported
without Azure Storage or Azurite. Storage is replaced by the in-memory
repositories in tests/factories/fakes.py.
"""

import os
import sys
from datetime import datetime, timezone

import pytest

# Add project root to sys.path so 'core', 'services', 'config', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.

    Config is read from the environment; these point at local development
    storage so nothing reaches a real account.
    """
    defaults = {
        "AzureWebJobsStorage": "UseDevelopmentStorage=true",
        "STORAGE_QUEUE_NAME": "orderqueue",
        "ENVIRONMENT": "dev",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture
def fixed_now():
    """A fixed processing time for the order processor clock."""
    return datetime(2025, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


@pytest.fixture
def order_message_data():
    """Randomized CreateOrUpdate message dict (wire casing)."""
    from tests.factories.model_factories import make_order_message
    return make_order_message()


@pytest.fixture
def fake_repos():
    """Fresh in-memory repositories, keyed like RepositoryFactory output."""
    from tests.factories.fakes import make_fake_repositories
    return make_fake_repositories()


@pytest.fixture
def app_config():
    """AppConfig with defaults only (no environment lookup)."""
    from config import AppConfig
    return AppConfig()


@pytest.fixture
def services(fake_repos, app_config):
    """ServiceContainer wired to the in-memory repositories."""
    from services import create_services
    return create_services(fake_repos, app_config)
