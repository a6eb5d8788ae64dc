"""
Config test fixtures: a clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AzureWebJobsStorage", "STORAGE_CONNECTION_STRING", "STORAGE_ACCOUNT_NAME",
        "STORAGE_CUSTOMERS_TABLE", "STORAGE_PRODUCTS_TABLE", "STORAGE_ORDERS_TABLE",
        "STORAGE_BLOB_CONTAINER", "STORAGE_FILE_SHARE_NAME", "STORAGE_BLOB_PUBLIC_ACCESS",
        "STORAGE_QUEUE_NAME", "STORAGE_QUEUE_BASE64",
        "STORAGE_QUEUE_VISIBILITY_TIMEOUT", "STORAGE_QUEUE_MAX_MESSAGES",
        "ENVIRONMENT", "DEBUG_MODE", "LOG_LEVEL",
        "SEED_ON_STARTUP", "SEED_DOWNLOAD_IMAGES",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
