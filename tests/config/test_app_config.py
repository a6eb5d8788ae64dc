"""
AppConfig, StorageConfig and QueueConfig environment loading tests.
"""

import pytest
from pydantic import ValidationError

from config import AppConfig, QueueConfig, StorageConfig, StorageDefaults, debug_config, get_config, reset_config


class TestStorageConfig:

    def test_defaults(self, clean_env):
        storage = StorageConfig.from_environment()
        assert storage.connection_string is None
        assert storage.customers_table == "customers"
        assert storage.products_table == "products"
        assert storage.orders_table == "orders"
        assert storage.blob_container == "productimages"
        assert storage.file_share_name == "contracts"
        assert storage.blob_public_access is True

    def test_falls_back_to_webjobs_storage(self, clean_env):
        clean_env.setenv("AzureWebJobsStorage", StorageDefaults.DEVELOPMENT_CONNECTION_STRING)
        storage = StorageConfig.from_environment()
        assert storage.connection_string == StorageDefaults.DEVELOPMENT_CONNECTION_STRING
        assert storage.uses_connection_string

    def test_explicit_connection_string_wins(self, clean_env):
        clean_env.setenv("AzureWebJobsStorage", StorageDefaults.DEVELOPMENT_CONNECTION_STRING)
        clean_env.setenv("STORAGE_CONNECTION_STRING", "DefaultEndpointsProtocol=https;AccountName=shop")
        assert StorageConfig.from_environment().connection_string.endswith("AccountName=shop")

    def test_account_url_requires_account_name(self, clean_env):
        with pytest.raises(ValueError):
            StorageConfig.from_environment().account_url("table")

    def test_account_url(self, clean_env):
        clean_env.setenv("STORAGE_ACCOUNT_NAME", "retailhub")
        storage = StorageConfig.from_environment()
        assert not storage.uses_connection_string
        assert storage.account_url("queue") == "https://retailhub.queue.core.windows.net"

    def test_public_access_can_be_disabled(self, clean_env):
        clean_env.setenv("STORAGE_BLOB_PUBLIC_ACCESS", "false")
        assert StorageConfig.from_environment().blob_public_access is False

    def test_debug_dict_masks_connection_string(self):
        storage = StorageConfig(connection_string="AccountKey=secret")
        assert "secret" not in str(storage.debug_dict())


class TestQueueConfig:

    def test_defaults(self, clean_env):
        queues = QueueConfig.from_environment()
        assert queues.queue_name == "orderqueue"
        assert queues.encode_base64 is True

    def test_env_overrides(self, clean_env):
        clean_env.setenv("STORAGE_QUEUE_NAME", "orders-test")
        clean_env.setenv("STORAGE_QUEUE_BASE64", "False")
        clean_env.setenv("STORAGE_QUEUE_MAX_MESSAGES", "8")
        queues = QueueConfig.from_environment()
        assert queues.queue_name == "orders-test"
        assert queues.encode_base64 is False
        assert queues.max_messages == 8

    def test_max_messages_bounded_by_azure_limit(self):
        with pytest.raises(ValidationError):
            QueueConfig(max_messages=33)


class TestAppConfig:

    def test_defaults(self, clean_env):
        config = AppConfig.from_environment()
        assert config.environment == "dev"
        assert config.is_development
        assert config.debug_mode is False
        assert config.log_level == "INFO"
        assert config.seed_on_startup is False

    def test_log_level_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        assert AppConfig.from_environment().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppConfig.from_environment()

    def test_production_is_not_development(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "prod")
        assert not AppConfig.from_environment().is_development

    def test_seed_flags(self, clean_env):
        clean_env.setenv("SEED_ON_STARTUP", "true")
        clean_env.setenv("SEED_DOWNLOAD_IMAGES", "TRUE")
        config = AppConfig.from_environment()
        assert config.seed_on_startup and config.seed_download_images


class TestSingleton:

    def test_get_config_cached_until_reset(self, clean_env):
        reset_config()
        try:
            clean_env.setenv("STORAGE_QUEUE_NAME", "first")
            assert get_config().queues.queue_name == "first"
            clean_env.setenv("STORAGE_QUEUE_NAME", "second")
            assert get_config().queues.queue_name == "first"
            reset_config()
            assert get_config().queues.queue_name == "second"
        finally:
            reset_config()

    def test_debug_config_masks_secrets(self, clean_env):
        reset_config()
        try:
            clean_env.setenv("AzureWebJobsStorage", "AccountName=a;AccountKey=topsecret")
            info = debug_config()
            assert info["storage"]["connection_string"] == "***MASKED***"
            assert "topsecret" not in str(info)
        finally:
            reset_config()
