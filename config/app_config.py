"""
Application Configuration (AppConfig).

App-level flags plus the composed storage and queue settings:
    - StorageConfig (tables, blob container, file share, auth)
    - QueueConfig (order queue)

Exports:
    AppConfig: Root settings object, built by AppConfig.from_environment()

Dependencies:
    pydantic: field validation (LOG_LEVEL, names)
    config.defaults: AppDefaults

Pattern:
    StorageConfig and QueueConfig are fields of AppConfig, each with its own
    from_environment().
"""

import os
from pydantic import BaseModel, Field, field_validator

from .storage_config import StorageConfig
from .queue_config import QueueConfig
from .defaults import AppDefaults


class AppConfig(BaseModel):
    """
    Root configuration for the Retail Hub Function App.
    """

    # ========================================================================
    # App flags
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable debug mode for verbose diagnostics (payload logging)"
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Level applied to every component logger at startup",
        examples=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    # ========================================================================
    # Development Seeding
    # ========================================================================

    seed_on_startup: bool = Field(
        default=AppDefaults.SEED_ON_STARTUP,
        description="Insert sample products at startup when the products table is empty"
    )

    seed_download_images: bool = Field(
        default=AppDefaults.SEED_DOWNLOAD_IMAGES,
        description="Download sample product images and re-host them in blob storage"
    )

    # ========================================================================
    # Domain Configurations
    # ========================================================================

    storage: StorageConfig = Field(default_factory=StorageConfig)
    queues: QueueConfig = Field(default_factory=QueueConfig)

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level

    @property
    def is_development(self) -> bool:
        """True for local/dev environments."""
        return self.environment.lower() in ("dev", "development", "local")

    @classmethod
    def from_environment(cls):
        """Build from os.environ (see local.settings.example.json for names)."""
        return cls(
            debug_mode=os.environ.get("DEBUG_MODE", str(AppDefaults.DEBUG_MODE)).lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
            seed_on_startup=os.environ.get(
                "SEED_ON_STARTUP", str(AppDefaults.SEED_ON_STARTUP)
            ).lower() == "true",
            seed_download_images=os.environ.get(
                "SEED_DOWNLOAD_IMAGES", str(AppDefaults.SEED_DOWNLOAD_IMAGES)
            ).lower() == "true",
            storage=StorageConfig.from_environment(),
            queues=QueueConfig.from_environment(),
        )
