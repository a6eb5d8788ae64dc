"""
Retail Hub configuration.

Environment settings are read once into pydantic models, one per concern,
composed by AppConfig and cached by get_config().

Structure:
    config/
    ├── __init__.py              # get_config() singleton, debug_config()
    ├── app_config.py            # AppConfig: app flags + storage + queue
    ├── storage_config.py        # Storage account, tables, container, share
    ├── queue_config.py          # Order queue
    └── defaults.py              # Default values

Usage:
    # Cached instance, built from os.environ on first call
    from config import get_config
    config = get_config()
    table = config.storage.orders_table

    # Debug output
    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

__version__ = "1.0.0"

from .storage_config import StorageConfig
from .queue_config import QueueConfig, QueueNames
from .app_config import AppConfig
from .defaults import StorageDefaults, QueueDefaults, OrderDefaults, AppDefaults


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Process-wide AppConfig.

    Returns:
        AppConfig read from os.environ on the first call, cached afterwards
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Configuration snapshot safe to log or return from a debug endpoint.

    Returns:
        Dictionary with configuration values, connection string masked
    """
    try:
        config = get_config()
        return {
            'storage': config.storage.debug_dict(),
            'queues': {
                'queue_name': config.queues.queue_name,
                'encode_base64': config.queues.encode_base64,
                'visibility_timeout': config.queues.visibility_timeout,
            },
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
            'seed_on_startup': config.seed_on_startup,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    '__version__',
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'StorageConfig',
    'QueueConfig',
    'QueueNames',
    'StorageDefaults',
    'QueueDefaults',
    'OrderDefaults',
    'AppDefaults',
]
