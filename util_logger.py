"""
Unified Logger System.

JSON structured logging for Azure Functions with Application Insights.
Every logger is named "{component_type}.{name}", writes one JSON line per
record to stdout and propagates to the Functions host logger, which forwards
to Application Insights. Fields passed as extra={'custom_dimensions': {...}}
end up as customDimensions, merged with the component type and name.

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Correlation fields for the order write path
    ComponentConfig: Per-component logger settings
    JSONFormatter: Application Insights friendly formatter
    LoggerFactory: Factory for creating loggers
    log_exceptions: Exception logging decorator

Dependencies:
    Standard library only (logging, enum, dataclasses, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass, asdict
import logging
import sys
import os
import json
import traceback
from functools import wraps


class ComponentType(Enum):
    """Application layers; each gets its own logger namespace."""
    TRIGGER = "trigger"        # HTTP and queue entry points
    SERVICE = "service"        # Business logic
    PROCESSOR = "processor"    # Order message consumer
    REPOSITORY = "repository"  # Azure Storage access
    FACTORY = "factory"        # Client and repository construction
    INTERFACE = "interface"    # Admin HTML pages


class LogLevel(Enum):
    """Python log level names with enum safety."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Case-insensitive lookup, e.g. "warning" -> LogLevel.WARNING."""
        return cls[level.strip().upper()]


@dataclass
class LogContext:
    """
    Correlation fields for an order's trip through the queue.

    The same order_id shows up on the enqueue request, the queue message
    and the table write, so filtering on it in Application Insights gives
    the whole write path.
    """
    order_id: Optional[str] = None
    message_id: Optional[str] = None
    dequeue_count: Optional[int] = None
    correlation_id: Optional[str] = None
    request_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Populated fields only."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ComponentConfig:
    """Level settings for one component type."""
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, in the shape Application Insights parses.

    custom_dimensions on the record becomes customDimensions; exception
    info becomes an "exception" object with type, message and traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }

        dims = getattr(record, 'custom_dimensions', None)
        if dims:
            entry['customDimensions'] = dims

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


class _ComponentDimensionsFilter(logging.Filter):
    """Merges component type/name (and an optional fixed context) into custom_dimensions."""

    def __init__(self, component_type: ComponentType, name: str, context: Optional[LogContext] = None):
        super().__init__()
        self.base = dict(context.to_dict() if context else {})
        self.base['component_type'] = component_type.value
        self.base['component_name'] = name

    def filter(self, record: logging.LogRecord) -> bool:
        record.custom_dimensions = {**self.base, **(getattr(record, 'custom_dimensions', None) or {})}
        return True


_DEFAULT_LEVEL = LogLevel.DEBUG if os.getenv('DEBUG_LOGGING', '').lower() == 'true' else LogLevel.INFO


class LoggerFactory:
    """
    Creates component loggers.

    Example:
        logger = LoggerFactory.create_logger(ComponentType.PROCESSOR, "OrderProcessor")
        logger.info("Order upserted", extra={'custom_dimensions': {'order_id': 'O1'}})
    """

    DEFAULT_CONFIGS = {
        component: ComponentConfig(
            component_type=component,
            log_level=_DEFAULT_LEVEL
        )
        for component in ComponentType
    }

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Get (or configure on first use) the logger for a component.

        Loggers are process-wide singletons keyed by "{type}.{name}"; the
        handler and dimension filter are attached only once, so context
        given on a later call for the same name is ignored.

        Args:
            component_type: Layer the caller belongs to
            name: Component name (e.g. "OrderProcessor")
            context: Fixed correlation fields for every record of this logger
            config: Overrides DEFAULT_CONFIGS for this component type
        """
        config = config or cls.DEFAULT_CONFIGS.get(component_type, ComponentConfig(component_type))
        level = config.log_level
        if isinstance(level, str):
            level = LogLevel.from_string(level)

        logger = logging.getLogger(f"{component_type.value}.{name}")
        logger.setLevel(level.to_python_level())
        logger.propagate = True

        if not any(isinstance(f, _ComponentDimensionsFilter) for f in logger.filters):
            logger.addFilter(_ComponentDimensionsFilter(component_type, name, context))

        if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(level.to_python_level())
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        return logger

    @classmethod
    def set_level(cls, level: str) -> None:
        """
        Apply a level to every component, including loggers already created.

        Args:
            level: Level name, e.g. "INFO" (from LOG_LEVEL)
        """
        log_level = LogLevel.from_string(level)
        python_level = log_level.to_python_level()
        for component_config in cls.DEFAULT_CONFIGS.values():
            component_config.log_level = log_level

        prefixes = tuple(f"{component.value}." for component in ComponentType)
        for logger_name, existing in logging.Logger.manager.loggerDict.items():
            if isinstance(existing, logging.Logger) and logger_name.startswith(prefixes):
                existing.setLevel(python_level)
                for handler in existing.handlers:
                    handler.setLevel(python_level)


def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator: log any exception with call details, then re-raise it.

    Usage:
        @log_exceptions(logger=my_logger)
        @log_exceptions(ComponentType.SERVICE, "SeedService")
        @log_exceptions()    # service logger named after the module
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if logger is not None:
                    log = logger
                elif component_type and component_name:
                    log = LoggerFactory.create_logger(component_type, component_name)
                else:
                    log = LoggerFactory.create_logger(ComponentType.SERVICE, func.__module__ or "unknown")

                log.error(
                    f"Exception in {func.__name__}: {e}",
                    exc_info=True,
                    extra={
                        'custom_dimensions': {
                            'function_name': func.__name__,
                            'function_module': func.__module__,
                            'exception_type': type(e).__name__,
                            'exception_message': str(e),
                            'function_args': str(args)[:500],
                            'function_kwargs': str(kwargs)[:500],
                            'traceback': traceback.format_exc(),
                        }
                    }
                )
                raise
        return wrapper
    return decorator
