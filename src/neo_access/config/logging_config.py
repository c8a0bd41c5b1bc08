"""Centralized logging configuration for neo-access.

Environment-driven control over verbosity, format and the per-module levels
of the compiler, authorization and validation features.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional

from .settings import AccessSettings, get_settings


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Warnings and above
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS: Dict[str, str] = {
    LogFormat.JSON.value: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
    LogFormat.DETAILED.value: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.SIMPLE.value: "%(asctime)s - %(levelname)s - %(message)s",
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that are chatty at INFO and only need warnings by default
    DEFAULT_QUIET_MODULES = [
        "neo_access.features.validation.repositories.tenant_scope",
        "neo_access.features.validation.repositories.asyncpg_store",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    @classmethod
    def build_config(cls, settings: Optional[AccessSettings] = None) -> Dict[str, Any]:
        """Build the dictConfig mapping.

        Level and format come from ``AccessSettings`` (``NEO_ACCESS_LOG_LEVEL``,
        ``NEO_ACCESS_LOG_FORMAT``). The ``LOG_LEVEL``, ``LOG_VERBOSITY`` and
        ``LOG_FORMAT`` environment variables override them, in that order of
        precedence for the level.
        """
        settings = settings or get_settings()
        log_verbosity = os.getenv("LOG_VERBOSITY")
        log_level = os.getenv("LOG_LEVEL")
        log_format = os.getenv("LOG_FORMAT", settings.log_format).lower()
        enable_sql_logging = os.getenv("ENABLE_SQL_LOGGING", "false").lower() == "true"

        if log_level and log_level.upper() in LogLevel.__members__:
            effective_log_level = log_level.upper()
        elif log_verbosity:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)
        else:
            effective_log_level = settings.log_level

        format_string = FORMAT_STRINGS.get(log_format, FORMAT_STRINGS[LogFormat.SIMPLE.value])

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {}
        }

        for module in cls.DEFAULT_QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
            }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
            }

        if not enable_sql_logging:
            logging_config["loggers"]["asyncpg"] = {
                "level": "WARNING",
            }

        return logging_config

    @classmethod
    def configure(cls, settings: Optional[AccessSettings] = None) -> None:
        """Configure logging from settings and environment variables."""
        config = cls.build_config(settings)
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        if config["root"]["level"] == "DEBUG":
            logger.debug(f"Logging configured: level={config['root']['level']}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a configured logger for the given module name."""
        return logging.getLogger(name)

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.

        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Silence all logging from a module."""
        cls.set_module_level(module_name, "CRITICAL")


def setup_logging() -> None:
    """Setup logging configuration from environment variables.

    This is the main entry point for configuring logging and should be
    called once at application startup.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger."""
    return LoggingConfig.get_logger(name)
