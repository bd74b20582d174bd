"""Centralized logging configuration for favo-sdk.

Provides consistent, configurable logging for applications embedding the SDK
with environment-based control over verbosity and log levels.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


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
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
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


def mask_secret(value: str, visible: int = 6) -> str:
    """Mask a token or key so it is safe to log."""
    if not value:
        return ""
    if len(value) <= visible * 2 + 4:
        return "***"
    return f"{value[:visible]}...{value[-visible:]}"


class LoggingConfig:
    """Centralized logging configuration manager."""

    SDK_LOGGER = "favo_sdk"

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """Build a dictConfig mapping from environment variables."""
        log_level = os.getenv("LOG_LEVEL", "").upper()
        log_verbosity = os.getenv("LOG_VERBOSITY", "NORMAL").upper()
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower()
        enable_http_logging = os.getenv("FAVO_SDK_DEBUG_HTTP", "false").lower() == "true"

        # Explicit LOG_LEVEL wins over verbosity
        if log_level in LogLevel.__members__:
            effective_log_level = log_level
        else:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)

        try:
            format_string = FORMAT_STRINGS[LogFormat(log_format)]
        except ValueError:
            format_string = FORMAT_STRINGS[LogFormat.SIMPLE]

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
            "loggers": {
                cls.SDK_LOGGER: {
                    "level": effective_log_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "DEBUG" if enable_http_logging else "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        config = cls.build_config()
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        level = config["loggers"][cls.SDK_LOGGER]["level"]
        if level == "DEBUG":
            logger.debug(f"Logging configured: level={level}")


def setup_logging() -> None:
    """Setup logging configuration from environment variables.

    The SDK never calls this itself; applications call it once at startup
    if they want the SDK's console logging.
    """
    LoggingConfig.configure()


# The SDK is a library: stay silent unless the host application configures logging
logging.getLogger(LoggingConfig.SDK_LOGGER).addHandler(logging.NullHandler())
