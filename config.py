import os
import logging
import sys

import structlog

from exceptions import ConfigurationError

logger = logging.getLogger("fleetmotd")

DEFAULT_BASE_URL = "https://www.spectre-fleet.space"


def get_logger(name: str = "fleetmotd"):
    """Get a structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger = logger.bind(component="vendor", vendor="spectre")
        logger.info("fetching calendar", url=base_url)

    Args:
        name: Logger name (typically __name__ or module path)

    Returns:
        Structured logger instance with context binding support
    """
    return structlog.get_logger(name)


class Config:
    """Configuration management for fleetmotd"""

    def __init__(self):
        # Calendar source - also the origin prefixed to doctrine links
        self.BASE_URL = os.getenv("FLEETMOTD_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

        # API configuration
        self.API_HOST = os.getenv("FLEETMOTD_HOST", "0.0.0.0")
        self.API_PORT = self._parse_int("FLEETMOTD_PORT", "8000")
        self.DEBUG = os.getenv("FLEETMOTD_DEBUG", "false").lower() == "true"

        # Outbound fetch
        self.FETCH_TIMEOUT = self._parse_int("FLEETMOTD_FETCH_TIMEOUT", "30")
        self.FETCH_RETRIES = self._parse_int("FLEETMOTD_FETCH_RETRIES", "3")

        # Logging
        self.LOG_LEVEL = os.getenv("FLEETMOTD_LOG_LEVEL", "INFO").upper()

        # Validate configuration
        self._validate()

    def _parse_int(self, key: str, default: str) -> int:
        """Read an integer env var, failing with the offending key"""
        raw = os.getenv(key, default)
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}", config_key=key)

    def _validate(self):
        """Validate configuration values"""
        if not self.BASE_URL.startswith(("http://", "https://")):
            raise ConfigurationError(
                "FLEETMOTD_BASE_URL must be an absolute http(s) URL",
                config_key="FLEETMOTD_BASE_URL",
            )

        if self.API_PORT <= 0 or self.API_PORT > 65535:
            raise ConfigurationError(
                "FLEETMOTD_PORT must be between 1 and 65535", config_key="FLEETMOTD_PORT"
            )

        if self.FETCH_TIMEOUT <= 0:
            raise ConfigurationError(
                "FLEETMOTD_FETCH_TIMEOUT must be positive", config_key="FLEETMOTD_FETCH_TIMEOUT"
            )

        if self.FETCH_RETRIES < 0:
            raise ConfigurationError(
                "FLEETMOTD_FETCH_RETRIES must not be negative", config_key="FLEETMOTD_FETCH_RETRIES"
            )

    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.DEBUG

    def summary(self) -> dict:
        """Get a summary of current configuration"""
        return {
            "base_url": self.BASE_URL,
            "api_host": self.API_HOST,
            "api_port": self.API_PORT,
            "debug": self.DEBUG,
            "fetch_timeout": self.FETCH_TIMEOUT,
            "fetch_retries": self.FETCH_RETRIES,
            "log_level": self.LOG_LEVEL,
            "is_development": self.is_development(),
        }


def configure_structlog(is_development: bool = False, log_level: str = "INFO"):
    """Configure structlog for structured logging

    Args:
        is_development: If True, use human-readable console output. If False, use JSON.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # No timestamp processor - the process supervisor stamps lines
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_development:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ]
    else:
        # Production: JSON output for log aggregation
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )


# Global configuration instance
config = Config()

configure_structlog(
    is_development=config.is_development(),
    log_level=config.LOG_LEVEL
)
