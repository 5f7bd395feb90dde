"""Logging setup for the marketplace.

Repositories and the notifier attach record identifiers through
``extra=``, for example ``extra={"property_id": ..., "status": ...}``.
Both formatters surface those fields, so a listing can be traced through
submission, review and matching from the log alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from property_match.exceptions import ConfigurationError

if TYPE_CHECKING:
    from property_match.config import AppConfig

LOG_FORMATS = ("standard", "json")

# Attributes passed via ``extra=`` that are worth printing
CONTEXT_FIELDS = ("property_id", "request_id", "visit_id", "event_type", "status")

QUIET_LIBRARIES = ("psycopg", "confluent_kafka", "faker")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Listing identifiers attached to ``record``, in a stable order."""
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class ContextFormatter(logging.Formatter):
    """Pipe-separated lines with a ``[key=value ...]`` suffix for listing context."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in context.items())
        first, sep, rest = line.partition("\n")
        return f"{first} [{suffix}]{sep}{rest}"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; listing context becomes top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(record_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    library_level: str = "WARNING",
) -> None:
    """Configure logging for property-match.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        "standard" or "json".
    library_level : str
        Level for psycopg, confluent-kafka and faker.

    Raises
    ------
    ConfigurationError
        If ``format_type`` is not a known format.
    """
    if format_type not in LOG_FORMATS:
        raise ConfigurationError(f"Unknown log format {format_type!r}; expected one of {LOG_FORMATS}")
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter = JsonFormatter() if format_type == "json" else ContextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("property_match").setLevel(log_level)

    quiet_level = getattr(logging, library_level.upper(), logging.WARNING)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(quiet_level)


def configure_logging(config: "AppConfig") -> None:
    """Apply ``LOG_LEVEL`` and ``LOG_FORMAT`` from the application config."""
    setup_logging(config.log_level, config.log_format)
