"""
Structured logging for the Swarm blockstore client.

The library never configures logging on import: the package root logger
only carries a NullHandler. Applications opt in with `configure_logging()`.

Call sites pass context through ``extra``:

    >>> _logger = get_logger(__name__)
    >>> _logger.debug("Bee request", extra={"method": "POST", "path": "/chunks"})

Extra fields are rendered after the message (or as JSON keys with
``json_format=True``). Postage batch IDs and signatures are masked.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional, TextIO

ROOT_LOGGER_NAME = "swarm_blockstore"

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

# Extra fields whose values are masked before formatting
SENSITIVE_FIELDS = frozenset({"stamp", "postage_batch_id", "signature"})

_log_context: ContextVar[Dict[str, Any]] = ContextVar("swarm_blockstore_log_context", default={})

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def _mask(value: Any) -> Any:
    if isinstance(value, str) and len(value) > 8:
        return f"{value[:8]}***"
    return value


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class SensitiveDataFilter(logging.Filter):
    """Mask sensitive extra fields (postage batch IDs, signatures)."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in SENSITIVE_FIELDS:
            if hasattr(record, field):
                setattr(record, field, _mask(getattr(record, field)))
        return True


class ContextFilter(logging.Filter):
    """Attach fields pushed with `LogContext` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class KeyValueFormatter(logging.Formatter):
    """Render extras as ``key=value`` pairs after the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extra_fields(record)
        if not extras:
            return base
        pairs = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} [{pairs}]"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the package namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance under the ``swarm_blockstore`` hierarchy
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    *,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Install a stream handler on the package root logger.

    Calling it again replaces the previously installed handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines instead of text
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_swarm_blockstore_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            KeyValueFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    handler.addFilter(ContextFilter())
    handler.addFilter(SensitiveDataFilter())
    handler._swarm_blockstore_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_level(level: str) -> None:
    """Set the package log level by name."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(getattr(logging, level.upper(), logging.INFO))


def disable_logging() -> None:
    """Silence all package logging."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)


def enable_debug() -> None:
    """Re-enable package logging at DEBUG level."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG)


class LogContext:
    """
    Temporarily attach fields to every record logged in this context.

    Example:
        >>> with LogContext(upload="site-v2"):
        ...     await client.upload_archive(stream)
    """

    def __init__(self, **fields: Any) -> None:
        self._fields = fields
        self._token = None

    def __enter__(self) -> LogContext:
        merged = {**_log_context.get(), **self._fields}
        self._token = _log_context.set(merged)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None
