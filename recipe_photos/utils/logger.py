"""Logging for the recipe photo finder.

One package logger ("recipe_photos") writes to stderr so CLI output on stdout
stays clean. Records may carry pipeline context through `extra=`; the fields
listed in CONTEXT_FIELDS are rendered by both formatters.

Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)
"""

import json
import logging
import os
import sys
from typing import Any, Dict

# Record attributes rendered as pipeline context, in display order
CONTEXT_FIELDS = ("recipe_id", "provider", "query")


def log_context(**fields) -> Dict[str, Any]:
    """Build an `extra=` mapping, dropping empty values.

    Example:
        logger.info("Searching", extra=log_context(recipe_id=recipe.id, provider="pexels"))
    """
    return {key: value for key, value in fields.items() if key in CONTEXT_FIELDS and value}


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if getattr(record, field, None)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(_record_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class RichTextFormatter(logging.Formatter):
    """Colored single-line text with a level icon and trailing context.

    Example:
        ℹ️ 2024-05-01 12:00:00 INFO     recipe_photos  🔍 pexels search: 'soup' [provider=pexels]
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "RESET": "\033[0m",
    }

    ICONS = {
        "DEBUG": "🔍",
        "INFO": "ℹ️",
        "WARNING": "⚠️",
        "ERROR": "❌",
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = self.COLORS.get(level, self.COLORS["RESET"])
        icon = self.ICONS.get(level, "")
        reset = self.COLORS["RESET"]
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        context = _record_context(record)
        suffix = ""
        if context:
            suffix = " [" + " ".join(f"{key}={value}" for key, value in context.items()) + "]"

        message = f"{color}{icon} {timestamp} {level:<8} {record.name:<14} {record.getMessage()}{suffix}{reset}"
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger; repeated calls reuse the existing handler.

    Args:
        name: Logger name, typically module name.

    Returns:
        Configured logger instance.
    """
    logger_instance = logging.getLogger(name)
    if logger_instance.handlers:
        return logger_instance

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logger_instance.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter() if os.getenv("LOG_TYPE", "text").lower() == "json" else RichTextFormatter())
    logger_instance.addHandler(handler)
    # Records stop here; the host application's root handlers would print them twice
    logger_instance.propagate = False

    return logger_instance


logger = get_logger("recipe_photos")

# aiohttp logs every connection at debug level
logging.getLogger("aiohttp").setLevel(logging.WARNING)
