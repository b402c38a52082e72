"""Console logging for the generation chain.

LOG_LEVEL (default INFO) sets the threshold and LOG_TYPE picks the output:
"text" for colored lines, "json" for one object per line.

Chain code tags records with `extra={"provider": ..., "stage": ...}` and the
usage service adds `user_id`; both formatters print whichever are set.
"""

import json
import logging
import os
import sys
from typing import Any, Dict

CONTEXT_FIELDS = ("provider", "stage", "user_id")


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class RichTextFormatter(logging.Formatter):
    """Colored single-line output with a level icon and trailing [key=value] context."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "RESET": "\033[0m",
    }

    ICONS = {
        "DEBUG": "🔍",
        "INFO": "🍳",
        "WARNING": "⚠️",
        "ERROR": "❌",
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        reset = self.COLORS["RESET"]
        context = " ".join(f"{key}={value}" for key, value in _context(record).items())

        line = (
            f"{self.COLORS.get(level, reset)}{self.ICONS.get(level, '')} "
            f"{self.formatTime(record, '%Y-%m-%d %H:%M:%S')} {level:<8} {record.name:<20} "
            f"{record.getMessage()}{f' [{context}]' if context else ''}{reset}"
        )
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use only."""
    instance = logging.getLogger(name)
    if instance.handlers:
        return instance

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    instance.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if os.getenv("LOG_TYPE", "text").lower() == "json" else RichTextFormatter())
    instance.addHandler(handler)
    return instance


logger = get_logger("strugglemeal")

# Connection-level chatter from aiohttp is only useful when debugging the client itself
logging.getLogger("aiohttp").setLevel(logging.WARNING)
