"""Log formatters for the runtime's stdout/stderr log stream."""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from lambda_runtime.logging.context import current_request_id, invocation_fields

_STANDARD_LOG_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the non-standard attributes attached via ``extra=``."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOG_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    The platform forwards each line of the process output to its log stream,
    where JSON lines can be queried field by field.
    """

    def __init__(self, *, include_location: bool = False) -> None:
        """Initialize the JSON formatter.

        Args:
            include_location: Whether to include module/function/line fields.
        """
        super().__init__()
        self._include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = current_request_id()
        if request_id:
            log_entry["aws_request_id"] = request_id

        if self._include_location:
            log_entry["module"] = record.module
            log_entry["function"] = record.funcName
            log_entry["line"] = record.lineno

        log_entry.update(invocation_fields())
        log_entry.update(_record_extras(record))

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
                "message": str(record.exc_info[1]) if record.exc_info[1] else "",
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as pipe-separated text, the platform's Text log format."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        """Initialize the text formatter.

        Args:
            use_colors: Whether to use ANSI colors in output.
        """
        super().__init__()
        self._use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``time | level | request | logger | message``."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        level = f"{record.levelname:<8}"
        if self._use_colors:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        request_id = current_request_id() or "-"

        context_parts = [
            f"{key}={value}"
            for key, value in {**invocation_fields(), **_record_extras(record)}.items()
        ]

        result = " | ".join([timestamp, level, request_id, record.name, record.getMessage()])
        if context_parts:
            result = f"{result} | {' '.join(context_parts)}"

        if record.exc_info:
            result += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return result
