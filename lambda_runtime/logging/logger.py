"""Installs the runtime's log handler on the root logger.

The platform captures the process's stdout line by line into the function's
log stream. Handler code logging through the standard library, or emitting
warnings, goes through the same handler and is tagged with the invocation.
"""

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from lambda_runtime.logging.config import LogFormat, LoggingConfig, load_logging_config
from lambda_runtime.logging.formatters import JSONFormatter, TextFormatter


@dataclass
class LoggingState:
    """The handler installed by ``setup_logging``, if any."""

    handler: logging.Handler | None = None


_state = LoggingState()


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install the runtime's handler, replacing one installed earlier.

    Handlers attached to the root logger by anyone else are left in place.

    Args:
        config: Logging settings. Loaded from the environment if not provided.
        stream: Output stream for logs. Defaults to sys.stdout.

    Returns:
        The installed handler.

    Raises:
        ConfigurationError: If the logging environment is invalid.
    """
    if config is None:
        config = load_logging_config()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_create_formatter(config, stream))

    root_logger = logging.getLogger()
    if _state.handler is not None:
        root_logger.removeHandler(_state.handler)
    root_logger.addHandler(handler)
    root_logger.setLevel(config.log_level.value)
    _state.handler = handler

    logging.captureWarnings(True)
    # requests logs every connection at DEBUG through urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return handler


def _create_formatter(config: LoggingConfig, stream: TextIO | None) -> logging.Formatter:
    if config.log_format == LogFormat.JSON:
        return JSONFormatter(include_location=config.include_location)
    return TextFormatter(use_colors=stream is None and sys.stdout.isatty())


def reset_logging() -> None:
    """Remove the runtime's handler and stop capturing warnings."""
    if _state.handler is not None:
        logging.getLogger().removeHandler(_state.handler)
        _state.handler = None
    logging.captureWarnings(False)
