"""Runtime entry point.

Started by the platform as the function's bootstrap process. Resolves the
handler, then serves invocations forever. Exits with status 1 when the
runtime cannot start.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import TYPE_CHECKING

from lambda_runtime.config import validate_startup_config
from lambda_runtime.context import FunctionMetadata
from lambda_runtime.dispatcher import RuntimeLoop
from lambda_runtime.exceptions.startup_errors import StartupError
from lambda_runtime.handler.resolver import HandlerResolver
from lambda_runtime.logging.logger import setup_logging
from lambda_runtime.runtime_api.client import RuntimeApiClient

if TYPE_CHECKING:
    from types import FrameType

    from lambda_runtime.config import RuntimeSettings

logger = logging.getLogger(__name__)

EXIT_STARTUP_FAILURE = 1


def create_runtime(settings: RuntimeSettings) -> RuntimeLoop:
    """Wire the runtime components from validated settings.

    Args:
        settings: Runtime configuration.

    Returns:
        A RuntimeLoop that has not been started yet.
    """
    return RuntimeLoop(
        client=RuntimeApiClient(settings.runtime_api),
        resolver=HandlerResolver(settings.task_root, settings.handler_extensions),
        handler_spec=settings.handler,
        metadata=FunctionMetadata.from_settings(settings),
    )


def _install_signal_handlers(runtime: RuntimeLoop) -> None:
    """Stop the loop after the current cycle on SIGTERM."""

    def handle_sigterm(signal_number: int, _frame: FrameType | None) -> None:
        logger.info("Received signal %d, stopping after the current invocation", signal_number)
        runtime.stop()

    signal.signal(signal.SIGTERM, handle_sigterm)


def main() -> int:
    """Start the runtime and serve invocations.

    Returns:
        Process exit status; only returned when start-up fails or the loop
        is stopped by a signal.
    """
    try:
        setup_logging()
        settings = validate_startup_config()
        runtime = create_runtime(settings)
        runtime.start()
    except StartupError as error:
        logger.critical("Runtime failed to start: %s", error, extra={"error": error.to_log_dict()})
        return EXIT_STARTUP_FAILURE

    logger.info(
        "Starting runtime (handler=%s, task_root=%s, runtime_api=%s)",
        settings.handler,
        settings.task_root,
        settings.runtime_api,
    )
    _install_signal_handlers(runtime)
    runtime.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
