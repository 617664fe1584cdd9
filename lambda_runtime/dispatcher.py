"""Event loop driving the fetch / invoke / report cycle.

States:
    STARTING -> READY -> (FETCHING -> INVOKING -> REPORTING)*

The cycle repeats until ``stop()`` is called; a failed invocation never ends
the loop. Only start-up failures (no handler) prevent it from running.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from lambda_runtime.context import FunctionMetadata, build_invocation_context, current_time_millis
from lambda_runtime.exceptions.base import RuntimeShimError
from lambda_runtime.exceptions.envelope import create_error_envelope
from lambda_runtime.exceptions.invocation_errors import RuntimeApiError
from lambda_runtime.handler.spec import parse_handler_spec
from lambda_runtime.logging.context import bind_invocation, unbind_invocation

if TYPE_CHECKING:
    from lambda_runtime.context import Clock
    from lambda_runtime.handler.resolver import HandlerResolver
    from lambda_runtime.runtime_api.client import RuntimeApiClient
    from lambda_runtime.runtime_api.models import NextInvocation
    from lambda_runtime.types import JSONValue, LambdaContext, LoadedHandler

logger = logging.getLogger(__name__)


class RuntimeState(StrEnum):
    """Dispatcher states."""

    STARTING = "starting"
    READY = "ready"
    FETCHING = "fetching"
    INVOKING = "invoking"
    REPORTING = "reporting"


class RuntimeLoop:
    """Sequential dispatcher tying the resolver, API client and handler together.

    Exactly one invocation is in flight at any time: the next event is not
    fetched until the current outcome has been posted.
    """

    def __init__(
        self,
        *,
        client: RuntimeApiClient,
        resolver: HandlerResolver,
        handler_spec: str,
        metadata: FunctionMetadata,
        clock: Clock = current_time_millis,
    ) -> None:
        """Initialize the loop.

        Args:
            client: Runtime API client.
            resolver: Resolver used once at start-up.
            handler_spec: Raw ``module.export`` handler specification.
            metadata: Static function metadata for invocation contexts.
            clock: Source of epoch milliseconds for remaining-time checks.
        """
        self._client = client
        self._resolver = resolver
        self._handler_spec = handler_spec
        self._metadata = metadata
        self._clock = clock
        self._handler: LoadedHandler | None = None
        self._last_request_id: str | None = None
        self._running = False
        self.state = RuntimeState.STARTING

    @property
    def is_running(self) -> bool:
        """Return whether the loop is cycling."""
        return self._running

    @property
    def last_request_id(self) -> str | None:
        """Most recently received request id, if any."""
        return self._last_request_id

    def start(self) -> None:
        """Resolve the handler once.

        Raises:
            StartupError: If the specification is invalid or no handler is found.
        """
        self.state = RuntimeState.STARTING
        spec = parse_handler_spec(self._handler_spec)
        self._handler = self._resolver.resolve(spec)
        self.state = RuntimeState.READY
        logger.info("Runtime ready for handler %s", spec)

    def run(self) -> None:
        """Serve invocations until stopped.

        Resolves the handler first when ``start()`` has not been called.
        """
        if self._handler is None:
            self.start()

        self._running = True
        logger.info("Entering invocation loop")
        while self._running:
            self.run_once()
        logger.info("Invocation loop stopped")

    def stop(self) -> None:
        """Stop the loop after the current cycle completes."""
        self._running = False

    def run_once(self) -> None:
        """Serve exactly one fetch / invoke / report cycle."""
        self.state = RuntimeState.FETCHING
        try:
            invocation = self._client.fetch_next()
        except Exception as error:
            self._handle_fetch_failure(error)
            return

        self._last_request_id = invocation.request_id
        try:
            self._serve(invocation)
        finally:
            unbind_invocation()

    def _serve(self, invocation: NextInvocation) -> None:
        """Invoke the handler for one event and report the outcome."""
        request_id = invocation.request_id
        self.state = RuntimeState.INVOKING
        try:
            context = build_invocation_context(
                self._metadata,
                request_id,
                invocation.deadline_ms,
                invoked_function_arn=invocation.invoked_function_arn,
                clock=self._clock,
            )
            bind_invocation(context)
            logger.debug("Invoking handler")
            result = self._invoke(invocation.event, context)

            self.state = RuntimeState.REPORTING
            self._client.post_response(request_id, result)
        except Exception as error:
            self.state = RuntimeState.REPORTING
            logger.exception("Invocation %s failed", request_id)
            self._client.post_error(request_id, create_error_envelope(error))
            return

        logger.debug("Invocation %s succeeded", request_id)

    def _invoke(self, event: JSONValue, context: LambdaContext) -> JSONValue:
        """Call the handler, driving coroutine results to completion."""
        if self._handler is None:
            message = "Handler invoked before the runtime was started"
            raise RuntimeError(message)

        result = self._handler(event, context)
        if inspect.isawaitable(result):
            result = asyncio.run(_await_result(result))
        return result

    def _handle_fetch_failure(self, error: Exception) -> None:
        """Report a failed fetch against the latest known request id, if any."""
        # Transport and protocol failures are expected; anything else gets a traceback
        show_traceback = not isinstance(error, RuntimeApiError)
        log_extra = {"error": error.to_log_dict()} if isinstance(error, RuntimeShimError) else {}
        if isinstance(error, RuntimeApiError) and error.request_id:
            self._last_request_id = error.request_id

        if self._last_request_id is None:
            logger.error(
                "Failed to fetch next invocation; no request id to report against: %s",
                error,
                exc_info=show_traceback,
                extra=log_extra,
            )
            return

        logger.error(
            "Failed to fetch next invocation; reporting against request %s: %s",
            self._last_request_id,
            error,
            exc_info=show_traceback,
            extra=log_extra,
        )
        self.state = RuntimeState.REPORTING
        self._client.post_error(self._last_request_id, create_error_envelope(error))


async def _await_result(awaitable: object) -> JSONValue:
    """Await an arbitrary awaitable inside a fresh event loop."""
    return await awaitable  # type: ignore[misc]
