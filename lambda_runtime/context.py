"""Invocation context construction.

Static function metadata is read once at start-up; each invocation adds its
request id and a live remaining-time accessor bound to its deadline.
"""

import time
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from lambda_runtime.config import RuntimeSettings

Clock = Callable[[], int]


def current_time_millis() -> int:
    """Return the wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class FunctionMetadata(BaseModel):
    """Process-wide function metadata shared by every invocation context."""

    model_config = ConfigDict(frozen=True)

    function_name: str = ""
    function_version: str = ""
    memory_limit_in_mb: str = ""
    log_group_name: str = ""
    log_stream_name: str = ""

    @classmethod
    def from_settings(cls, settings: RuntimeSettings) -> "FunctionMetadata":
        """Snapshot the static metadata from runtime settings."""
        return cls(
            function_name=settings.function_name,
            function_version=settings.function_version,
            memory_limit_in_mb=settings.memory_size,
            log_group_name=settings.log_group_name,
            log_stream_name=settings.log_stream_name,
        )


class InvocationContext:
    """Context object passed to the handler as its second argument."""

    def __init__(
        self,
        *,
        aws_request_id: str,
        metadata: FunctionMetadata,
        deadline_ms: int,
        invoked_function_arn: str = "",
        clock: Clock = current_time_millis,
    ) -> None:
        self.aws_request_id = aws_request_id
        self.function_name = metadata.function_name
        self.function_version = metadata.function_version
        self.memory_limit_in_mb = metadata.memory_limit_in_mb
        self.log_group_name = metadata.log_group_name
        self.log_stream_name = metadata.log_stream_name
        self.invoked_function_arn = invoked_function_arn
        self._deadline_ms = deadline_ms
        self._clock = clock

    def get_remaining_time_in_millis(self) -> int:
        """Return milliseconds left before the deadline, never negative."""
        return max(0, self._deadline_ms - self._clock())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"aws_request_id={self.aws_request_id!r}, "
            f"function_name={self.function_name!r}, "
            f"function_version={self.function_version!r})"
        )


def build_invocation_context(
    metadata: FunctionMetadata,
    request_id: str,
    deadline_ms: int,
    *,
    invoked_function_arn: str = "",
    clock: Clock = current_time_millis,
) -> InvocationContext:
    """Assemble the context for one invocation.

    Args:
        metadata: Static function metadata captured at start-up.
        request_id: Request id of the invocation.
        deadline_ms: Invocation deadline in epoch milliseconds.
        invoked_function_arn: ARN the function was invoked with, when known.
        clock: Source of the current epoch milliseconds.

    Returns:
        A new InvocationContext.
    """
    return InvocationContext(
        aws_request_id=request_id,
        metadata=metadata,
        deadline_ms=deadline_ms,
        invoked_function_arn=invoked_function_arn,
        clock=clock,
    )
