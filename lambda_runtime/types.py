"""Type definitions shared by the runtime components."""

from collections.abc import Callable
from typing import Any, Protocol

# Event payloads and handler results are opaque JSON values
JSONValue = Any


class LambdaContext(Protocol):
    """Invocation context interface handed to user handlers."""

    function_name: str
    function_version: str
    invoked_function_arn: str
    memory_limit_in_mb: str
    aws_request_id: str
    log_group_name: str
    log_stream_name: str

    def get_remaining_time_in_millis(self) -> int:
        """Return remaining execution time in milliseconds."""
        ...


LoadedHandler = Callable[[JSONValue, LambdaContext], JSONValue]
