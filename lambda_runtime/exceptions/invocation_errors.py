"""Recoverable per-invocation errors raised while talking to the Runtime API."""

from typing import Any, ClassVar

from lambda_runtime.exceptions.base import RuntimeShimError


class InvocationError(RuntimeShimError):
    """Base class for errors confined to a single invocation cycle."""

    error_code: ClassVar[str] = "INVOCATION_ERROR"


class RuntimeApiError(InvocationError):
    """A Runtime API call failed or returned an unusable response.

    Attributes:
        request_id: Request id already known when the failure happened, if any.
    """

    error_code: ClassVar[str] = "RUNTIME_API_ERROR"

    def __init__(
        self,
        message: str,
        *,
        request_id: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with optional request id and HTTP status.

        Args:
            message: Description of the failure.
            request_id: Request id of the invocation, when one was received.
            status_code: HTTP status returned by the Runtime API.
            context: Additional context information.
        """
        context_dict = context or {}
        if request_id is not None:
            context_dict["request_id"] = request_id
        if status_code is not None:
            context_dict["status_code"] = status_code
        super().__init__(message, context=context_dict)
        self.request_id = request_id
        self.status_code = status_code


class MissingRequestIdError(RuntimeApiError):
    """The next-invocation response carried no request id header."""

    error_code: ClassVar[str] = "MISSING_REQUEST_ID"


class InvalidEventError(RuntimeApiError):
    """The next-invocation response body is not valid JSON."""

    error_code: ClassVar[str] = "INVALID_EVENT"
