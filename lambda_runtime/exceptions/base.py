"""Base exception class for the runtime client.

Errors carry a machine-readable code and a ``fatal`` flag; the entry point
exits on fatal errors and the dispatcher reports the rest and carries on.
"""

from typing import Any, ClassVar


class RuntimeShimError(Exception):
    """Base exception for all errors raised by the runtime client itself.

    User handler exceptions never derive from this class; they are reported
    to the platform as-is.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        context: Additional debugging information.
    """

    error_code: ClassVar[str] = "RUNTIME_ERROR"
    fatal: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            context: Additional key-value pairs for debugging.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_log_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_code": self.error_code,
            "fatal": self.fatal,
            "message": self.message,
            "context": self.context,
            "exception_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        """Return the message; context is kept out so error envelopes stay readable."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"context={self.context!r})"
        )
