"""Conversion of exceptions into the platform's error envelope."""

import traceback

from lambda_runtime.runtime_api.models import ErrorEnvelope

DEFAULT_ERROR_TYPE = "Error"


def create_error_envelope(error: BaseException) -> ErrorEnvelope:
    """Build the error envelope reported for a failed invocation.

    Args:
        error: The exception raised by the handler or the runtime.

    Returns:
        Envelope with the exception class name, message and stack trace lines.
    """
    return ErrorEnvelope(
        error_type=_error_type(error),
        error_message=_error_message(error),
        stack_trace=_stack_trace_lines(error),
    )


def _error_type(error: BaseException) -> str:
    """Return the exception class name, or the generic type when it has none."""
    name = getattr(type(error), "__name__", "")
    return name or DEFAULT_ERROR_TYPE


def _error_message(error: BaseException) -> str:
    """Return ``str(error)``, or a placeholder when the exception cannot render itself."""
    try:
        return str(error)
    except Exception:
        return f"<unprintable {_error_type(error)}>"


def _stack_trace_lines(error: BaseException) -> list[str]:
    """Format the exception traceback as a list of lines."""
    if error.__traceback__ is None:
        return []
    formatted = "".join(traceback.format_exception(error))
    return formatted.splitlines()
