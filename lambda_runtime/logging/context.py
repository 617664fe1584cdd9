"""Per-invocation logging context.

The dispatcher binds an invocation before calling the handler and unbinds it
once the outcome is reported. Every record logged in between, handler records
included, is tagged with the request id and function fields.
"""

from contextvars import ContextVar

from lambda_runtime.types import LambdaContext

_request_id: ContextVar[str] = ContextVar("aws_request_id", default="")
_invocation_fields: ContextVar[dict[str, str] | None] = ContextVar(
    "invocation_fields", default=None
)


def bind_invocation(context: LambdaContext) -> None:
    """Tag subsequent records with an invocation, replacing any earlier one.

    Fields the platform left empty are not emitted.
    """
    _request_id.set(context.aws_request_id)
    fields = {
        "function_name": context.function_name,
        "function_version": context.function_version,
        "invoked_function_arn": context.invoked_function_arn,
    }
    _invocation_fields.set({key: value for key, value in fields.items() if value})


def unbind_invocation() -> None:
    """Stop tagging records; the runtime is between invocations."""
    _request_id.set("")
    _invocation_fields.set(None)


def current_request_id() -> str:
    """Return the request id being served, or an empty string between invocations."""
    return _request_id.get()


def invocation_fields() -> dict[str, str]:
    """Return a copy of the function fields bound to the current invocation."""
    return dict(_invocation_fields.get() or {})
