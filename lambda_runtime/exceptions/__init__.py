"""Runtime client exception hierarchy.

Architecture:
    RuntimeShimError (base)
    ├── StartupError (fatal, process exits with status 1)
    │   ├── ConfigurationError
    │   ├── InvalidHandlerSpecError
    │   └── HandlerNotFoundError
    └── InvocationError (recoverable, reported and the loop continues)
        └── RuntimeApiError
            ├── MissingRequestIdError
            └── InvalidEventError

Usage:
    from lambda_runtime.exceptions import HandlerNotFoundError

    def resolve(spec: HandlerSpec) -> LoadedHandler:
        ...
        raise HandlerNotFoundError(
            f'Handler "{spec.export_name}" not found in {spec.module_name}',
            module_name=spec.module_name,
            export_name=spec.export_name,
        )
"""

from lambda_runtime.exceptions.base import RuntimeShimError
from lambda_runtime.exceptions.envelope import create_error_envelope
from lambda_runtime.exceptions.invocation_errors import (
    InvalidEventError,
    InvocationError,
    MissingRequestIdError,
    RuntimeApiError,
)
from lambda_runtime.exceptions.startup_errors import (
    ConfigurationError,
    HandlerNotFoundError,
    InvalidHandlerSpecError,
    StartupError,
)

__all__ = [
    "ConfigurationError",
    "HandlerNotFoundError",
    "InvalidEventError",
    "InvalidHandlerSpecError",
    "InvocationError",
    "MissingRequestIdError",
    "RuntimeApiError",
    "RuntimeShimError",
    "StartupError",
    "create_error_envelope",
]
