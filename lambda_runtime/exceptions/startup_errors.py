"""Fatal start-up errors.

Any of these stops the process before the event loop begins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from lambda_runtime.exceptions.base import RuntimeShimError

if TYPE_CHECKING:
    from pydantic import ValidationError


class StartupError(RuntimeShimError):
    """Base class for errors that prevent the event loop from starting."""

    error_code: ClassVar[str] = "STARTUP_ERROR"
    fatal: ClassVar[bool] = True


class ConfigurationError(StartupError):
    """Runtime configuration is invalid or missing."""

    error_code: ClassVar[str] = "CONFIGURATION_ERROR"

    @classmethod
    def from_validation_error(cls, error: ValidationError, subject: str) -> ConfigurationError:
        """Summarize a settings validation failure.

        Args:
            error: Validation error raised while loading settings.
            subject: Which settings failed, e.g. ``runtime`` or ``logging``.

        Returns:
            A ConfigurationError listing the offending fields.
        """
        fields = [".".join(str(part) for part in item["loc"]) for item in error.errors()]
        return cls(
            f"Invalid {subject} configuration: {error.error_count()} error(s)",
            context={"fields": fields},
        )


class InvalidHandlerSpecError(StartupError):
    """Handler specification string cannot be parsed."""

    error_code: ClassVar[str] = "INVALID_HANDLER_SPEC"

    def __init__(
        self,
        message: str,
        *,
        handler_spec: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending specification string.

        Args:
            message: Description of the parse failure.
            handler_spec: The raw handler specification.
            context: Additional context information.
        """
        context_dict = context or {}
        if handler_spec is not None:
            context_dict["handler_spec"] = handler_spec
        super().__init__(message, context=context_dict)


class HandlerNotFoundError(StartupError):
    """No candidate module yielded a callable handler."""

    error_code: ClassVar[str] = "HANDLER_NOT_FOUND"

    def __init__(
        self,
        message: str,
        *,
        module_name: str | None = None,
        export_name: str | None = None,
        candidates: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the module, export and paths that were tried.

        Args:
            message: Description of the failure.
            module_name: Module part of the handler specification.
            export_name: Export part of the handler specification.
            candidates: Candidate file paths tried, in order.
            context: Additional context information.
        """
        context_dict = context or {}
        if module_name is not None:
            context_dict["module_name"] = module_name
        if export_name is not None:
            context_dict["export_name"] = export_name
        if candidates is not None:
            context_dict["candidates"] = candidates
        super().__init__(message, context=context_dict)
