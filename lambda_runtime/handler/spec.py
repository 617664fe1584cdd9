"""Handler specification parsing."""

from pydantic import BaseModel, ConfigDict, Field

from lambda_runtime.exceptions.startup_errors import InvalidHandlerSpecError

DEFAULT_EXPORT_NAME = "handler"


class HandlerSpec(BaseModel):
    """Module and export name parsed from a ``module.export`` string."""

    model_config = ConfigDict(frozen=True)

    module_name: str = Field(min_length=1)
    export_name: str = Field(default=DEFAULT_EXPORT_NAME, min_length=1)

    def __str__(self) -> str:
        return f"{self.module_name}.{self.export_name}"


def parse_handler_spec(value: str) -> HandlerSpec:
    """Parse a handler specification.

    The string is split on its first dot. ``"mod.handler"`` yields module
    ``mod`` and export ``handler``; ``"mod"`` alone (or ``"mod."``) defaults
    the export to ``handler``.

    Args:
        value: Raw handler specification, e.g. the ``_HANDLER`` variable.

    Returns:
        The parsed HandlerSpec.

    Raises:
        InvalidHandlerSpecError: If the module part is empty.
    """
    module_name, _, export_name = value.strip().partition(".")
    if not module_name:
        raise InvalidHandlerSpecError(
            f"Handler specification '{value}' has no module name",
            handler_spec=value,
        )
    return HandlerSpec(
        module_name=module_name,
        export_name=export_name or DEFAULT_EXPORT_NAME,
    )
