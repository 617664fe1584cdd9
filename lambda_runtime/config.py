"""Runtime configuration using Pydantic BaseSettings.

All settings are loaded from the environment the platform prepares for the
bootstrap process. No .env files.

Usage:
    from lambda_runtime.config import get_settings

    settings = get_settings()
    print(settings.runtime_api)
    print(settings.handler)
"""

from functools import lru_cache
from importlib.machinery import BYTECODE_SUFFIXES, EXTENSION_SUFFIXES, SOURCE_SUFFIXES

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambda_runtime.exceptions.startup_errors import ConfigurationError

DEFAULT_HANDLER = "mod.handler"
DEFAULT_TASK_ROOT = "/var/task"
DEFAULT_HANDLER_EXTENSIONS: tuple[str, ...] = (
    *SOURCE_SUFFIXES,
    *BYTECODE_SUFFIXES,
    *EXTENSION_SUFFIXES,
)


class RuntimeSettings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Attributes:
        runtime_api: host:port of the platform's Runtime API endpoint.
        handler: Handler specification in ``module.export`` form.
        task_root: Directory the handler module is loaded from.
        function_name: Function name reported in the invocation context.
        function_version: Function version reported in the invocation context.
        memory_size: Memory limit in MB, passed through verbatim.
        log_group_name: Log group reported in the invocation context.
        log_stream_name: Log stream reported in the invocation context.
        handler_extensions: Candidate module suffixes, tried in order.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    # Platform endpoint
    runtime_api: str = Field(
        min_length=1,
        validation_alias="AWS_LAMBDA_RUNTIME_API",
    )

    # Handler location
    handler: str = Field(
        default=DEFAULT_HANDLER,
        validation_alias="_HANDLER",
    )
    task_root: str = Field(
        default=DEFAULT_TASK_ROOT,
        min_length=1,
        validation_alias="LAMBDA_TASK_ROOT",
    )
    handler_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HANDLER_EXTENSIONS),
        validation_alias="HANDLER_EXTENSIONS",
    )

    # Static function metadata
    function_name: str = Field(
        default="",
        validation_alias="AWS_LAMBDA_FUNCTION_NAME",
    )
    function_version: str = Field(
        default="",
        validation_alias="AWS_LAMBDA_FUNCTION_VERSION",
    )
    memory_size: str = Field(
        default="",
        validation_alias="AWS_LAMBDA_FUNCTION_MEMORY_SIZE",
    )
    log_group_name: str = Field(
        default="",
        validation_alias="AWS_LAMBDA_LOG_GROUP_NAME",
    )
    log_stream_name: str = Field(
        default="",
        validation_alias="AWS_LAMBDA_LOG_STREAM_NAME",
    )

    @field_validator("handler")
    @classmethod
    def default_blank_handler(cls, value: str) -> str:
        """Treat an empty handler variable as unset."""
        return value or DEFAULT_HANDLER

    @field_validator("handler_extensions")
    @classmethod
    def validate_handler_extensions(cls, value: list[str]) -> list[str]:
        """Require at least one suffix, each starting with a dot."""
        if not value:
            error_message = "handler_extensions must not be empty"
            raise ValueError(error_message)
        for suffix in value:
            if not suffix.startswith("."):
                error_message = f"handler extension must start with '.', got '{suffix}'"
                raise ValueError(error_message)
        return value


@lru_cache
def get_settings() -> RuntimeSettings:
    """Get cached settings instance.

    Returns:
        Cached RuntimeSettings instance.
    """
    return RuntimeSettings()


def validate_startup_config() -> RuntimeSettings:
    """Validate configuration on process start-up.

    Returns:
        Validated RuntimeSettings instance.

    Raises:
        ConfigurationError: If the environment does not describe a usable runtime.
    """
    try:
        return get_settings()
    except ValidationError as error:
        raise ConfigurationError.from_validation_error(error, "runtime") from error
