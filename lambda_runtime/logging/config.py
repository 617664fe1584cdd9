"""Log settings, read from the platform's logging controls first.

Functions configured with the platform's logging controls receive
``AWS_LAMBDA_LOG_LEVEL`` (TRACE, DEBUG, INFO, WARN, ERROR or FATAL) and
``AWS_LAMBDA_LOG_FORMAT`` (Text or JSON). ``LOG_LEVEL`` and ``LOG_FORMAT``
are consulted when those are unset, which is the usual case for local runs.
"""

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambda_runtime.exceptions.startup_errors import ConfigurationError


class LogLevel(StrEnum):
    """Levels understood by the standard library, by name."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Platform level names without a standard library counterpart
PLATFORM_LEVEL_NAMES: dict[str, LogLevel] = {
    "TRACE": LogLevel.DEBUG,
    "WARN": LogLevel.WARNING,
    "FATAL": LogLevel.CRITICAL,
}


class LogFormat(StrEnum):
    """Output formats, named as the platform names them."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseSettings):
    """Logging configuration loaded from environment variables.

    Attributes:
        log_level: Minimum level of records written to the log stream.
        log_format: One JSON object per line, or pipe-separated text.
        include_location: Whether JSON records carry module/function/line.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        validation_alias=AliasChoices("AWS_LAMBDA_LOG_LEVEL", "LOG_LEVEL"),
    )
    log_format: LogFormat = Field(
        default=LogFormat.JSON,
        validation_alias=AliasChoices("AWS_LAMBDA_LOG_FORMAT", "LOG_FORMAT"),
    )
    include_location: bool = Field(default=False, validation_alias="LOG_INCLUDE_LOCATION")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        """Accept any case and map platform-only level names."""
        if isinstance(value, str):
            name = value.strip().upper()
            return PLATFORM_LEVEL_NAMES.get(name, name)
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_format(cls, value: Any) -> Any:
        """Accept the platform's ``Text`` / ``JSON`` spelling."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_logging_config() -> LoggingConfig:
    """Load logging settings from the environment.

    Raises:
        ConfigurationError: If a logging variable holds an unknown value.
    """
    try:
        return LoggingConfig()
    except ValidationError as error:
        raise ConfigurationError.from_validation_error(error, "logging") from error
