"""
Service Config - Application Configuration

Loads an immutable Config snapshot from environment variables.

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- One "before" validator per field, delegating to the pure parsers in
  src/core/fields.py; raw defaults are validated like environment values
- Every field is validated even after a failure; all failures are reported
  together as one ConfigLoadError

Anti-Patterns Avoided:
- Fail-on-first-error config loading: users fix one variable per restart
- Partial configuration: load_config() returns a Config or raises, never both
"""

from datetime import timedelta
from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_OUTPUT,
    DEFAULT_SERVER_ADDRESS,
    DEFAULT_SERVER_IDLE_TIMEOUT,
    DEFAULT_SERVER_READ_HEADER_TIMEOUT,
    DEFAULT_SERVER_READ_TIMEOUT,
    DEFAULT_SERVER_SHUTDOWN_TIMEOUT,
    DEFAULT_SERVER_WRITE_TIMEOUT,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_LOG_OUTPUT,
    ENV_SERVER_ADDRESS,
    ENV_SERVER_IDLE_TIMEOUT,
    ENV_SERVER_READ_HEADER_TIMEOUT,
    ENV_SERVER_READ_TIMEOUT,
    ENV_SERVER_SHUTDOWN_TIMEOUT,
    ENV_SERVER_WRITE_TIMEOUT,
)
from src.core.exceptions import ConfigLoadError, InvalidFieldError
from src.core.fields import (
    LogFormat,
    LogLevel,
    LogOutput,
    parse_duration,
    parse_log_format,
    parse_log_level,
    parse_log_output,
    parse_server_address,
)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


class Config(BaseSettings):
    """Immutable configuration snapshot loaded from environment variables.

    Each field reads exactly one environment variable, named by its alias
    and matched case-sensitively, e.g. server_read_timeout <- SERVER_READ_TIMEOUT.
    Direct construction takes the same names: Config(LOG_LEVEL="debug").
    Fields are declared in load order, which is also the order failures are
    reported in.

    Defaults are raw text and go through the same parsers as environment
    values, so an unset variable always yields a valid value.
    """

    # Logging configuration
    log_level: LogLevel = Field(default=DEFAULT_LOG_LEVEL, validation_alias=ENV_LOG_LEVEL)
    log_format: LogFormat = Field(default=DEFAULT_LOG_FORMAT, validation_alias=ENV_LOG_FORMAT)
    log_output: LogOutput | str = Field(default=DEFAULT_LOG_OUTPUT, validation_alias=ENV_LOG_OUTPUT)

    # Server configuration
    server_address: str = Field(default=DEFAULT_SERVER_ADDRESS, validation_alias=ENV_SERVER_ADDRESS)
    server_read_timeout: timedelta = Field(
        default=DEFAULT_SERVER_READ_TIMEOUT, validation_alias=ENV_SERVER_READ_TIMEOUT
    )
    server_read_header_timeout: timedelta = Field(
        default=DEFAULT_SERVER_READ_HEADER_TIMEOUT, validation_alias=ENV_SERVER_READ_HEADER_TIMEOUT
    )
    server_write_timeout: timedelta = Field(
        default=DEFAULT_SERVER_WRITE_TIMEOUT, validation_alias=ENV_SERVER_WRITE_TIMEOUT
    )
    server_idle_timeout: timedelta = Field(
        default=DEFAULT_SERVER_IDLE_TIMEOUT, validation_alias=ENV_SERVER_IDLE_TIMEOUT
    )
    server_shutdown_timeout: timedelta = Field(
        default=DEFAULT_SERVER_SHUTDOWN_TIMEOUT, validation_alias=ENV_SERVER_SHUTDOWN_TIMEOUT
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=True,
        frozen=True,
        validate_default=True,
        extra="ignore",  # Ignore unrelated env vars
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        return parse_log_level(_as_text(value))

    @field_validator("log_format", mode="before")
    @classmethod
    def _validate_log_format(cls, value: Any) -> LogFormat:
        if isinstance(value, LogFormat):
            return value
        return parse_log_format(_as_text(value))

    @field_validator("log_output", mode="before")
    @classmethod
    def _validate_log_output(cls, value: Any) -> LogOutput | str:
        if isinstance(value, LogOutput):
            return value
        return parse_log_output(_as_text(value))

    @field_validator("server_address", mode="before")
    @classmethod
    def _validate_server_address(cls, value: Any) -> str:
        return parse_server_address(_as_text(value))

    @field_validator(
        "server_read_timeout",
        "server_read_header_timeout",
        "server_write_timeout",
        "server_idle_timeout",
        "server_shutdown_timeout",
        mode="before",
    )
    @classmethod
    def _validate_duration(cls, value: Any, info: ValidationInfo) -> timedelta:
        if isinstance(value, timedelta):
            return value
        return parse_duration(_as_text(value), env=_env_name(info.field_name))

    def log_fields(self) -> dict[str, Any]:
        """Flatten the snapshot into plain values for structured logging."""
        return {
            "log_level": self.log_level.value,
            "log_format": self.log_format.value,
            "log_output": _enum_value(self.log_output),
            "server_address": self.server_address,
            "server_read_timeout": self.server_read_timeout.total_seconds(),
            "server_read_header_timeout": self.server_read_header_timeout.total_seconds(),
            "server_write_timeout": self.server_write_timeout.total_seconds(),
            "server_idle_timeout": self.server_idle_timeout.total_seconds(),
            "server_shutdown_timeout": self.server_shutdown_timeout.total_seconds(),
        }


def _enum_value(value: LogOutput | str) -> str:
    return value.value if isinstance(value, LogOutput) else value


def _env_name(field_name: str | None) -> str:
    return (field_name or "").upper()


def _field_errors(exc: ValidationError) -> list[InvalidFieldError]:
    """Convert pydantic's error list into ordered field error records."""
    errors: list[InvalidFieldError] = []
    for error in exc.errors():
        original = error.get("ctx", {}).get("error")
        if isinstance(original, InvalidFieldError):
            errors.append(original)
            continue
        # Anything not raised by a field parser still names its variable
        loc = error.get("loc") or ("",)
        env = _env_name(str(loc[0]))
        errors.append(
            InvalidFieldError(env, _as_text(error.get("input")), env.lower().replace("_", " "))
        )
    return errors


def load_config() -> Config:
    """Load and validate the configuration from the process environment.

    Every variable is validated, even after one fails, so a single call
    reports all invalid fields.

    Returns:
        Fully-populated immutable Config

    Raises:
        ConfigLoadError: If any variable holds an invalid value; lists
            every failure in load order
    """
    try:
        return Config()
    except ValidationError as exc:
        raise ConfigLoadError(_field_errors(exc)) from None


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get the process-wide Config, loading it on first use.

    Tests can call get_config.cache_clear() to force a reload.

    Raises:
        ConfigLoadError: If the environment holds invalid values
    """
    return load_config()
