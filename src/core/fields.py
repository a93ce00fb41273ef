"""
Service Config - Field Parsers

One pure function per kind of configuration field. Each takes the raw text
read from an environment variable (or its documented default) and returns a
typed value, raising InvalidFieldError when the text is not acceptable.

Parsers never read the environment themselves; the loader in
src/core/config.py does that and collects their failures.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum

from src.core.constants import ENV_LOG_FORMAT, ENV_LOG_LEVEL, ENV_LOG_OUTPUT, ENV_SERVER_ADDRESS
from src.core.exceptions import InvalidFieldError

# =============================================================================
# Enumerated value types
# =============================================================================


class LogLevel(str, Enum):
    """Severity threshold of emitted log records."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogFormat(str, Enum):
    """Encoding of log records."""

    TEXT = "text"
    JSON = "json"


class LogOutput(str, Enum):
    """Standard log destinations. Any other non-empty string is a file path."""

    STDOUT = "stdout"
    STDERR = "stderr"


# =============================================================================
# Enum fields
# =============================================================================


def _normalize(value: str) -> str:
    return value.strip().lower()


def parse_log_level(value: str, env: str = ENV_LOG_LEVEL) -> LogLevel:
    """Parse a log level, case-insensitively and ignoring surrounding whitespace.

    Raises:
        InvalidFieldError: If the value is not debug, info, warn or error
    """
    try:
        return LogLevel(_normalize(value))
    except ValueError:
        raise InvalidFieldError(env, value, "log level") from None


def parse_log_format(value: str, env: str = ENV_LOG_FORMAT) -> LogFormat:
    """Parse a log format (text or json)."""
    try:
        return LogFormat(_normalize(value))
    except ValueError:
        raise InvalidFieldError(env, value, "log format") from None


def parse_log_output(value: str, env: str = ENV_LOG_OUTPUT) -> LogOutput | str:
    """Parse a log destination.

    stdout and stderr match case-insensitively. Any other non-empty value is
    returned trimmed but otherwise verbatim, for the consumer to treat as a
    file path.

    Raises:
        InvalidFieldError: If the value is empty after trimming
    """
    trimmed = value.strip()
    try:
        return LogOutput(trimmed.lower())
    except ValueError:
        pass
    if not trimmed:
        raise InvalidFieldError(env, value, "log output")
    return trimmed


def parse_server_address(value: str, env: str = ENV_SERVER_ADDRESS) -> str:
    """Accept a server address as an opaque string.

    Host and port are validated by the network layer (see src.main.split_address).
    """
    return value


# =============================================================================
# Duration fields
# =============================================================================

# Microseconds per unit; timedelta cannot represent anything finer
_UNIT_MICROSECONDS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_NUMBER = r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_COMPONENT_RE = re.compile(rf"({_NUMBER})({_UNIT})")
_DURATION_RE = re.compile(rf"([-+]?)((?:{_NUMBER}{_UNIT})+|0)")


def parse_duration(value: str, env: str) -> timedelta:
    """Parse duration text such as "300ms", "1.5h" or "2h45m".

    Grammar: an optional sign followed by one or more decimal numbers, each
    with a unit suffix (ns, us, µs, ms, s, m, h). A bare "0" is also allowed.
    Digits are ASCII only and no whitespace is accepted anywhere.

    Args:
        value: Raw duration text
        env: Environment variable the text came from, used in errors

    Returns:
        The parsed duration, truncated to microsecond resolution

    Raises:
        InvalidFieldError: If the text is malformed or out of range
    """
    description = env.lower().replace("_", " ")
    match = _DURATION_RE.fullmatch(value)
    if match is None:
        raise InvalidFieldError(env, value, description)

    sign, body = match.groups()
    total = Decimal(0)
    if body != "0":
        try:
            for number, unit in _COMPONENT_RE.findall(body):
                total += Decimal(number) * _UNIT_MICROSECONDS[unit]
        except InvalidOperation:
            raise InvalidFieldError(env, value, description) from None

    if sign == "-":
        total = -total
    try:
        return timedelta(microseconds=int(total))
    except OverflowError:
        raise InvalidFieldError(env, value, description) from None
