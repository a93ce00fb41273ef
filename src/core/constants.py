"""
Service Config - Constants

Environment variable names, raw-text defaults and reference bounds.

Defaults are stored as the raw text a user would set, so they pass through
the same field parsers as environment values.
"""

from typing import Final

# =============================================================================
# Environment variable names
# =============================================================================

ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"
ENV_LOG_FORMAT: Final[str] = "LOG_FORMAT"
ENV_LOG_OUTPUT: Final[str] = "LOG_OUTPUT"
ENV_SERVER_ADDRESS: Final[str] = "SERVER_ADDRESS"
ENV_SERVER_READ_TIMEOUT: Final[str] = "SERVER_READ_TIMEOUT"
ENV_SERVER_READ_HEADER_TIMEOUT: Final[str] = "SERVER_READ_HEADER_TIMEOUT"
ENV_SERVER_WRITE_TIMEOUT: Final[str] = "SERVER_WRITE_TIMEOUT"
ENV_SERVER_IDLE_TIMEOUT: Final[str] = "SERVER_IDLE_TIMEOUT"
ENV_SERVER_SHUTDOWN_TIMEOUT: Final[str] = "SERVER_SHUTDOWN_TIMEOUT"

# Load order; also the order failures are reported in
ENV_NAMES: Final[tuple[str, ...]] = (
    ENV_LOG_LEVEL,
    ENV_LOG_FORMAT,
    ENV_LOG_OUTPUT,
    ENV_SERVER_ADDRESS,
    ENV_SERVER_READ_TIMEOUT,
    ENV_SERVER_READ_HEADER_TIMEOUT,
    ENV_SERVER_WRITE_TIMEOUT,
    ENV_SERVER_IDLE_TIMEOUT,
    ENV_SERVER_SHUTDOWN_TIMEOUT,
)

# =============================================================================
# Defaults (raw text, applied before validation)
# =============================================================================

DEFAULT_LOG_LEVEL: Final[str] = "info"
DEFAULT_LOG_FORMAT: Final[str] = "text"
DEFAULT_LOG_OUTPUT: Final[str] = "stdout"
DEFAULT_SERVER_ADDRESS: Final[str] = "localhost:8080"
DEFAULT_SERVER_READ_TIMEOUT: Final[str] = "5s"
DEFAULT_SERVER_READ_HEADER_TIMEOUT: Final[str] = "2s"
DEFAULT_SERVER_WRITE_TIMEOUT: Final[str] = "10s"
DEFAULT_SERVER_IDLE_TIMEOUT: Final[str] = "1m"
DEFAULT_SERVER_SHUTDOWN_TIMEOUT: Final[str] = "15s"

DEFAULTS: Final[dict[str, str]] = {
    ENV_LOG_LEVEL: DEFAULT_LOG_LEVEL,
    ENV_LOG_FORMAT: DEFAULT_LOG_FORMAT,
    ENV_LOG_OUTPUT: DEFAULT_LOG_OUTPUT,
    ENV_SERVER_ADDRESS: DEFAULT_SERVER_ADDRESS,
    ENV_SERVER_READ_TIMEOUT: DEFAULT_SERVER_READ_TIMEOUT,
    ENV_SERVER_READ_HEADER_TIMEOUT: DEFAULT_SERVER_READ_HEADER_TIMEOUT,
    ENV_SERVER_WRITE_TIMEOUT: DEFAULT_SERVER_WRITE_TIMEOUT,
    ENV_SERVER_IDLE_TIMEOUT: DEFAULT_SERVER_IDLE_TIMEOUT,
    ENV_SERVER_SHUTDOWN_TIMEOUT: DEFAULT_SERVER_SHUTDOWN_TIMEOUT,
}

# =============================================================================
# TCP port bounds (reference values; enforced by the network layer only)
# =============================================================================

TCP_PORT_MIN: Final[int] = 0
TCP_PORT_MAX: Final[int] = 65535

SERVICE_NAME: Final[str] = "service-config"
