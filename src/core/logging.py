"""
Service Config - Structured Logging Module

Patterns Applied:
- One-time configure_logging() at startup, driven by the loaded Config
- structlog BoundLogger with JSON or plain-text output
- Output to stdout, stderr or an append-mode log file

Anti-Patterns Avoided:
- structlog.configure() called per get_logger() - PREVENTED via _configured flag
- Leaked file handles between test runs - reset_logging() closes the log file
"""

import logging
import sys
from typing import IO, Any

import structlog
from structlog.typing import EventDict

from src.core.config import Config
from src.core.constants import SERVICE_NAME
from src.core.fields import LogFormat, LogLevel, LogOutput

# Module-level flag for one-time configuration
_configured: bool = False

# File opened for a custom LOG_OUTPUT, closed by reset_logging()
_log_file: IO[str] | None = None

_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Add service metadata to every log entry.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to modify

    Returns:
        Modified event dictionary with service info
    """
    event_dict["service"] = SERVICE_NAME
    return event_dict


def level_number(level: LogLevel) -> int:
    """Map a LogLevel to its stdlib logging number."""
    return _LEVELS[level]


def open_output(output: LogOutput | str) -> IO[str]:
    """Resolve a log destination to a writable text stream.

    stdout and stderr map to the process streams; anything else is treated
    as a file path and opened for appending.
    """
    global _log_file

    if output == LogOutput.STDOUT:
        return sys.stdout
    if output == LogOutput.STDERR:
        return sys.stderr
    _log_file = open(output, "a", encoding="utf-8")  # noqa: SIM115 - closed in reset_logging()
    return _log_file


def configure_logging(config: Config) -> None:
    """Configure structlog for the application.

    This function must be called exactly ONCE at application startup.
    Later calls are ignored until reset_logging() is called.

    Args:
        config: Loaded configuration supplying level, format and output

    Raises:
        OSError: If a custom log output path cannot be opened
    """
    global _configured

    if _configured:
        return

    level = level_number(config.log_level)
    stream = open_output(config.log_output)

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=level,
    )

    renderer: Any
    if config.log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_info,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured, _log_file
    _configured = False
    structlog.reset_defaults()
    if _log_file is not None:
        _log_file.close()
        _log_file = None
