"""
Service Config - Main Application Entry Point

- create_app(config): FastAPI app with lifespan handler and health routes
- run(): load config once, configure logging, serve with uvicorn

Patterns Applied:
- Lifespan context manager
- One-time configure_logging() at startup
- Fail-fast startup: every invalid variable is listed before exiting

Anti-Patterns Avoided:
- Deprecated @app.on_event - using modern lifespan pattern
- Starting with a partial configuration
"""

import math
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src import __version__
from src.api.health import router as health_router
from src.core.config import Config, get_config
from src.core.constants import TCP_PORT_MAX, TCP_PORT_MIN
from src.core.exceptions import ConfigLoadError, ServerAddressError
from src.core.logging import configure_logging, get_logger

logger = get_logger(__name__)

# Host used when the address has an empty host part, e.g. ":8080"
ALL_INTERFACES = "0.0.0.0"


def split_address(address: str) -> tuple[str, int]:
    """Split a "<host>:port" address into host and port.

    An empty host means all interfaces. Bracketed IPv6 hosts ("[::1]:80")
    are unwrapped.

    Raises:
        ServerAddressError: If there is no port, or the port is not an
            integer within the TCP port range
    """
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ServerAddressError(f"missing port in server address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not (port_text.isascii() and port_text.isdigit()):
        raise ServerAddressError(f"invalid port in server address {address!r}")
    port = int(port_text)
    if not TCP_PORT_MIN <= port <= TCP_PORT_MAX:
        raise ServerAddressError(
            f"port {port} out of range [{TCP_PORT_MIN}, {TCP_PORT_MAX}] "
            f"in server address {address!r}"
        )
    return host or ALL_INTERFACES, port


def create_app(config: Config) -> FastAPI:
    """Build the FastAPI application around a loaded Config."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # STARTUP
        logger.info("startup", version=__version__, **config.log_fields())

        yield

        # SHUTDOWN
        logger.info("shutdown")

    app = FastAPI(
        title="Service-Config",
        description="HTTP service shell driven by environment configuration",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.include_router(health_router)
    return app


def _whole_seconds(seconds: float, minimum: int = 0) -> int:
    return max(minimum, math.ceil(seconds))


def run() -> None:
    """Console entry point: load config, configure logging, serve."""
    try:
        config = get_config()
    except ConfigLoadError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    configure_logging(config)

    try:
        host, port = split_address(config.server_address)
    except ServerAddressError as exc:
        logger.error("invalid_server_address", error=str(exc))
        sys.exit(1)

    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        timeout_keep_alive=_whole_seconds(config.server_idle_timeout.total_seconds(), minimum=1),
        timeout_graceful_shutdown=_whole_seconds(config.server_shutdown_timeout.total_seconds()),
        log_config=None,
    )


if __name__ == "__main__":
    run()
