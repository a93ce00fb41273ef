"""
Service Config - Health and Config API Routes

- GET /health: liveness check
- GET /config: the effective configuration the service started with

Both read only immutable state: the package version and the Config
snapshot stored on app.state by create_app().
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src import __version__
from src.core.config import Config
from src.core.constants import SERVICE_NAME
from src.core.logging import get_logger

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Liveness response."""
    status: str
    version: str
    service: str


class ConfigResponse(BaseModel):
    """Effective configuration; timeouts are in seconds."""
    log_level: str
    log_format: str
    log_output: str
    server_address: str
    server_read_timeout: float
    server_read_header_timeout: float
    server_write_timeout: float
    server_idle_timeout: float
    server_shutdown_timeout: float


def app_config(request: Request) -> Config:
    """The Config snapshot the running app was built with."""
    return request.app.state.config


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """Report that the process is up and serving."""
    logger.debug("health_check")
    return HealthResponse(status="healthy", version=__version__, service=SERVICE_NAME)


@router.get("/config", response_model=ConfigResponse, summary="Effective configuration")
async def effective_config(request: Request) -> ConfigResponse:
    """Report the loaded configuration, defaults included."""
    return ConfigResponse(**app_config(request).log_fields())
