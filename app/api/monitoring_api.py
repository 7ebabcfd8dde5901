"""
Monitoring API

FastAPI router for monitoring endpoints:
- GET /status: Returns service metadata and the mapping store currently in use
"""
from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request

from .. import __version__
from ..core.config import get_settings
from ..models.api_models import StatusResponse

router = APIRouter()
logger = logging.getLogger(__name__)

_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def status_endpoint(request: Request) -> StatusResponse:
    """Return service status and the active fallback tier."""
    settings = get_settings()
    coordinator = request.app.state.services.coordinator

    response = StatusResponse(
        service=settings.APP_NAME,
        version=__version__,
        environment=settings.ENV,
        uptime_seconds=time.time() - _start_time,
        backend_state=coordinator.state.value,
        active_backend=coordinator.active_store.name,
    )

    logger.info("status_requested", extra={"backend_state": response.backend_state})
    return response
