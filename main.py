"""
NAMASTE Mapping Service - FastAPI Application Entrypoint

This is the main entrypoint for the NAMASTE to ICD-11 mapping service. It sets up:
- FastAPI application with CORS middleware
- Structured JSON logging with contextual fields
- MongoDB client initialization with indexes
- The three mapping store tiers behind the fallback coordinator
- API routers for mappings and monitoring
- Request ID middleware for tracing
- Error handlers rendering classified errors as ErrorResponse
- Health check endpoint
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.api.mappings_api import router as mappings_router
from app.api.monitoring_api import router as monitoring_router
from app.core.config import get_settings
from app.core.errors import MappingServiceError
from app.core.logging import bind_context, configure_logging
from app.core.mongo import Mongo
from app.models.api_models import ErrorResponse, HealthResponse
from app.services.factory import build_services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup and shutdown."""
    settings = get_settings()

    # Startup
    configure_logging(settings.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    with bind_context(logger, service=settings.APP_NAME, env=settings.ENV) as log:
        log.info("service_startup")

    # Initialize MongoDB; an unreachable cluster leaves the lower tiers serving
    if settings.MONGO_URI and settings.PRIMARY_BACKEND == "mongo":
        try:
            await Mongo.init(settings)
        except Exception as e:
            logger.error("mongo_init_failed", extra={"error": str(e)})

    services = build_services(settings)
    app.state.settings = settings
    app.state.services = services

    if settings.SEED_ON_STARTUP:
        try:
            await services.mappings.seed_if_empty()
        except MappingServiceError as e:
            logger.error("seed_failed", extra={"error": e.message, "kind": e.kind})

    logger.info("startup_complete", extra={"backend_state": services.coordinator.state.value})

    yield

    # Shutdown
    logger.info("service_shutdown")
    await services.close()
    Mongo.close()


# Create FastAPI app
app = FastAPI(
    title="NAMASTE Mapping Service",
    description="Search and manage NAMASTE to ICD-11 terminology mappings with MongoDB, local file and embedded fallback stores",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Middleware to add request ID and timing to all requests."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger = logging.getLogger(__name__)
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        duration_ms = (time.perf_counter() - start_time) * 1000
        with bind_context(logger, request_id=request_id, path=request.url.path, method=request.method, duration_ms=round(duration_ms, 2)) as log:
            log.exception("unhandled_exception", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error", "request_id": request_id})

    duration_ms = (time.perf_counter() - start_time) * 1000
    if get_settings().ENABLE_ACCESS_LOG:
        with bind_context(logger, request_id=request_id, path=request.url.path, method=request.method, status_code=response.status_code, duration_ms=round(duration_ms, 2)) as log:
            log.info("request_complete")

    # Add request ID to response headers
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(MappingServiceError)
async def mapping_error_handler(request: Request, exc: MappingServiceError) -> JSONResponse:
    """Render classified errors with their stable kind."""
    body = ErrorResponse(
        error=exc.kind,
        message=exc.message,
        details=exc.details or None,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(mode="json"))


# Include API routers
app.include_router(mappings_router, prefix="/api/v1", tags=["mappings"])
app.include_router(monitoring_router, prefix="/api/v1", tags=["monitoring"])


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {"message": "Welcome to NAMASTE Mapping Service", "docs": "/docs"}


@app.get("/health", tags=["health"], response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_dev,
        log_level=settings.LOG_LEVEL.lower(),
    )
