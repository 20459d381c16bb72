"""
Sustainability Scanner - Main FastAPI Application
Stores uploaded images in S3 and analyzes them with a classification
service and a Gemini vision model.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.cors import CORS_HEADERS, PermissiveCORSMiddleware
from app.core.dependencies import create_http_client, create_s3_client, create_vision_client
from app.core.errors import ScannerError
from app.api import analyze, health, upload
from shared_schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the shared client handles on startup and releases them on shutdown.
    Missing credentials raise here and stop the process before serving.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    app.state.s3_client = create_s3_client(settings)
    app.state.vision_client = create_vision_client(settings)
    app.state.http_client = create_http_client(settings)

    if not settings.S3_BUCKET_NAME:
        logger.warning("S3_BUCKET_NAME not set, /upload will fail")

    mode = "pipeline" if settings.ANALYZE_PIPELINE_ENABLED else "metadata only"
    logger.info(f"Analyze route: {'enabled' if settings.ANALYZE_ROUTE_ENABLED else 'disabled'} ({mode})")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await app.state.http_client.aclose()
    app.state.s3_client.close()
    logger.info("Clients closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use, loaded from the environment if omitted
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="Image upload to S3 and sustainability analysis with Gemini",
        version=settings.APP_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # CORS Middleware (answers OPTIONS on every path)
    app.add_middleware(PermissiveCORSMiddleware)

    # Include API routers
    app.include_router(health.router)
    app.include_router(upload.router)
    if settings.ANALYZE_ROUTE_ENABLED:
        app.include_router(analyze.router)

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with service information."""
        endpoints = {
            "POST /upload": "Store image in S3 (multipart field 'image')",
            "GET /health": "Service health check",
        }
        if settings.ANALYZE_ROUTE_ENABLED:
            endpoints["POST /analyze"] = "Sustainability analysis (multipart field 'image')"

        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "endpoints": endpoints,
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc",
                "openapi": "/openapi.json"
            }
        }

    @app.exception_handler(ScannerError)
    async def scanner_exception_handler(request: Request, exc: ScannerError):
        """Convert service errors into JSON error bodies."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.detail, error_code=exc.error_code).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Global exception handler for unhandled errors.
        Runs outside the middleware stack, so CORS headers are set here.
        """
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(),
            headers=CORS_HEADERS
        )

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
