"""
Cruise Map Generator — Main Application

FastAPI application entry point. Receives Shopify order-paid webhooks for
the printed cruise itinerary map and resolves each order's ports of call.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import structlog

from config import settings
from services.port_resolution_service import get_port_resolution_service
from services.webhook_log_service import get_recent_events_log

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Build the port resolution service (validates Apify config)
    Shutdown: Log only; nothing is persisted
    """
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        apify_configured=settings.apify_configured
    )

    get_port_resolution_service()
    get_recent_events_log()

    yield

    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Cruise Map Generator",
    description="Resolves cruise itinerary ports for printed map orders",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# ===================
# ROUTES
# ===================

@app.get("/", response_class=PlainTextResponse)
async def root():
    """Service banner."""
    return "Cruise Map Generator is running"


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and whether scraping is configured
    """
    return {
        "status": "healthy" if settings.apify_configured else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "apify_configured": settings.apify_configured
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.webhooks import router as webhooks_router

app.include_router(webhooks_router)  # Paths are absolute (/webhooks, /debug)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
