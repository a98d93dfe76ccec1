"""
Checkout Page API - Main Application.

FastAPI application with CORS enabled for storefront communication.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.dependencies import get_settings
from api.errors import error_body, register_exception_handlers
from api.models import HealthResponse
from config import configure_logging

configure_logging(get_settings().log_level)
logger = logging.getLogger("api.access")

REQUEST_ID_HEADER = "X-Request-ID"

# Create FastAPI application
app = FastAPI(
    title="Checkout Page API",
    description="REST API that assembles e-commerce checkout pages and records checkout visits",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# The storefront is served from seller-owned domains
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

register_exception_handlers(app)


@app.middleware("http")
async def request_id_and_access_log(request: Request, call_next):
    """Echo or generate X-Request-ID and log one line per request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        # Unhandled errors still get a request id and an access-log line.
        status_code, body = error_body(exc)
        response = JSONResponse(status_code=status_code, content=body)

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return response


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "checkout-page-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Checkout Page API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import checkout

app.include_router(checkout.router, prefix="/api/v1", tags=["Checkout"])
