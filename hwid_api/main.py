"""
Main FastAPI application entry point.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from hwid_api.core.config import settings
from hwid_api.core.errors import CredentialError
from hwid_api.core.logging_config import setup_logging
from hwid_api.api.router import api_router
from hwid_api.middleware.request_logging import RequestLoggingMiddleware
from hwid_api.services.credential_generator import new_hwid
from hwid_api.services.credential_store import CredentialStore
from hwid_api.utils.rendering import render_html, wants_html

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "createKey": "POST /api/keys",
    "getKey": "GET /api/keys/:key",
    "updateKey": "PATCH /api/keys/:key",
    "deleteKey": "DELETE /api/keys/:key",
    "validate": "POST /api/keys/validate",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting up {settings.APP_NAME} on port {settings.PORT}...")
    logger.info(f"Example HWID: {new_hwid()}")
    yield
    logger.info(
        f"Shutting down {settings.APP_NAME}; "
        f"discarding {len(app.state.store)} in-memory credentials"
    )


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or str(uuid.uuid4())


async def credential_error_handler(request: Request, exc: CredentialError):
    """Map domain credential errors to their HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "reason": exc.reason,
            "trace_id": _trace_id(request),
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors with trace_id."""
    trace_id = _trace_id(request)

    logger.error(
        f"[{trace_id}] Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) if settings.DEBUG else "Internal Server Error",
            "reason": type(exc).__name__,
            "trace_id": trace_id,
        },
    )


def create_app(store: Optional[CredentialStore] = None) -> FastAPI:
    """
    Build the application around a credential store.

    Args:
        store: Store to serve from. A fresh one is created when omitted.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Issue API keys bound to hardware identifiers and validate key/HWID pairs",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.store = store if store is not None else CredentialStore(
        allow_key_patch=settings.ALLOW_KEY_PATCH
    )

    # Request logging middleware (must be added before other middleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID"],
    )

    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    def root(request: Request):
        """Root endpoint: service info and endpoint list."""
        info = {
            "message": settings.APP_NAME,
            "endpoints": ENDPOINTS,
            "note": "All endpoints except / and POST /api/keys require X-API-Key and X-HWID headers",
        }
        if wants_html(request):
            return render_html(settings.APP_NAME, info)
        return info

    @app.get("/health")
    def health_check():
        """Liveness probe; does not touch the store."""
        return {"status": "ok"}

    return app


app = create_app()
