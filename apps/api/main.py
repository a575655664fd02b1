"""
Fosten Shop - Main FastAPI Application.

REST API for order placement, payment reconciliation, delivery tracking
and customer notifications.
"""
import logging
import time
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.domain.exceptions import DomainError
from core.infrastructure.database.config import close_database, init_database
from core.settings import get_app_settings

from apps.api.deps import build_container
from apps.api.responses import error_response
from apps.api.v1.endpoints import delivery, health, notifications, orders


settings = get_app_settings()

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.application.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _field_path(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def create_app() -> FastAPI:
    """Build the FastAPI application.

    Services are attached to ``app.state.container`` at startup unless a
    container was already installed (tests install their own).
    """
    app = FastAPI(
        title="Fosten Shop API",
        description="Orders, payments, deliveries and notifications.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.application.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    # =========================================================================
    # REQUEST LOGGING MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()
        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )
        return response

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"param": _field_path(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
            for error in exc.errors()
        ]
        return error_response(400, "Validation failed", errors)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
        return error_response(400, "Duplicate or conflicting record")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        stack = None
        if not settings.application.is_production:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return error_response(500, "Internal server error", stack=stack)

    # =========================================================================
    # STARTUP/SHUTDOWN EVENTS
    # =========================================================================

    @app.on_event("startup")
    async def startup_event():
        """Run on application startup."""
        logger.info("🚀 Fosten Shop API starting up...")
        if getattr(app.state, "container", None) is None:
            app.state.container = build_container(settings)
        await init_database(app.state.container.engine)
        logger.info("📚 Swagger UI available at: /docs")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run on application shutdown."""
        container = getattr(app.state, "container", None)
        if container is not None:
            await container.shutdown()
            await close_database(container.engine)
        logger.info("👋 Fosten Shop API shutting down...")

    # =========================================================================
    # INCLUDE ROUTERS
    # =========================================================================

    app.include_router(health.router)
    app.include_router(orders.router, prefix="/api/v1")
    app.include_router(delivery.router, prefix="/api/v1")
    app.include_router(notifications.router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
