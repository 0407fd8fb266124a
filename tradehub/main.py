"""
FastAPI application factory for the TradeHub storefront and admin API.
"""
import logging
from datetime import datetime, timedelta, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.settings import Settings, get_settings
from .config.stores import lifespan
from .routes import admin, orders, payment
from .schemas.common import ErrorResponse, HealthCheckResponse, RootResponse
from .services.auth import AdminAuthService
from .utils.errors import AppError, format_error_response

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves the API in the {status: "error", ...} envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=format_error_response(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors()
        ]
        logger.warning(f"Request validation failed on {request.url.path}: {len(errors)} error(s)")
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "message": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "details": {"errors": errors},
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": str(exc.detail), "code": f"HTTP_{exc.status_code}"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Internal server error", "code": "INTERNAL_ERROR"},
        )


def create_app(settings: Settings = None) -> FastAPI:
    """Build the application; tests pass their own Settings."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_service = AdminAuthService(
        secret=settings.jwt_secret,
        expiry=timedelta(hours=settings.jwt_expiry_hours),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/", response_model=RootResponse, tags=["Root"])
    async def root():
        """Root endpoint - Always accessible"""
        return RootResponse(
            message=f"Welcome to {settings.app_name}",
            version=settings.app_version,
            docs="/docs",
            health="/health",
            status="running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint - Always accessible"""
        store_manager = getattr(request.app.state, "store_manager", None)
        payment_config = getattr(request.app.state, "payment_config", None)
        return HealthCheckResponse(
            status="healthy",
            stores="ready" if store_manager and store_manager.is_connected() else "unavailable",
            payment_mode=payment_config.mode if payment_config else settings.payment_mode,
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app_version,
        )

    @app.get("/api/ping", tags=["Health"])
    async def ping():
        return {"message": settings.ping_message}

    error_responses = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)}
    for router in (payment.router, orders.router, admin.router):
        app.include_router(router, responses=error_responses)

    return app


app = create_app()
