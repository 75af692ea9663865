"""
dealbook.api.app

FastAPI app factory for the dealbook service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared clients (DB engine, identity HTTP client, checkout gateway).
- Convert every service error into a single `{"error": ...}` response.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from dealbook import __version__
from dealbook.api.routers.checkout import router as checkout_router
from dealbook.api.routers.deals import router as deals_router
from dealbook.api.routers.health import router as health_router
from dealbook.api.routers.surveys import router as surveys_router
from dealbook.auth.identity import SupabaseIdentityClient, create_identity_http
from dealbook.db.init_db import init_db
from dealbook.db.session import create_engine, create_sessionmaker
from dealbook.errors import ServiceError
from dealbook.observability.logging import configure_logging, get_logger
from dealbook.observability.middleware import RequestContextMiddleware
from dealbook.payments.checkout import CheckoutGateway
from dealbook.settings import Settings

log = get_logger(__name__)


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    # path/request_id/user_id come from structlog contextvars.
    event = "request_failed" if exc.status_code >= 500 else "request_rejected"
    level = log.error if exc.status_code >= 500 else log.warning
    level(event, error_type=type(exc).__name__, status_code=exc.status_code, reason=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning("request_invalid", errors=len(exc.errors()))
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request."},
    )


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Shared handles are created once and read by dependencies in `dealbook.api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        identity_http = create_identity_http(settings)
        app.state.identity = SupabaseIdentityClient(settings=settings, http=identity_http)
        app.state.checkout = CheckoutGateway(settings=settings)
        if not app.state.checkout.configured:
            log.warning("checkout_not_configured", setting="DEALBOOK_STRIPE_LICENSE_PRICE_ID")
        try:
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically. Prod uses Alembic migrations.
                await init_db(engine)
            yield
        finally:
            await identity_http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="dealbook API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(deals_router)
    app.include_router(surveys_router)
    app.include_router(checkout_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling lives in the routers.
