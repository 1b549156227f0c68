import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, mask_secret, request_context_middleware
from .core import errors
from .routers import convert, health, rates, ui
from .services.rates.base import RateProvider
from .services.rates.manager import RateTableManager
from .services.rates.providers import make_rate_provider

logger = logging.getLogger("mmk_converter")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    manager: RateTableManager = app.state.rate_manager
    if settings.refresh_on_startup:
        # Runs in the background; requests are served from the initial table meanwhile
        manager.start()
    yield
    # No cancellation: let an in-flight startup refresh finish
    await manager.wait_started()


def create_app(
    settings_override: Settings | None = None,
    provider_override: RateProvider | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    provider_override: rate provider to use instead of the configured one.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    provider = provider_override or make_rate_provider(settings)
    logger.info(
        "using rate provider %s (base=%s, api key %s)",
        provider.name,
        settings.base_currency,
        mask_secret(settings.exchange_rate_api_key),
    )

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_manager = RateTableManager(provider, settings.base_currency)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(convert.router)
    app.include_router(ui.router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    return app
