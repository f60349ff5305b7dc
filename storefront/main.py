import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, images, orders, rates
from .models.constants import UPLOADS_URL_PREFIX
from .services.image_store import ImageStore
from .services.order_store import OrderStore
from .services.pricing import PricingEngine
from .services.rates.cache_service import ExchangeRateService
from .services.rates.providers import make_rate_provider

logger = logging.getLogger("storefront")


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp upload dir, static rate provider). Falls
    back to cached get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings

    # Services, one instance each per application
    pricing = PricingEngine(strict=settings.pricing_strict)
    app.state.order_store = OrderStore(pricing)
    app.state.rate_service = ExchangeRateService(
        make_rate_provider(settings), ttl_seconds=settings.rates_cache_ttl_seconds
    )
    app.state.image_store = ImageStore(
        settings.upload_dir, max_bytes=settings.max_upload_bytes
    )

    # Middleware (request id / structured logging, CORS)
    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Error handlers
    app.add_exception_handler(errors.StoreError, errors.store_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(orders.router, prefix=settings.api_prefix)
    app.include_router(rates.router, prefix=settings.api_prefix)
    app.include_router(images.router, prefix=settings.api_prefix)

    # Uploaded images
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=str(settings.upload_dir)),
        name="uploads",
    )

    logger.info(
        "app ready provider=%s prefix=%s",
        settings.exchange_rate_provider,
        settings.api_prefix,
    )
    return app


app = create_app()
