"""ASGI app for the ShopDash backend.

Run with ``shopdash`` (see ``run``) or ``uvicorn shopdash.main:app``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopdash.core.config import get_settings
from shopdash.core.exceptions import register_exception_handlers
from shopdash.core.health import router as health_router
from shopdash.core.logging import configure_logging, get_logger
from shopdash.core.middleware import RequestIdMiddleware
from shopdash.features.analytics.routes import router as analytics_router
from shopdash.features.customers.routes import router as customers_router
from shopdash.features.inventory.routes import router as inventory_router
from shopdash.features.sales.routes import router as sales_router

# Dashboard dev servers allowed to call the API outside production
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
]

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup and log the effective shop settings."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "app.startup_completed",
        app_env=settings.app_env,
        storage_backend=settings.storage_backend,
        storage_dir=settings.storage_dir,
        shop_timezone=settings.shop_timezone,
        default_window_days=settings.analytics_default_window_days,
    )
    yield
    logger.info("app.shutdown_completed")


def create_app() -> FastAPI:
    """Build the FastAPI app with middleware, error handlers and routers."""
    settings = get_settings()
    interactive_docs = settings.is_development

    app = FastAPI(
        title=settings.app_name,
        description="Shop management backend: inventory, sales, customers and analytics",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if interactive_docs else None,
        redoc_url="/redoc" if interactive_docs else None,
    )

    # Middleware added first ends up outermost
    app.add_middleware(
        CORSMiddleware,
        allow_origins=DEV_ORIGINS if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(inventory_router)
    app.include_router(sales_router)
    app.include_router(customers_router)
    app.include_router(analytics_router)

    return app


app = create_app()


def run() -> None:
    """Serve the app on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "shopdash.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development and settings.debug,
        log_level=settings.log_level.lower(),
    )
