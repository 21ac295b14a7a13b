"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from printshop.api.middleware.error_handler import (
    APIError,
    api_error_handler,
    error_handler_middleware,
    request_validation_error_handler,
)
from printshop.api.middleware.latency_logging import latency_logging_middleware
from printshop.api.middleware.request_size import request_size_limit_middleware
from printshop.api.routes import health, orders, products
from printshop.core.config import Settings, get_settings
from printshop.services.email_service import EmailService
from printshop.services.file_store import LocalFileStore
from printshop.services.order_repository import OrderRepository
from printshop.services.order_service import OrderService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_order_service(settings: Settings) -> OrderService:
    """Wire the order service and its collaborators from settings.

    Args:
        settings: Application settings.

    Returns:
        OrderService: Service backed by a freshly loaded repository.
    """
    repository = OrderRepository(settings.orders_file, start_id=settings.order_id_start)
    repository.orders_file.parent.mkdir(parents=True, exist_ok=True)
    repository.load()

    return OrderService(
        repository=repository,
        file_store=LocalFileStore(settings.upload_dir),
        email_service=EmailService(settings),
        settings=settings,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the order service once per application run.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    # Startup
    settings: Settings = app.state.settings
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)

    app.state.order_service = build_order_service(settings)
    logger.info(
        "Order service ready (%d orders loaded, email %s)",
        len(app.state.order_service.list_orders()),
        "enabled" if settings.is_email_configured else "disabled",
    )

    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings, defaults to the cached application settings.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Print Shop API",
        description="Order intake backend for a print-on-demand clothing shop",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handler middleware (catches unhandled route errors)
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

    # Add latency logging middleware (tracks request timing)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    # Add request size limit middleware (rejects oversized requests early)
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_size_limit_middleware)

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(orders.router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "printshop.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
