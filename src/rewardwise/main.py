from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from rewardwise.api.middleware.error_handler import (
    handle_engine_error,
    handle_generic_error,
    handle_validation_error,
)
from rewardwise.api.middleware.logging import RequestLoggingMiddleware
from rewardwise.api.v1 import router as v1_router
from rewardwise.api.v1.health import router as health_router
from rewardwise.config import settings
from rewardwise.core.exceptions import RecommendationEngineError
from rewardwise.core.logger import setup_logging
from rewardwise.rewards.catalog import CardIndexHolder, load_catalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the catalog is loaded once and shared read-only.
    if getattr(app.state, "card_index_holder", None) is None:
        app.state.card_index_holder = CardIndexHolder(load_catalog(settings.card_catalog_path))
    yield
    # Shutdown


def create_app(index_holder: CardIndexHolder | None = None) -> FastAPI:
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="Rewardwise API",
        description="Card reward recommendations and debt insights",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.card_index_holder = index_holder

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(RecommendationEngineError, handle_engine_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("rewardwise.main:app", host=settings.host, port=settings.port)
