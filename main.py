import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.exceptions import (
    CodeGenerationError,
    InvalidTargetURLError,
    NotFoundError,
    PersistenceError,
)
from shortlink_app.logging_config import setup_logging
from shortlink_app.schemas.url import HealthResponse
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.factory import UrlStoreFactory
from shortlink_app.storage.strategies import UrlStore
from shortlink_app.api.v1 import urls, redirect

logger = logging.getLogger("shortlink_app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the store when the server shuts down."""
    logger.info("Starting %s (store backend: %s)", app.title, app.state.settings.store_backend)
    yield
    logger.info("Shutting down, closing URL store")
    await app.state.store.close()


def create_app(settings: Optional[Settings] = None, store: Optional[UrlStore] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: Settings to use (module-level settings if None)
        store: Pre-built store; built from settings.store_backend if None
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, json_format=settings.log_json)

    if store is None:
        store = UrlStoreFactory.create(settings=settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan
    )

    # Explicit wiring: routes get these through shortlink_app.dependencies
    app.state.settings = settings
    app.state.store = store
    app.state.url_service = URLService(
        store=store,
        generator=ShortCodeFactory.create_strategy(settings=settings),
        max_retries=settings.max_retries
    )

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        """Static greeting"""
        return "Hello World!"

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            environment=settings.environment,
            store_backend=settings.store_backend
        )

    ######## Include routers
    app.include_router(urls.router)
    app.include_router(redirect.router)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors to HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(InvalidTargetURLError)
    async def invalid_target_handler(request: Request, exc: InvalidTargetURLError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(CodeGenerationError)
    async def code_generation_handler(request: Request, exc: CodeGenerationError):
        logger.error("Giving up on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)}
        )

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError):
        logger.error("Storage failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "URL store unavailable"}
        )


# Create FastAPI app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
