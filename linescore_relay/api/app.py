"""FastAPI application factory.

The application owns one upstream client for its whole lifetime; it is
created on startup and closed on shutdown. The line-score column table is
validated before the client is created, so a bad table stops the service
from starting instead of misreading columns later.
"""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from linescore_relay.config.settings import AppSettings, settings as default_settings
from linescore_relay.errors import RelayError
from linescore_relay.extraction.columns import validate_columns
from linescore_relay.extraction.extractor import LineScoreExtractor
from linescore_relay.models.line_score import ErrorDetail, ErrorResponse
from linescore_relay.upstream.base_client import UpstreamClient
from linescore_relay.upstream.stats_client import StatsClient

from .routes import router


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Turns a request-fatal failure into a non-2xx JSON error body."""
    logger.error(
        f"{request.method} {request.url.path} failed with {exc.code} "
        f"({exc.status_code}): {exc}"
    )
    body = ErrorResponse(error=ErrorDetail(code=exc.code, message=str(exc)))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keeps the JSON error contract for failures nothing else handled."""
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly: {exc!r}")
    body = ErrorResponse(
        error=ErrorDetail(code="internal_error", message="Internal relay error")
    )
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app(
    settings: Optional[AppSettings] = None,
    upstream_factory: Optional[Callable[[AppSettings], UpstreamClient]] = None,
) -> FastAPI:
    """Builds the relay application.

    Args:
        settings: Settings to use; the module-level settings by default.
        upstream_factory: Builds the upstream client from settings;
            ``StatsClient`` by default.
    """
    settings = settings or default_settings
    upstream_factory = upstream_factory or (lambda s: StatsClient(settings=s))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        validate_columns()
        app.state.extractor = LineScoreExtractor()
        app.state.upstream_client = upstream_factory(settings)
        logger.info(f"Relay ready for game {settings.game_id}")
        try:
            yield
        finally:
            await app.state.upstream_client.close()

    app = FastAPI(title="Line Score Relay", version="0.1.0", lifespan=lifespan)
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    app.include_router(router)
    return app


app = create_app()
