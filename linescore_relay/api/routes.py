"""HTTP routes of the relay.

``GET /`` fetches the configured game's box score summary upstream, decodes the
line-score result-set and returns it. ``GET /health`` is a liveness probe that
never touches the upstream.
"""

from fastapi import APIRouter, Depends, Request
from loguru import logger

from linescore_relay.extraction.extractor import LineScoreExtractor
from linescore_relay.models.line_score import ErrorResponse, ScoreboardResponse
from linescore_relay.upstream.base_client import UpstreamClient

router = APIRouter()


def get_upstream_client(request: Request) -> UpstreamClient:
    """Upstream client created by the application lifespan (injected)."""
    return request.app.state.upstream_client


def get_extractor(request: Request) -> LineScoreExtractor:
    return request.app.state.extractor


@router.get(
    "/",
    response_model=ScoreboardResponse,
    responses={502: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def scoreboard(
    upstream: UpstreamClient = Depends(get_upstream_client),
    extractor: LineScoreExtractor = Depends(get_extractor),
) -> ScoreboardResponse:
    """Return the date and per-team line scores of the configured game.

    Upstream and parse failures are turned into error responses by the
    handlers registered in ``linescore_relay.api.app``.
    """
    table = await upstream.fetch_raw_table()
    result = extractor.extract(table)
    logger.info(f"Serving {len(result.line_scores)} line score(s)")
    return result


@router.get("/health")
def health():
    """Health check endpoint.

    Returns:
        dict: `{"status": "ok", "service": "linescore-relay"}`.
    """
    return {"status": "ok", "service": "linescore-relay"}
