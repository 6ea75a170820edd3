from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from linescore_relay.config.settings import AppSettings, settings as default_settings
from linescore_relay.errors import SchemaError
from linescore_relay.models.raw_table import BoxScoreSummary, RawTable
from .base_client import HttpUpstreamClient

# The stats API refuses requests that do not look like they come from its own site
BROWSER_HEADERS = {
    "Host": "stats.nba.com",
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:72.0) Gecko/20100101 Firefox/72.0",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate, br",
    "x-nba-stats-origin": "stats",
    "x-nba-stats-token": "true",
    "Connection": "keep-alive",
    "Referer": "https://stats.nba.com/",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


class StatsClient(HttpUpstreamClient):
    """Fetches the box score summary document of one game from the stats API."""

    name: str = "stats API"

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or default_settings
        headers = BROWSER_HEADERS.copy()
        host = httpx.URL(self.settings.box_score_summary_url).host
        if host:
            headers["Host"] = host
        super().__init__(
            client=client,
            timeout=self.settings.upstream_timeout_seconds,
            headers=headers,
        )
        logger.info(
            f"StatsClient initialized for game {self.settings.game_id} "
            f"(timeout {self.settings.upstream_timeout_seconds}s)."
        )

    async def fetch_raw_table(self) -> RawTable:
        url = self.settings.box_score_summary_url
        logger.info(f"Fetching box score summary for game {self.settings.game_id}")
        response = await self._make_request(
            "GET", url, params={"GameID": self.settings.game_id}
        )

        try:
            payload: Any = response.json()
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the JSON decoder can follow
            logger.error(f"{self.name} body is not valid JSON: {e}")
            logger.debug(f"Raw response content: {response.text[:500]!r}")
            raise SchemaError(f"{self.name} body is not valid JSON") from e

        try:
            summary = BoxScoreSummary.model_validate(payload)
        except ValidationError as e:
            logger.error(
                f"{self.name} body does not look like a box score summary: "
                f"{e.error_count()} validation error(s)"
            )
            logger.debug(f"Validation details: {e}")
            raise SchemaError(
                f"{self.name} body does not look like a box score summary"
            ) from e

        table = summary.to_raw_table()
        logger.debug(f"Received result-sets: {table.names()}")
        return table
