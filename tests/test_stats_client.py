import asyncio
import gzip
import json

import httpx
import pytest

from linescore_relay.config.settings import AppSettings
from linescore_relay.errors import (
    DecompressionError,
    SchemaError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from linescore_relay.upstream.stats_client import BROWSER_HEADERS, StatsClient


def make_client(handler) -> StatsClient:
    settings = AppSettings(stats_base_url="https://stats.example.test/stats", game_id="0021700807")
    transport = httpx.MockTransport(handler)
    return StatsClient(settings=settings, client=httpx.AsyncClient(transport=transport))


def gzip_response(payload) -> httpx.Response:
    body = gzip.compress(json.dumps(payload).encode("utf-8"))
    return httpx.Response(
        200,
        headers={"Content-Encoding": "gzip", "Content-Type": "application/json"},
        stream=httpx.ByteStream(body),
    )


@pytest.mark.asyncio
async def test_fetch_sends_browser_headers_and_game_id(box_score_document):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=box_score_document)

    client = make_client(handler)
    table = await client.fetch_raw_table()
    await client.close()

    request = seen["request"]
    assert request.url.path == "/stats/boxscoresummaryv2"
    assert request.url.params["GameID"] == "0021700807"
    assert request.headers["x-nba-stats-token"] == "true"
    assert request.headers["x-nba-stats-origin"] == "stats"
    assert request.headers["Referer"] == BROWSER_HEADERS["Referer"]
    assert request.headers["User-Agent"].startswith("Mozilla/5.0")
    assert request.headers["Cache-Control"] == "no-cache"
    assert request.headers["Host"] == "stats.example.test"
    assert set(table.names()) == {"GameSummary", "LineScore"}
    assert len(table.rows("LineScore")) == 2


@pytest.mark.asyncio
async def test_gzip_body_is_decompressed(box_score_document):
    client = make_client(lambda request: gzip_response(box_score_document))
    table = await client.fetch_raw_table()
    await client.close()

    first = table.rows("LineScore")[0]
    assert first[4].as_text().value == "LAL"
    assert table.headers("LineScore")[22] == "PTS"


@pytest.mark.asyncio
async def test_corrupt_gzip_body_raises_decompression_error():
    def handler(request):
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            stream=httpx.ByteStream(b"definitely not gzip"),
        )

    client = make_client(handler)
    with pytest.raises(DecompressionError):
        await client.fetch_raw_table()
    await client.close()


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(UpstreamTransportError):
        await client.fetch_raw_table()
    await client.close()


@pytest.mark.asyncio
async def test_slow_upstream_raises_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("upstream too slow", request=request)

    client = make_client(handler)
    with pytest.raises(UpstreamTimeoutError) as excinfo:
        await client.fetch_raw_table()
    await client.close()
    assert excinfo.value.status_code == 504


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 500, 503])
async def test_error_status_raises_status_error(status):
    client = make_client(lambda request: httpx.Response(status, json={"message": "nope"}))
    with pytest.raises(UpstreamStatusError) as excinfo:
        await client.fetch_raw_table()
    await client.close()
    assert excinfo.value.upstream_status == status


@pytest.mark.asyncio
async def test_non_json_body_raises_schema_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>blocked</html>"))
    with pytest.raises(SchemaError, match="not valid JSON"):
        await client.fetch_raw_table()
    await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"resource": "boxscore"},
        {"resultSets": [{"headers": [], "rowSet": []}]},
        {"resultSets": [{"name": "LineScore", "rowSet": ["not a row"]}]},
    ],
)
async def test_unexpected_shape_raises_schema_error(payload):
    client = make_client(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(SchemaError, match="box score summary"):
        await client.fetch_raw_table()
    await client.close()


@pytest.mark.asyncio
async def test_deeply_nested_body_raises_schema_error():
    body = b"[" * 200000 + b"]" * 200000
    client = make_client(lambda request: httpx.Response(200, content=body))
    with pytest.raises(SchemaError, match="not valid JSON"):
        await client.fetch_raw_table()
    await client.close()


@pytest.mark.asyncio
async def test_null_row_set_is_treated_as_empty(box_score_document):
    box_score_document["resultSets"].append(
        {"name": "AvailableVideo", "headers": None, "rowSet": None}
    )
    client = make_client(lambda request: httpx.Response(200, json=box_score_document))
    table = await client.fetch_raw_table()
    await client.close()

    assert table.rows("AvailableVideo") == ()
    assert table.headers("AvailableVideo") == ()
    assert len(table.rows("LineScore")) == 2


@pytest.mark.asyncio
async def test_configured_timeout_reaches_http_client():
    settings = AppSettings(upstream_timeout_seconds=2.5)
    client = StatsClient(settings=settings)
    assert client.client.timeout == httpx.Timeout(2.5)
    assert client.deadline == 2.5
    await client.close()


@pytest.mark.asyncio
async def test_configured_timeout_applies_to_injected_client():
    settings = AppSettings(upstream_timeout_seconds=2.5)
    injected = httpx.AsyncClient(timeout=httpx.Timeout(60.0))
    client = StatsClient(settings=settings, client=injected)
    assert client.client is injected
    assert injected.timeout == httpx.Timeout(2.5)
    await client.close()


@pytest.mark.asyncio
async def test_whole_request_deadline_bounds_slow_upstream(box_score_document):
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=box_score_document)

    settings = AppSettings(upstream_timeout_seconds=0.05)
    client = StatsClient(
        settings=settings,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(UpstreamTimeoutError):
        await client.fetch_raw_table()
    await client.close()
