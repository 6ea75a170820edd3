import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from linescore_relay.errors import (
    DecompressionError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from linescore_relay.models.raw_table import RawTable


class UpstreamClient(ABC):
    """Source of raw tables. The extractor only ever sees this interface."""

    name: str = "upstream"

    @abstractmethod
    async def fetch_raw_table(self) -> RawTable:
        """Fetch the upstream document and return it as a RawTable.

        Raises:
            UpstreamError: on transport, timeout, status or decompression failure.
            SchemaError: if the body is not a well-formed result-set document.
        """
        pass

    async def close(self) -> None:
        """Releases any held resources."""
        pass


class HttpUpstreamClient(UpstreamClient):
    """Base for upstream clients backed by an httpx.AsyncClient."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.client = client or httpx.AsyncClient(follow_redirects=True)
        # Per-phase limit (connect, read, write, pool); applied to injected clients too
        self.client.timeout = httpx.Timeout(timeout)
        # Whole-request deadline, so a trickling body cannot outlive it
        self.deadline = timeout
        if headers:
            self.client.headers.update(headers)

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes a single HTTP request and maps failures onto UpstreamError types.

        The body is read (and decompressed) before returning.
        """
        logger.debug(
            "Making request",
            method=method,
            url=url,
            params=params,
            headers=dict(self.client.headers),
        )
        try:
            response = await asyncio.wait_for(
                self.client.request(method, url, params=params, **kwargs),
                timeout=self.deadline,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{self.name} exceeded the {self.deadline}s deadline at {url}")
            raise UpstreamTimeoutError(f"{self.name} did not answer in time") from e
        except httpx.TimeoutException as e:
            logger.error(f"Timed out calling {self.name} at {url}: {e!r}")
            raise UpstreamTimeoutError(f"{self.name} did not answer in time") from e
        except httpx.DecodingError as e:
            # Must precede RequestError, of which it is a subclass
            logger.error(f"Could not decompress {self.name} response from {url}: {e}")
            raise DecompressionError(
                f"Could not decompress {self.name} response body"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error calling {self.name} at {url}: {e!r}")
            raise UpstreamTransportError(f"Could not reach {self.name}: {e}") from e

        if response.status_code in {401, 403}:
            logger.warning(
                f"{self.name} rejected the request ({response.status_code}) at {url}. "
                "The browser header set may be out of date."
            )
        if response.is_error:
            logger.error(f"HTTP error from {self.name}: {response.status_code} for {url}")
            raise UpstreamStatusError(
                f"{self.name} answered with status {response.status_code}",
                upstream_status=response.status_code,
            )

        logger.debug(
            f"Request successful: {response.status_code} for {url} "
            f"(content-encoding: {response.headers.get('Content-Encoding', 'identity')})"
        )
        return response

    async def close(self) -> None:
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.name}")
