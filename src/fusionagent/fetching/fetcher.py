"""Bounded-time retrieval of a single channel URL.

The fetcher never raises to its caller: timeouts and transport errors are
returned as FetchOutcome(ok=False). Any HTTP response, including 4xx/5xx, is
a successful fetch; interpreting the status is left to the caller.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

import aiohttp

from fusionagent.core.constants import DEFAULT_FETCH_TIMEOUT_MS
from fusionagent.core.errors import ChannelFetchError
from fusionagent.core.models import FetchOutcome

logger = logging.getLogger(__name__)

# Browser-like headers to reduce trivial bot blocking
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/118.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


class BoundedFetcher:
    """Performs one GET per call with a hard wall-clock timeout."""

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        default_timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS,
    ):
        """Initialize fetcher.

        Args:
            headers: Request headers (defaults to BROWSER_HEADERS)
            default_timeout_ms: Timeout used when fetch() is given none
        """
        self.headers = dict(BROWSER_HEADERS if headers is None else headers)
        self.default_timeout_ms = default_timeout_ms

    async def fetch(
        self,
        url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_ms: Optional[int] = None,
    ) -> FetchOutcome:
        """Fetch a URL, capturing every transport failure in the outcome.

        Args:
            url: URL to fetch
            session: Shared aiohttp session; a short-lived one is opened if None
            timeout_ms: Abort the request after this many milliseconds

        Returns:
            FetchOutcome with status and body on any HTTP response, or with an
            error string on timeout/transport failure
        """
        if timeout_ms is None:
            timeout_ms = self.default_timeout_ms

        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self.fetch(url, own_session, timeout_ms)

        logger.info(f"Fetching: {url}")
        try:
            status, body = await self._request(url, session, timeout_ms)
        except ChannelFetchError as e:
            logger.warning(f"Fetch failed for {url}: {e.reason}")
            return FetchOutcome.failure(e.reason)

        logger.info(f"Fetched {url} (HTTP {status}, {len(body)} chars)")
        return FetchOutcome.success(status, body)

    async def _request(
        self, url: str, session: aiohttp.ClientSession, timeout_ms: int
    ) -> Tuple[int, str]:
        timeout_obj = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        try:
            async with session.get(
                url, headers=self.headers, timeout=timeout_obj
            ) as response:
                body = await response.text(errors="replace")
                return response.status, body
        except asyncio.TimeoutError as e:
            raise ChannelFetchError(url, f"Timeout after {timeout_ms}ms") from e
        except aiohttp.ClientError as e:
            raise ChannelFetchError(url, f"Network error: {e}") from e
        except Exception as e:
            raise ChannelFetchError(url, str(e) or type(e).__name__) from e
