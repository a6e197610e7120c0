"""
Pytest configuration and shared fixtures.
"""

import asyncio
from typing import Callable, Dict, List, Optional, Tuple, Union

import pytest

from fusionagent.core.models import ChannelResult, FetchOutcome

# ============================================================================
# Fake Fetcher
# ============================================================================

FakeResponse = Union[FetchOutcome, BaseException, Callable[[str], FetchOutcome]]


class FakeFetcher:
    """In-memory stand-in for BoundedFetcher.

    Routes are matched by URL substring, in insertion order. A route may map
    to a FetchOutcome, an exception to raise, or a callable taking the URL.
    """

    def __init__(
        self,
        routes: Optional[Dict[str, FakeResponse]] = None,
        default: Optional[FetchOutcome] = None,
        delay: float = 0.0,
    ):
        self.routes = dict(routes or {})
        self.default = default or FetchOutcome.failure("no route")
        self.delay = delay
        self.calls: List[Tuple[str, Optional[int]]] = []

    async def fetch(self, url, session=None, timeout_ms=None) -> FetchOutcome:
        self.calls.append((url, timeout_ms))
        if self.delay:
            await asyncio.sleep(self.delay)
        for key, response in self.routes.items():
            if key in url:
                if isinstance(response, BaseException):
                    raise response
                if callable(response):
                    return response(url)
                return response
        return self.default


# Host fragments for the general domain's channels
GENERAL_HOSTS = {
    "duckduckgo": "duckduckgo.com",
    "bing": "bing.com",
    "brave": "brave.com",
    "wikipedia": "wikipedia.org",
}


def html_page(text: str) -> str:
    """Wrap text in a minimal HTML document."""
    return (
        "<html><head><title>Result page</title></head>"
        f"<body><main><p>{text}</p></main></body></html>"
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_fetcher_cls():
    """Return the FakeFetcher class for building per-test fetchers."""
    return FakeFetcher


@pytest.fixture
def general_hosts():
    """Channel id -> URL host fragment for the general domain."""
    return dict(GENERAL_HOSTS)


@pytest.fixture
def wikipedia_body():
    """HTML body that mentions 'wikipedia' in two sentences."""
    return html_page(
        "Wikipedia is a free online encyclopedia. "
        "It is written collaboratively by volunteers. "
        "Anyone can edit it."
    )


@pytest.fixture
def all_general_ok(wikipedia_body):
    """FakeFetcher where every general channel returns the wikipedia body."""
    outcome = FetchOutcome.success(200, wikipedia_body)
    return FakeFetcher({host: outcome for host in GENERAL_HOSTS.values()})


@pytest.fixture
def make_result() -> Callable[..., ChannelResult]:
    """Factory for ChannelResult objects used by synthesis tests."""

    def _make(
        id: str,
        snippet: str = "",
        match_score: int = 1,
        authority: float = 0.5,
        ok: bool = True,
        status: Optional[int] = 200,
        error: Optional[str] = None,
    ) -> ChannelResult:
        return ChannelResult(
            id=id,
            url=f"https://{id}.example/search",
            ok=ok,
            status=status if ok else None,
            error=error if not ok else None,
            snippet=snippet if ok else "",
            match_score=match_score if ok else 0,
            authority=authority,
        )

    return _make
