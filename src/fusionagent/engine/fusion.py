"""Fan-out/fetch/rank/fuse pipeline.

For a domain and query the engine:
1. Resolves the domain's channels from the registry
2. Probes every channel concurrently (fetch, normalize, truncate, score)
3. Joins on all probes; a failing probe only affects its own result
4. Ranks successful results by match_score * authority
5. Fuses the top results into an AnswerPayload (summary, findings,
   confidence, citation appendix)

The synthesis steps are plain functions over ChannelResult lists so they can
be exercised without any network access.
"""

import asyncio
import logging
import math
from dataclasses import replace
from typing import Callable, List, Optional, Protocol, Sequence

import aiohttp

from fusionagent.channels.authority import AuthorityTable
from fusionagent.channels.registry import ChannelRegistry, build_default_registry
from fusionagent.core.config_schema import FusionConfig
from fusionagent.core.constants import (
    DEFAULT_DOMAIN,
    FOLLOW_UP_PROBE,
    NO_EVIDENCE_SUMMARY,
    SUMMARY_SEPARATOR,
)
from fusionagent.core.errors import ValidationError
from fusionagent.core.models import (
    AnswerPayload,
    AppendixEntry,
    ChannelDescriptor,
    ChannelResult,
    FetchOutcome,
    Finding,
)
from fusionagent.fetching.fetcher import BoundedFetcher
from fusionagent.utils.text import normalize

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Protocol for bounded fetch implementations."""

    async def fetch(
        self,
        url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_ms: Optional[int] = None,
    ) -> FetchOutcome:
        """Fetch a URL without raising; failures are returned as ok=False."""
        ...


Normalizer = Callable[[Optional[str]], str]


# =============================================================================
# Scoring and Synthesis
# =============================================================================


def score_match(query: str, snippet: str) -> int:
    """Return 1 if the query appears verbatim (case-insensitive) in the snippet."""
    return 1 if query.lower() in snippet.lower() else 0


def rank_results(results: Sequence[ChannelResult]) -> List[ChannelResult]:
    """Rank successful results by match_score * authority, highest first.

    Failed results are dropped. The sort is stable, so equal ranks keep
    channel order.

    Args:
        results: Probe results in channel order

    Returns:
        New ChannelResult objects with rank populated, sorted descending
    """
    ranked = [
        replace(r, rank=r.match_score * r.authority) for r in results if r.ok
    ]
    ranked.sort(key=lambda r: r.rank, reverse=True)
    return ranked


def build_executive_summary(
    top: Sequence[ChannelResult], chars_per_source: int
) -> str:
    """Join the head of each top snippet, or the no-evidence fallback."""
    summary = SUMMARY_SEPARATOR.join(t.snippet[:chars_per_source] for t in top)
    return summary or NO_EVIDENCE_SUMMARY


def extract_key_findings(
    top: Sequence[ChannelResult], segments_per_snippet: int, max_findings: int
) -> List[Finding]:
    """Split top snippets into sentence segments and attach citations.

    Each snippet contributes up to segments_per_snippet non-empty segments
    (split on "."). Empty segments are skipped before the limit is applied, so
    ". Alpha. Beta" gives Alpha and Beta, not just the non-empty segments among
    the first two pieces of the split.

    Citations are positional: entry i cites top[i % len(top)], which
    approximates rather than tracks the snippet a segment came from.

    Args:
        top: Top-ranked results in rank order
        segments_per_snippet: Segments taken from each snippet
        max_findings: Cap on the flattened list

    Returns:
        List of Finding
    """
    segments: List[str] = []
    for result in top:
        parts = [s.strip() for s in result.snippet.split(".")]
        segments.extend([s for s in parts if s][:segments_per_snippet])

    return [
        Finding(text=text, cite=top[i % len(top)].id)
        for i, text in enumerate(segments[:max_findings])
    ]


def build_appendix(ranked: Sequence[ChannelResult]) -> List[AppendixEntry]:
    """Citation rows for every ranked result, in rank order."""
    return [
        AppendixEntry(id=r.id, url=r.url, authority=r.authority, status=r.status)
        for r in ranked
    ]


def compute_confidence(top: Sequence[ChannelResult]) -> int:
    """Mean rank of the top set as an integer percentage in [0, 100].

    Halves round up. An empty top set yields 0.
    """
    total = sum(r.rank or 0.0 for r in top)
    mean = total / (len(top) or 1)
    pct = min(100.0, max(0.0, mean * 100))
    return int(math.floor(pct + 0.5))


def synthesize(
    results: Sequence[ChannelResult], config: Optional[FusionConfig] = None
) -> AnswerPayload:
    """Fuse probe results into an answer.

    Args:
        results: All probe results, successful or not, in channel order
        config: Synthesis tunables (defaults to FusionConfig())

    Returns:
        AnswerPayload
    """
    config = config or FusionConfig()

    ranked = rank_results(results)
    top = ranked[: config.top_n]

    return AnswerPayload(
        executive_summary=build_executive_summary(top, config.summary_chars),
        confidence=compute_confidence(top),
        key_findings=extract_key_findings(
            top, config.segments_per_snippet, config.max_findings
        ),
        detailed_analysis=(
            f"Searched {len(ranked)} channels, "
            f"top sources: {', '.join(t.id for t in top)}"
        ),
        appendix=build_appendix(ranked),
        probe=FOLLOW_UP_PROBE,
    )


# =============================================================================
# Engine
# =============================================================================


class FusionEngine:
    """Probes a domain's channels in parallel and fuses the results.

    The registry and authority table are shared read-only; each request gets
    its own aiohttp session and its own ChannelResult objects.
    """

    def __init__(
        self,
        registry: Optional[ChannelRegistry] = None,
        authority: Optional[AuthorityTable] = None,
        fetcher: Optional[Fetcher] = None,
        normalizer: Optional[Normalizer] = None,
        config: Optional[FusionConfig] = None,
    ):
        """Initialize fusion engine.

        Args:
            registry: Domain -> channels mapping (defaults to built-in channels)
            authority: Channel trust weights (defaults to built-in weights plus
                config.authority_overrides)
            fetcher: Bounded fetcher (defaults to BoundedFetcher)
            normalizer: HTML -> text function (defaults to utils.text.normalize)
            config: Pipeline tunables (defaults to FusionConfig())
        """
        self.config = config or FusionConfig()
        self.registry = registry or build_default_registry()
        self.authority = authority or AuthorityTable.with_overrides(
            self.config.authority_overrides
        )
        self.fetcher: Fetcher = fetcher or BoundedFetcher(
            default_timeout_ms=self.config.fetch_timeout_ms
        )
        self.normalizer: Normalizer = normalizer or normalize
        logger.debug(
            f"Authority weights: {self.authority.as_dict()} "
            f"(default {self.authority.default})"
        )

    async def answer(
        self, domain: Optional[str], query: Optional[str]
    ) -> AnswerPayload:
        """Answer a query from the channels of a domain.

        Args:
            domain: Domain name; None or unknown resolves to the default domain
            query: Natural-language query

        Returns:
            AnswerPayload (degraded, never an error, when channels fail)

        Raises:
            ValidationError: If query is missing or blank
        """
        if not query or not query.strip():
            raise ValidationError()

        channels = self.registry.channels_for(domain or DEFAULT_DOMAIN)
        logger.info(
            f"Probing {len(channels)} channels for domain '{domain}': "
            f"{', '.join(ch.id for ch in channels)}"
        )

        results = await self.probe_channels(channels, query)
        payload = synthesize(results, self.config)

        ok_count = sum(1 for r in results if r.ok)
        logger.info(
            f"Fused {ok_count}/{len(results)} successful channels "
            f"(confidence {payload.confidence})"
        )
        return payload

    async def probe_channels(
        self, channels: Sequence[ChannelDescriptor], query: str
    ) -> List[ChannelResult]:
        """Probe every channel concurrently and wait for all of them.

        Args:
            channels: Channels to probe
            query: Query used to build each URL and to score snippets

        Returns:
            One ChannelResult per channel, in channel order
        """
        if not channels:
            return []

        async with aiohttp.ClientSession() as session:
            tasks = [self._probe_isolated(ch, query, session) for ch in channels]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[ChannelResult] = []
        for channel, outcome in zip(channels, outcomes):
            if isinstance(outcome, BaseException):
                # Only non-Exception BaseExceptions (e.g. cancellation) get here
                logger.warning(f"Probe for {channel.id} aborted: {outcome!r}")
                outcome = self._failed_result(channel, "", repr(outcome))
            results.append(outcome)
        return results

    async def _probe_isolated(
        self,
        channel: ChannelDescriptor,
        query: str,
        session: aiohttp.ClientSession,
    ) -> ChannelResult:
        url = ""
        try:
            url = channel.build_url(query)
            return await self._probe(channel, url, query, session)
        except Exception as e:
            logger.warning(f"Probe for {channel.id} failed: {e}")
            return self._failed_result(channel, url, str(e) or type(e).__name__)

    async def _probe(
        self,
        channel: ChannelDescriptor,
        url: str,
        query: str,
        session: aiohttp.ClientSession,
    ) -> ChannelResult:
        outcome = await self.fetcher.fetch(url, session, self.config.fetch_timeout_ms)
        if not outcome.ok:
            return self._failed_result(
                channel, url, outcome.error or "fetch failed", outcome.status
            )

        snippet = self.normalizer(outcome.body)[: self.config.snippet_max_chars]
        return ChannelResult(
            id=channel.id,
            url=url,
            ok=True,
            status=outcome.status,
            snippet=snippet,
            match_score=score_match(query, snippet),
            authority=self.authority.authority_of(channel.id),
        )

    def _failed_result(
        self,
        channel: ChannelDescriptor,
        url: str,
        error: str,
        status: Optional[int] = None,
    ) -> ChannelResult:
        return ChannelResult(
            id=channel.id,
            url=url,
            ok=False,
            status=status,
            error=error,
            authority=self.authority.authority_of(channel.id),
        )


def answer_query(
    domain: Optional[str], query: str, engine: Optional[FusionEngine] = None
) -> AnswerPayload:
    """Synchronous wrapper around FusionEngine.answer().

    Args:
        domain: Domain name
        query: Natural-language query
        engine: Engine to use (defaults to a new FusionEngine())

    Returns:
        AnswerPayload
    """
    engine = engine or FusionEngine()
    return asyncio.run(engine.answer(domain, query))
