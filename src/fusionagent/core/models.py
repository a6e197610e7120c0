"""Data model for the fusion pipeline.

Channel descriptors and fetch outcomes are frozen once built. ChannelResult is
produced per channel per request; its rank is only filled in for successful
results during ranking. AnswerPayload is the sole externally visible output.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

UrlBuilder = Callable[[str], str]


@dataclass(frozen=True)
class ChannelDescriptor:
    """One external source endpoint for a domain.

    Attributes:
        id: Channel identifier, unique within a domain's list.
        build_url: Pure function mapping the query to the channel URL.
    """

    id: str
    build_url: UrlBuilder


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single bounded fetch.

    HTTP error statuses still count as ok; only transport failures and
    timeouts produce ok=False.
    """

    ok: bool
    status: Optional[int] = None
    body: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, status: int, body: str) -> "FetchOutcome":
        return cls(ok=True, status=status, body=body)

    @classmethod
    def failure(cls, error: str) -> "FetchOutcome":
        return cls(ok=False, error=error)


@dataclass
class ChannelResult:
    """Per-channel outcome after fetching, normalizing and scoring."""

    id: str
    url: str
    ok: bool
    status: Optional[int] = None
    error: Optional[str] = None
    snippet: str = ""
    match_score: int = 0
    authority: float = 0.0
    rank: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "url": self.url,
            "ok": self.ok,
            "status": self.status,
            "error": self.error,
            "snippet": self.snippet,
            "matchScore": self.match_score,
            "authority": self.authority,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class Finding:
    """A key finding with its (positional) channel citation."""

    text: str
    cite: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "cite": self.cite}


@dataclass(frozen=True)
class AppendixEntry:
    """Citation appendix row for one ranked channel."""

    id: str
    url: str
    authority: float
    status: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "authority": self.authority,
            "status": self.status,
        }


@dataclass
class AnswerPayload:
    """Fused answer returned for a query."""

    executive_summary: str
    confidence: int
    key_findings: List[Finding] = field(default_factory=list)
    detailed_analysis: str = ""
    appendix: List[AppendixEntry] = field(default_factory=list)
    probe: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire form."""
        return {
            "executive_summary": self.executive_summary,
            "confidence": self.confidence,
            "key_findings": [f.to_dict() for f in self.key_findings],
            "detailed_analysis": self.detailed_analysis,
            "appendix": [a.to_dict() for a in self.appendix],
            "probe": self.probe,
        }
