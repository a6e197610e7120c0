"""Domain to channel mapping.

A domain (general, flights, ...) selects an ordered list of channels. Each
channel carries a pure URL builder for the query. The registry is built once
and shared read-only; unknown domains resolve to the default domain.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple
from urllib.parse import quote

from fusionagent.core.constants import DEFAULT_DOMAIN
from fusionagent.core.models import ChannelDescriptor, UrlBuilder

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves as-is besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!*'()"


def encode_query(text: str) -> str:
    """Percent-encode a query string for use in a URL component."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def search_url(template: str, suffix: str = "") -> UrlBuilder:
    """Build a URL builder that fills {q} with the encoded query.

    Args:
        template: URL containing a single {q} placeholder
        suffix: Text appended to the query before encoding, to bias the search

    Returns:
        Function mapping query -> URL
    """

    def build(query: str) -> str:
        return template.format(q=encode_query(query + suffix))

    return build


def wiki_url(template: str) -> UrlBuilder:
    """Build a URL builder for article-title URLs (whitespace becomes _)."""

    def build(query: str) -> str:
        return template.format(q=encode_query(re.sub(r"\s+", "_", query)))

    return build


class ChannelRegistry:
    """Read-only mapping of domain name to ordered channel descriptors."""

    def __init__(
        self,
        channels: Mapping[str, Iterable[ChannelDescriptor]],
        default_domain: str = DEFAULT_DOMAIN,
    ):
        if default_domain not in channels:
            raise ValueError(f"Default domain '{default_domain}' has no channels")

        self._channels: Mapping[str, Tuple[ChannelDescriptor, ...]] = (
            MappingProxyType({name: tuple(chs) for name, chs in channels.items()})
        )
        self.default_domain = default_domain

    def channels_for(self, domain: str) -> List[ChannelDescriptor]:
        """Get the channels to probe for a domain.

        Args:
            domain: Requested domain name

        Returns:
            Ordered channel list; the default domain's list if unknown
        """
        channels = self._channels.get(domain)
        if channels is None:
            logger.debug(
                f"Unknown domain '{domain}', using '{self.default_domain}' channels"
            )
            channels = self._channels[self.default_domain]
        return list(channels)

    def domains(self) -> List[str]:
        """Get list of known domain names, in registration order."""
        return list(self._channels.keys())

    def __contains__(self, domain: object) -> bool:
        return domain in self._channels


DEFAULT_CHANNELS: Dict[str, Sequence[ChannelDescriptor]] = {
    "general": (
        ChannelDescriptor(
            "duckduckgo", search_url("https://html.duckduckgo.com/html/?q={q}")
        ),
        ChannelDescriptor("bing", search_url("https://www.bing.com/search?q={q}")),
        ChannelDescriptor(
            "brave", search_url("https://search.brave.com/search?q={q}")
        ),
        ChannelDescriptor(
            "wikipedia", wiki_url("https://en.wikipedia.org/wiki/{q}")
        ),
    ),
    "flights": (
        ChannelDescriptor(
            "duckduckgo",
            search_url("https://html.duckduckgo.com/html/?q={q}", " flights"),
        ),
        ChannelDescriptor(
            "google_preview",
            search_url("https://www.google.com/search?q={q}", " flights"),
        ),
        ChannelDescriptor(
            "skyscanner",
            search_url("https://www.skyscanner.net/search?keywords={q}"),
        ),
    ),
    "deals": (
        ChannelDescriptor(
            "google_shopping",
            search_url("https://www.google.com/search?q={q}", " best price"),
        ),
        ChannelDescriptor(
            "slickdeals", search_url("https://slickdeals.net/newsearch.php?q={q}")
        ),
        ChannelDescriptor(
            "ebay", search_url("https://www.ebay.com/sch/i.html?_nkw={q}")
        ),
    ),
    "sports": (
        ChannelDescriptor(
            "espn", search_url("https://www.espn.com/search/results?q={q}")
        ),
        ChannelDescriptor(
            "bbc_sport", search_url("https://www.bbc.co.uk/sport/search?q={q}")
        ),
        ChannelDescriptor(
            "duckduckgo",
            search_url("https://html.duckduckgo.com/html/?q={q}", " sports"),
        ),
    ),
    "research": (
        ChannelDescriptor(
            "arxiv",
            search_url("https://arxiv.org/search/?query={q}&searchtype=all"),
        ),
        ChannelDescriptor(
            "semantic", search_url("https://www.semanticscholar.org/search?q={q}")
        ),
        ChannelDescriptor(
            "pubmed", search_url("https://pubmed.ncbi.nlm.nih.gov/?term={q}")
        ),
    ),
    "finance": (
        ChannelDescriptor(
            "yahoo_finance", search_url("https://finance.yahoo.com/lookup?s={q}")
        ),
        ChannelDescriptor(
            "marketwatch", search_url("https://www.marketwatch.com/search?q={q}")
        ),
        ChannelDescriptor(
            "investing", search_url("https://www.investing.com/search/?q={q}")
        ),
    ),
}


def build_default_registry() -> ChannelRegistry:
    """Create the registry of built-in domains and channels."""
    return ChannelRegistry(DEFAULT_CHANNELS, default_domain=DEFAULT_DOMAIN)
