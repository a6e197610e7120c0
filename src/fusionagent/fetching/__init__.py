"""Outbound retrieval for channel probes."""

from .fetcher import BROWSER_HEADERS, BoundedFetcher

__all__ = ["BROWSER_HEADERS", "BoundedFetcher"]
