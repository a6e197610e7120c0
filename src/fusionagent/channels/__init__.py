"""Channel selection and source authority."""

from .authority import DEFAULT_AUTHORITY_WEIGHTS, AuthorityTable
from .registry import (
    DEFAULT_CHANNELS,
    ChannelRegistry,
    build_default_registry,
    encode_query,
    search_url,
    wiki_url,
)

__all__ = [
    "AuthorityTable",
    "ChannelRegistry",
    "DEFAULT_AUTHORITY_WEIGHTS",
    "DEFAULT_CHANNELS",
    "build_default_registry",
    "encode_query",
    "search_url",
    "wiki_url",
]
