"""Utility modules for Fusion Agent."""

from .logging_config import configure_logging
from .text import TextNormalizer, normalize, strip_tags, try_structured_parse

__all__ = [
    "configure_logging",
    "normalize",
    "strip_tags",
    "try_structured_parse",
    "TextNormalizer",
]
