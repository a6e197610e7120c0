"""HTML to plain-text normalization for fetched channel bodies.

Two explicit paths:
1. try_structured_parse: parse with BeautifulSoup and take the body text.
2. strip_tags: regex tag removal, used whenever the structured path fails.

Both collapse whitespace runs and trim, so the output is always a single
line of plain text.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import (
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
)

from fusionagent.core.errors import NormalizationError

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Document-head elements; html.parser only builds a body for a literal <body>
_HEAD_TAGS = ["head", "title"]

# String types that make up DOM textContent. get_text() skips script and
# style strings unless they are named; comments and <template> contents stay out
_TEXT_CONTENT_TYPES = (
    NavigableString,
    Script,
    Stylesheet,
    RubyTextString,
    RubyParenthesisString,
)


def collapse_whitespace(text: str) -> str:
    """Collapse all whitespace runs to a single space and trim the ends."""
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def _parse_document(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise NormalizationError(f"Unparseable HTML: {e}") from e


def try_structured_parse(html: str) -> Optional[str]:
    """Extract the document body's text content.

    Inline <script> and <style> text is kept, as in the DOM textContent of the
    body. Documents without a <body> element use the whole parsed tree minus
    its head content.

    Args:
        html: Raw HTML string

    Returns:
        Collapsed body text, or None if the document could not be parsed
    """
    try:
        soup = _parse_document(html)
        if soup.body is not None:
            return collapse_whitespace(soup.body.get_text(types=_TEXT_CONTENT_TYPES))

        for tag in soup.find_all(_HEAD_TAGS):
            tag.decompose()
        return collapse_whitespace(soup.get_text(types=_TEXT_CONTENT_TYPES))
    except NormalizationError as e:
        logger.debug(f"Structured parse failed, falling back to tag strip: {e}")
        return None
    except Exception as e:
        logger.debug(f"Text extraction failed, falling back to tag strip: {e}")
        return None


def strip_tags(html: str) -> str:
    """Remove anything that looks like a tag and collapse whitespace."""
    return collapse_whitespace(_TAG_PATTERN.sub("", html))


def normalize(html: Optional[str]) -> str:
    """Convert a fetched body into collapsed, trimmed plain text.

    Never raises: any failure in the structured path degrades to strip_tags.

    Args:
        html: Raw response body (may be None or empty)

    Returns:
        Plain text, or "" for empty input
    """
    if not html:
        return ""

    text = try_structured_parse(html)
    if text is None:
        return strip_tags(html)
    return text


class TextNormalizer:
    """Injectable wrapper around normalize()."""

    def normalize(self, html: Optional[str]) -> str:
        return normalize(html)

    def __call__(self, html: Optional[str]) -> str:
        return self.normalize(html)
