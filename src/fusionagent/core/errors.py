"""Error types for the fusion pipeline.

Only ValidationError crosses the engine boundary. ChannelFetchError and
NormalizationError are raised and absorbed inside the fetcher and the text
normalizer respectively, and end up as degraded output rather than failures.
"""

from typing import Optional

from fusionagent.core.constants import QUERY_REQUIRED_MESSAGE


class FusionAgentError(Exception):
    """Base class for Fusion Agent errors."""


class ValidationError(FusionAgentError):
    """Raised when a request is missing its query."""

    def __init__(self, message: str = QUERY_REQUIRED_MESSAGE):
        super().__init__(message)
        self.message = message


class ChannelFetchError(FusionAgentError):
    """Raised when a single channel cannot be retrieved.

    Attributes:
        url: The URL that was being fetched.
        reason: Short description of the failure (timeout, network error, ...).
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(reason)


class NormalizationError(FusionAgentError):
    """Raised when a fetched body cannot be parsed as an HTML document."""


class ConfigError(FusionAgentError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
