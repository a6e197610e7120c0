"""Core types and constants for Fusion Agent."""

from .errors import (
    ChannelFetchError,
    ConfigError,
    FusionAgentError,
    NormalizationError,
    ValidationError,
)
from .models import (
    AnswerPayload,
    AppendixEntry,
    ChannelDescriptor,
    ChannelResult,
    FetchOutcome,
    Finding,
)

__all__ = [
    # Models
    "AnswerPayload",
    "AppendixEntry",
    "ChannelDescriptor",
    "ChannelResult",
    "FetchOutcome",
    "Finding",
    # Errors
    "ChannelFetchError",
    "ConfigError",
    "FusionAgentError",
    "NormalizationError",
    "ValidationError",
]
