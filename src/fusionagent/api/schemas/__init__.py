"""Pydantic schemas for API request/response models."""

from .ask import (
    AnswerSchema,
    AppendixEntrySchema,
    AskRequest,
    AskResponse,
    DomainInfo,
    DomainsResponse,
    FindingSchema,
)
from .common import ErrorResponse, HealthResponse

__all__ = [
    # Ask
    "AnswerSchema",
    "AppendixEntrySchema",
    "AskRequest",
    "AskResponse",
    "DomainInfo",
    "DomainsResponse",
    "FindingSchema",
    # Common
    "ErrorResponse",
    "HealthResponse",
]
