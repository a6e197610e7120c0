"""Schemas for the ask and domains endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """POST body for /api/ask. The query is checked by the engine, not here."""

    domain: Optional[str] = None
    query: Optional[str] = None


class FindingSchema(BaseModel):
    """A key finding with its channel citation."""

    text: str
    cite: Optional[str] = None


class AppendixEntrySchema(BaseModel):
    """Citation appendix row."""

    id: str
    url: str
    authority: float
    status: Optional[int] = None


class AnswerSchema(BaseModel):
    """Fused answer payload."""

    executive_summary: str
    confidence: int = Field(ge=0, le=100)
    key_findings: List[FindingSchema] = Field(default_factory=list)
    detailed_analysis: str
    appendix: List[AppendixEntrySchema] = Field(default_factory=list)
    probe: str


class AskResponse(BaseModel):
    """Response for /api/ask."""

    query: str
    domain: str
    answer: AnswerSchema


class DomainInfo(BaseModel):
    """A domain and the ids of the channels it probes."""

    name: str
    channels: List[str]


class DomainsResponse(BaseModel):
    """Response for /api/domains."""

    default: str
    domains: List[DomainInfo]
