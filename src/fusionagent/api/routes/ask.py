"""Ask endpoints: fuse channel results into an answer."""

import logging
from typing import Optional

from fastapi import APIRouter

from fusionagent.api.deps import ChannelRegistryDep, FusionEngineDep
from fusionagent.api.schemas import (
    AnswerSchema,
    AskRequest,
    AskResponse,
    DomainInfo,
    DomainsResponse,
    ErrorResponse,
)
from fusionagent.core.constants import DEFAULT_DOMAIN
from fusionagent.engine.fusion import FusionEngine

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {400: {"model": ErrorResponse, "description": "Missing query"}}


async def _answer(
    engine: FusionEngine, domain: Optional[str], query: Optional[str]
) -> AskResponse:
    """Run the engine and wrap its payload.

    ValidationError from the engine propagates to the app-level handler,
    which turns it into a 400.
    """
    domain = domain or DEFAULT_DOMAIN
    payload = await engine.answer(domain, query)
    return AskResponse(
        query=query,
        domain=domain,
        answer=AnswerSchema.model_validate(payload.to_dict()),
    )


@router.get("/ask", response_model=AskResponse, responses=_ERROR_RESPONSES)
async def ask_get(
    engine: FusionEngineDep,
    q: Optional[str] = None,
    domain: Optional[str] = None,
) -> AskResponse:
    """Answer a query given as ?q=...&domain=..."""
    return await _answer(engine, domain, q)


@router.post("/ask", response_model=AskResponse, responses=_ERROR_RESPONSES)
async def ask_post(
    engine: FusionEngineDep, body: Optional[AskRequest] = None
) -> AskResponse:
    """Answer a query given as a JSON body {domain?, query}."""
    if body is None:
        return await _answer(engine, None, None)
    return await _answer(engine, body.domain, body.query)


@router.get("/domains", response_model=DomainsResponse)
async def list_domains(registry: ChannelRegistryDep) -> DomainsResponse:
    """List known domains and the channels each one probes."""
    return DomainsResponse(
        default=registry.default_domain,
        domains=[
            DomainInfo(
                name=name, channels=[ch.id for ch in registry.channels_for(name)]
            )
            for name in registry.domains()
        ],
    )
