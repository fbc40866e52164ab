from __future__ import annotations

from fastapi import APIRouter, Depends

from cognimap.cognition import actions
from cognimap.cognition.schemas import (
    ContextualResearch,
    ManipulationResearch,
    ResearchRequest,
    WebSearchRequest,
    WebSearchResult,
)
from cognimap.cognition.web_search import WebSearchService
from cognimap.core.pipeline import ActionRunner
from cognimap.dependencies import get_runner, get_web_search

router = APIRouter(prefix="/v1/research", tags=["research"])


@router.post("/contextual", response_model=ContextualResearch)
async def contextual(
    payload: ResearchRequest,
    runner: ActionRunner = Depends(get_runner),
) -> ContextualResearch:
    return await actions.research_contextual(runner, payload)


@router.post("/manipulation", response_model=ManipulationResearch)
async def manipulation(
    payload: ResearchRequest,
    runner: ActionRunner = Depends(get_runner),
) -> ManipulationResearch:
    return await actions.research_manipulation(runner, payload)


@router.post("/search", response_model=WebSearchResult)
async def web_search(
    payload: WebSearchRequest,
    service: WebSearchService = Depends(get_web_search),
) -> WebSearchResult:
    return await service.search(payload)
