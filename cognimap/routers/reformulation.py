from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cognimap.cognition import actions
from cognimap.cognition.schemas import ReformulationRequest, ReformulationResult
from cognimap.core.pipeline import ActionRunner
from cognimap.core.types import Feature
from cognimap.dependencies import get_resolver, get_runner
from cognimap.prompts.resolver import TemplateResolver

router = APIRouter(prefix="/v1", tags=["reformulation"])


@router.post("/reformulation", response_model=ReformulationResult)
async def reformulate(
    payload: ReformulationRequest,
    runner: ActionRunner = Depends(get_runner),
) -> ReformulationResult:
    return await actions.reformulate_text(runner, payload)


@router.get("/styles/{feature}")
async def list_styles(
    feature: str,
    resolver: TemplateResolver = Depends(get_resolver),
) -> dict:
    try:
        known = Feature(feature)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown feature '{feature}'.") from None

    return {"feature": known.value, "styles": resolver.styles(known)}
