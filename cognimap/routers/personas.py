from __future__ import annotations

from fastapi import APIRouter, Depends

from cognimap.cognition import actions
from cognimap.cognition.schemas import (
    PersonaChatRequest,
    PersonaChatResult,
    PersonaProfileRequest,
    PersonaProfileResult,
)
from cognimap.core.pipeline import ActionRunner
from cognimap.dependencies import get_runner

router = APIRouter(prefix="/v1/personas", tags=["personas"])


@router.post("", response_model=PersonaProfileResult)
async def generate_persona(
    payload: PersonaProfileRequest,
    runner: ActionRunner = Depends(get_runner),
) -> PersonaProfileResult:
    return await actions.generate_persona_profile(runner, payload)


@router.post("/chat", response_model=PersonaChatResult)
async def chat(
    payload: PersonaChatRequest,
    runner: ActionRunner = Depends(get_runner),
) -> PersonaChatResult:
    return await actions.chat_with_persona(runner, payload)
