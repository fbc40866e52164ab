from __future__ import annotations

from fastapi import APIRouter, Depends

from cognimap.cognition import actions
from cognimap.cognition.schemas import (
    AnalysisResult,
    AnalyzeTextRequest,
    ClassificationRequest,
    ClassificationResult,
    CriticalSummary,
    CriticalSummaryRequest,
    HiddenNarratives,
    HiddenNarrativesRequest,
)
from cognimap.core.pipeline import ActionRunner
from cognimap.dependencies import get_runner

router = APIRouter(prefix="/v1", tags=["analysis"])


@router.post("/analysis", response_model=AnalysisResult)
async def analyze_text(
    payload: AnalyzeTextRequest,
    runner: ActionRunner = Depends(get_runner),
) -> AnalysisResult:
    return await actions.analyze_text(runner, payload)


@router.post("/summary", response_model=CriticalSummary)
async def critical_summary(
    payload: CriticalSummaryRequest,
    runner: ActionRunner = Depends(get_runner),
) -> CriticalSummary:
    return await actions.generate_critical_summary(runner, payload)


@router.post("/classification", response_model=ClassificationResult)
async def classify(
    payload: ClassificationRequest,
    runner: ActionRunner = Depends(get_runner),
) -> ClassificationResult:
    return await actions.classify_cognitive_categories(runner, payload)


@router.post("/narratives", response_model=HiddenNarratives)
async def hidden_narratives(
    payload: HiddenNarrativesRequest,
    runner: ActionRunner = Depends(get_runner),
) -> HiddenNarratives:
    return await actions.detect_hidden_narratives(runner, payload)
