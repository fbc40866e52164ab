from __future__ import annotations

from cognimap.core.i18n import translate
from cognimap.core.pipeline import ActionDefinition, ActionRunner
from cognimap.core.types import DEFAULT_STYLE, Feature

from .schemas import (
    AnalysisResult,
    AnalyzeTextRequest,
    ClassificationRequest,
    ClassificationResult,
    ContextualResearch,
    CriticalSummary,
    CriticalSummaryRequest,
    HiddenNarratives,
    HiddenNarrativesRequest,
    ManipulationResearch,
    PersonaChatRequest,
    PersonaChatResult,
    PersonaProfileRequest,
    PersonaProfileResult,
    ReformulationRequest,
    ReformulationResult,
    ResearchRequest,
)

ANALYZE_TEXT = ActionDefinition(Feature.ANALYSIS, AnalysisResult, structured=True)
CRITICAL_SUMMARY = ActionDefinition(Feature.SUMMARY, CriticalSummary, structured=True)
CLASSIFY = ActionDefinition(Feature.CLASSIFICATION, ClassificationResult, structured=True)
HIDDEN_NARRATIVES = ActionDefinition(Feature.NARRATIVES, HiddenNarratives, structured=True)
REFORMULATE = ActionDefinition(
    Feature.REFORMULATION, ReformulationResult, structured=False, temperature=0.7
)
CONTEXTUAL_RESEARCH = ActionDefinition(
    Feature.RESEARCH, ContextualResearch, structured=False, temperature=0.5
)
MANIPULATION_RESEARCH = ActionDefinition(
    Feature.RESEARCH, ManipulationResearch, structured=False, temperature=0.5
)
PERSONA_PROFILE = ActionDefinition(Feature.PERSONA, PersonaProfileResult, structured=True)
PERSONA_CHAT = ActionDefinition(
    Feature.CHAT, PersonaChatResult, structured=False, temperature=0.7
)

NARRATIVES_STYLE = "paranoid"
PERSONA_STYLE = "profile"
CHAT_STYLE = "persona"


async def analyze_text(runner: ActionRunner, request: AnalyzeTextRequest) -> AnalysisResult:
    return await runner.run(
        ANALYZE_TEXT,
        style=DEFAULT_STYLE,
        text=request.text,
        language=request.language,
        label=Feature.ANALYSIS.value,
    )


async def generate_critical_summary(
    runner: ActionRunner,
    request: CriticalSummaryRequest,
) -> CriticalSummary:
    return await runner.run(
        CRITICAL_SUMMARY,
        style=request.analysis_style,
        text=request.analyzed_text,
        language=request.language,
    )


async def classify_cognitive_categories(
    runner: ActionRunner,
    request: ClassificationRequest,
) -> ClassificationResult:
    return await runner.run(
        CLASSIFY,
        style=DEFAULT_STYLE,
        text=_classification_input(request),
        primary_text=request.original_text,
        language=request.language,
        label=Feature.CLASSIFICATION.value,
    )


async def detect_hidden_narratives(
    runner: ActionRunner,
    request: HiddenNarrativesRequest,
) -> HiddenNarratives:
    return await runner.run(
        HIDDEN_NARRATIVES,
        style=NARRATIVES_STYLE,
        text=request.text,
        language=request.language,
    )


async def reformulate_text(
    runner: ActionRunner,
    request: ReformulationRequest,
) -> ReformulationResult:
    return await runner.run(
        REFORMULATE,
        style=request.style,
        text=request.text,
        language=request.language,
        extra={"style_used": request.style},
    )


async def research_contextual(
    runner: ActionRunner,
    request: ResearchRequest,
) -> ContextualResearch:
    return await runner.run(
        CONTEXTUAL_RESEARCH,
        style="contextual",
        text=request.text,
        language=request.language,
    )


async def research_manipulation(
    runner: ActionRunner,
    request: ResearchRequest,
) -> ManipulationResearch:
    return await runner.run(
        MANIPULATION_RESEARCH,
        style="manipulation",
        text=request.text,
        language=request.language,
    )


async def generate_persona_profile(
    runner: ActionRunner,
    request: PersonaProfileRequest,
) -> PersonaProfileResult:
    result = await runner.run(
        PERSONA_PROFILE,
        style=PERSONA_STYLE,
        text=(
            f"Nom du Persona : {request.persona_name}\n"
            f"Description Détaillée : {request.persona_description}"
        ),
        primary_text=request.persona_description,
        language=request.language,
        label=request.persona_name or Feature.PERSONA.value,
        failure_extra=_persona_failure_fields(request.language),
    )

    if not result.persona_profile.name:
        result.persona_profile.name = request.persona_name or translate(
            "undefined_persona", request.language
        )
    return result


async def chat_with_persona(
    runner: ActionRunner,
    request: PersonaChatRequest,
) -> PersonaChatResult:
    profile = request.persona_profile
    return await runner.run(
        PERSONA_CHAT,
        style=CHAT_STYLE,
        text=_chat_transcript(request),
        primary_text=request.user_message,
        language=request.language,
        label=profile.name or Feature.CHAT.value,
        instructions_suffix=profile.character_sheet(),
    )


def _classification_input(request: ClassificationRequest) -> str:
    return (
        f"Summary of Discursive Elements: {request.analysis_summary}\n"
        f"Rhetorical Techniques: {_bullet_list(request.rhetorical_techniques)}\n"
        f"Cognitive Biases: {_bullet_list(request.cognitive_biases)}\n"
        f"Unverifiable Facts: {_bullet_list(request.unverifiable_facts)}\n\n"
        "Original Text for full contextual understanding:\n"
        f"{request.original_text}"
    )


def _bullet_list(items: list[str]) -> str:
    if not items:
        return "None identified."
    return "".join(f"\n- {item}" for item in items)


def _persona_failure_fields(language: str) -> dict:
    return {
        "persona_profile": {
            "overall_description": translate("persona_description_unavailable", language),
            "identity_signatures": {
                "ame": {"concept": translate("soul_concept_unavailable", language)},
                "systeme_nerveux": {
                    "concept": translate("nervous_system_concept_unavailable", language)
                },
            },
        }
    }


def _chat_transcript(request: PersonaChatRequest) -> str:
    persona_name = request.persona_profile.name or "Persona"
    lines: list[str] = []

    if request.chat_history:
        lines.append("Previous conversation history:")
        for message in request.chat_history:
            speaker = "User" if message.role == "user" else persona_name
            lines.append(f"{speaker}: {message.content}")
        lines.append("\n---")

    lines.append(f"Current user message: {request.user_message}")
    return "\n".join(lines)
