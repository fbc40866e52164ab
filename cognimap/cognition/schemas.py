from __future__ import annotations

from typing import Any, ClassVar, Literal, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cognimap.core.normalization import NormalizedResult, ResultModel
from cognimap.core.types import PRIMARY_LANGUAGE

ContentType = Literal[
    "conspiracy",
    "literary",
    "neutral",
    "promotional",
    "opinion",
    "news_report",
    "political_discourse",
    "other",
]
CONTENT_TYPES = frozenset(get_args(ContentType))


class ActionRequest(BaseModel):
    language: str = PRIMARY_LANGUAGE

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# Requests


class AnalyzeTextRequest(ActionRequest):
    text: str


class CriticalSummaryRequest(ActionRequest):
    analyzed_text: str
    analysis_style: str = "academic"


class ClassificationRequest(ActionRequest):
    analysis_summary: str = ""
    rhetorical_techniques: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "rhetoricalTechniques",
            "manipulativeTechniques",
            "rhetorical_techniques",
        ),
    )
    cognitive_biases: list[str] = Field(default_factory=list)
    unverifiable_facts: list[str] = Field(default_factory=list)
    original_text: str = ""


class HiddenNarrativesRequest(ActionRequest):
    text: str


class ReformulationRequest(ActionRequest):
    text: str
    style: str = "neutral"


class ResearchRequest(ActionRequest):
    text: str


class WebSearchRequest(BaseModel):
    query: str
    language: str | None = None


class PersonaProfileRequest(ActionRequest):
    persona_name: str
    persona_description: str


# Results


class AnalysisResult(NormalizedResult):
    message_field: ClassVar[str] = "summary"

    summary: str = ""
    rhetorical_techniques: list[str] = Field(default_factory=list)
    cognitive_biases: list[str] = Field(default_factory=list)
    unverifiable_facts: list[str] = Field(default_factory=list)


class CriticalSummary(NormalizedResult):
    message_field: ClassVar[str] = "summary"

    summary: str = ""


class ClassifiedCategory(ResultModel):
    category_name: str = ""
    intensity: int = Field(default=0, description="0 (absent) to 10 (dominant)")
    description: str = ""

    @field_validator("intensity", mode="before")
    @classmethod
    def clamp_intensity(cls, v: Any) -> Any:
        return _clamp(v, 0, 10)


class ContentClassification(ResultModel):
    type: ContentType = "other"
    score: int = Field(default=0, description="0 to 100")
    reasoning: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            candidate = v.strip().lower().replace(" ", "_")
            return candidate if candidate in CONTENT_TYPES else "other"
        return v

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, v: Any) -> Any:
        return _clamp(v, 0, 100)


class ClassificationResult(NormalizedResult):
    message_field: ClassVar[str] = "overall_classification.reasoning"
    blank_message_allowed: ClassVar[bool] = True

    classified_categories: list[ClassifiedCategory] = Field(default_factory=list)
    overall_classification: ContentClassification = Field(default_factory=ContentClassification)


class HiddenNarratives(NormalizedResult):
    message_field: ClassVar[str] = "hidden_narratives"

    hidden_narratives: str = ""


class ReformulationResult(NormalizedResult):
    message_field: ClassVar[str] = "reformulated_text"

    reformulated_text: str = ""
    style_used: str = ""


class ContextualResearch(NormalizedResult):
    message_field: ClassVar[str] = "research_result"

    research_result: str = ""


class ManipulationResearch(NormalizedResult):
    message_field: ClassVar[str] = "manipulation_insights"

    manipulation_insights: str = ""


class WebSearchResult(NormalizedResult):
    message_field: ClassVar[str] = "search_results"

    search_results: str = ""
    source: str = ""


# Persona lab


class SoulSignature(ResultModel):
    concept: str = ""
    core_values: list[str] = Field(default_factory=list)
    tone_and_voice: str = ""
    key_statements: list[str] = Field(default_factory=list)


class Methodology(ResultModel):
    name: str = ""
    steps: list[str] = Field(default_factory=list)


class NervousSystemSignature(ResultModel):
    concept: str = ""
    core_capabilities: list[str] = Field(default_factory=list)
    methodology: Methodology = Field(default_factory=Methodology)
    functional_outputs: list[str] = Field(default_factory=list)


class IdentitySignatures(ResultModel):
    ame: SoulSignature = Field(default_factory=SoulSignature)
    systeme_nerveux: NervousSystemSignature = Field(default_factory=NervousSystemSignature)


class MarkdownFormat(ResultModel):
    purpose: str = ""
    usage_context: str = ""
    relation_to_json: str = ""


class JsonFormat(ResultModel):
    purpose: str = ""
    usage_context: str = ""
    status: str = ""


class OperationalFormats(ResultModel):
    markdown: MarkdownFormat = Field(default_factory=MarkdownFormat)
    json_format: JsonFormat = Field(
        default_factory=JsonFormat,
        alias="json",
        validation_alias=AliasChoices("json", "json_format"),
    )
    synchronization_notice: str = ""


class PersonaProfile(ResultModel):
    name: str = ""
    tagline: str = ""
    overall_description: str = ""
    identity_signatures: IdentitySignatures = Field(default_factory=IdentitySignatures)
    operational_formats: OperationalFormats = Field(default_factory=OperationalFormats)

    def character_sheet(self) -> str:
        ame = self.identity_signatures.ame
        nervous = self.identity_signatures.systeme_nerveux
        return (
            f'You are the AI Persona named "{self.name}".\n'
            f'Your tagline is: "{self.tagline}".\n'
            f"Overall Description: {self.overall_description}\n\n"
            "Your 'âme' (soul/essence) is characterized by:\n"
            f"Concept: {ame.concept}\n"
            f"Core Values: {', '.join(ame.core_values)}.\n"
            f"Tone and Voice: {ame.tone_and_voice}.\n"
            f"Key Statements that embody you: {'; '.join(ame.key_statements)}\n\n"
            "Your 'système nerveux' (nervous system/operational capabilities) is characterized by:\n"
            f"Concept: {nervous.concept}\n"
            f"Core Capabilities: {', '.join(nervous.core_capabilities)}.\n"
            f"Methodology ({nervous.methodology.name}): {'; '.join(nervous.methodology.steps)}.\n"
            f"Functional Outputs: {', '.join(nervous.functional_outputs)}."
        )


class PersonaProfileResult(NormalizedResult):
    message_field: ClassVar[str] = "persona_profile.tagline"

    persona_profile: PersonaProfile = Field(default_factory=PersonaProfile)


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    content: str


class PersonaChatRequest(ActionRequest):
    persona_profile: PersonaProfile
    user_message: str
    chat_history: list[ChatMessage] = Field(default_factory=list)


class PersonaChatResult(NormalizedResult):
    message_field: ClassVar[str] = "persona_response"

    persona_response: str = ""


def _clamp(value: Any, lower: int, upper: int) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return max(lower, min(upper, round(value)))
