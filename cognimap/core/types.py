from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

MAX_INPUT_CHARS = 100_000

PRIMARY_LANGUAGE = "fr"
SECONDARY_LANGUAGE = "en"
SUPPORTED_LANGUAGES = (PRIMARY_LANGUAGE, SECONDARY_LANGUAGE)

DEFAULT_STYLE = "default"


class Feature(str, Enum):
    ANALYSIS = "analysis"
    SUMMARY = "summary"
    CLASSIFICATION = "classification"
    NARRATIVES = "narratives"
    REFORMULATION = "reformulation"
    RESEARCH = "research"
    CHAT = "chat"
    PERSONA = "persona"


class TemplateRole(str, Enum):
    SYSTEM = "system"
    USER = "user"


@dataclass(slots=True, frozen=True)
class PromptTemplate:
    feature: Feature
    style: str
    user_template: str
    system_template: str | None = None


@dataclass(slots=True, frozen=True)
class ResolvedPrompt:
    feature: Feature
    style: str
    prompt: str
    instructions: str | None = None


@dataclass(slots=True)
class ModelRequest:
    prompt: ResolvedPrompt
    temperature: float | None = None
    json_schema: dict[str, Any] | None = None

    @property
    def structured(self) -> bool:
        return self.json_schema is not None


@dataclass(slots=True)
class ModelResponse:
    feature: Feature
    style: str
    text: str | None = None
    data: dict[str, Any] | None = None


def resolve_language(language: str | None) -> str:
    """Map a caller-supplied language tag onto one of the two supported locales."""

    if not language:
        return SECONDARY_LANGUAGE

    primary_subtag = language.strip().lower().replace("_", "-").split("-", 1)[0]
    if primary_subtag in SUPPORTED_LANGUAGES:
        return primary_subtag

    return SECONDARY_LANGUAGE
