from __future__ import annotations

import pytest

from cognimap.cognition.schemas import (
    ClassificationResult,
    PersonaProfileResult,
    ReformulationResult,
    WebSearchResult,
)
from cognimap.core.errors import (
    ConfigurationError,
    EmptyResponseError,
    ModelInvocationError,
    PayloadTooLargeError,
)
from cognimap.core.i18n import action_failed_message, action_key, translate
from cognimap.core.normalization import normalize
from cognimap.core.types import Feature, ModelResponse, resolve_language


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("fr", "fr"),
        ("fr-CA", "fr"),
        ("FR_be", "fr"),
        ("en", "en"),
        ("en-US", "en"),
        ("de", "en"),
        ("", "en"),
        (None, "en"),
    ],
)
def test_resolve_language(tag, expected):
    assert resolve_language(tag) == expected


def test_translate_falls_back_to_secondary_locale():
    assert translate("empty_response", "es") == "The model did not provide a response."
    assert translate("empty_response", "fr-FR") == "Le modèle n'a pas fourni de réponse."


def test_action_failed_message_contract():
    assert action_failed_message("reformulation", "neutral", "boom", "en") == (
        'Failed to reformulate text "neutral": boom'
    )
    assert action_failed_message("unknown", "x", "boom", "fr") == "Échec de l'action \"x\": boom"


def test_action_key_distinguishes_research_styles():
    assert action_key(Feature.RESEARCH, "contextual") == "research_contextual"
    assert action_key(Feature.RESEARCH, "Manipulation") == "research_manipulation"
    assert action_key(Feature.SUMMARY, "academic") == "summary"


def test_normalize_is_idempotent():
    response = ModelResponse(
        feature=Feature.CLASSIFICATION,
        style="default",
        data={
            "classifiedCategories": [{"categoryName": "Emotional", "intensity": 7}],
            "overallClassification": {"type": "opinion", "score": 61, "reasoning": None},
        },
    )

    first = normalize(
        ClassificationResult, response, language="en", action="classification", label="classification"
    )
    again = normalize(
        ClassificationResult,
        ModelResponse(
            feature=Feature.CLASSIFICATION,
            style="default",
            data=first.model_dump(by_alias=True),
        ),
        language="en",
        action="classification",
        label="classification",
    )

    assert again == first
    assert first.classified_categories[0].description == ""
    assert first.overall_classification.reasoning == ""


def test_normalize_payload_too_large():
    result = normalize(
        ReformulationResult,
        PayloadTooLargeError(length=12, limit=10),
        language="en",
        action="reformulation",
        label="neutral",
        extra={"style_used": "neutral"},
    )

    assert result.reformulated_text == (
        "The text is too long: 12 characters for an allowed maximum of 10."
    )
    assert result.style_used == "neutral"


def test_normalize_empty_response_in_unknown_locale():
    result = normalize(
        ReformulationResult,
        EmptyResponseError(feature="reformulation", style="neutral"),
        language="ja",
        action="reformulation",
        label="neutral",
    )

    assert result.reformulated_text == "The model did not provide a response."


def test_normalize_invocation_error_into_nested_field():
    result = normalize(
        ClassificationResult,
        ModelInvocationError(message="rate limited", code="rate_limited"),
        language="fr",
        action="classification",
        label="classification",
    )

    assert result.overall_classification.reasoning == (
        'Échec de la classification des catégories cognitives "classification": rate limited'
    )
    assert result.overall_classification.score == 0
    assert result.classified_categories == []


def test_normalize_configuration_error():
    error = ConfigurationError(feature="summary", style="noir", key="SUMMARY_NOIR_USER_PROMPT")

    result = normalize(
        PersonaProfileResult,
        error,
        language="en",
        action="persona",
        label="Sage",
    )

    assert result.persona_profile.tagline.startswith('Failed to generate persona profile "Sage": ')
    assert "SUMMARY_NOIR_USER_PROMPT" in result.persona_profile.tagline


def test_normalize_text_response_merges_extra():
    result = normalize(
        ReformulationResult,
        ModelResponse(feature=Feature.REFORMULATION, style="poetic_metaphoric", text="Verse."),
        language="fr",
        action="reformulation",
        label="poetic_metaphoric",
        extra={"style_used": "poetic_metaphoric"},
    )

    assert result.model_dump(by_alias=True) == {
        "reformulatedText": "Verse.",
        "styleUsed": "poetic_metaphoric",
    }


def test_from_message_does_not_mutate_extra():
    extra = {"overall_classification": {"type": "opinion"}}

    result = ClassificationResult.from_message("failed", extra)

    assert result.overall_classification.type == "opinion"
    assert result.overall_classification.reasoning == "failed"
    assert extra == {"overall_classification": {"type": "opinion"}}


def test_message_property_follows_message_field():
    assert WebSearchResult.from_message("nothing").message == "nothing"
    assert ClassificationResult.from_message("why").message == "why"


def test_output_schema_marks_every_field_required():
    schema = ClassificationResult.output_schema()

    assert set(schema["required"]) == {"classifiedCategories", "overallClassification"}
