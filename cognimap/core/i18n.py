from __future__ import annotations

from .types import PRIMARY_LANGUAGE, SECONDARY_LANGUAGE, Feature, resolve_language

ACTION_FAILED_PREFIXES: dict[str, dict[str, str]] = {
    "analysis": {
        PRIMARY_LANGUAGE: "Échec de l'analyse du texte",
        SECONDARY_LANGUAGE: "Failed to analyze text",
    },
    "summary": {
        PRIMARY_LANGUAGE: "Échec de la génération du résumé critique",
        SECONDARY_LANGUAGE: "Failed to generate critical summary",
    },
    "classification": {
        PRIMARY_LANGUAGE: "Échec de la classification des catégories cognitives",
        SECONDARY_LANGUAGE: "Failed to classify cognitive categories",
    },
    "narratives": {
        PRIMARY_LANGUAGE: "Échec de la détection des narratifs cachés",
        SECONDARY_LANGUAGE: "Failed to detect hidden narratives",
    },
    "reformulation": {
        PRIMARY_LANGUAGE: "Échec de la reformulation",
        SECONDARY_LANGUAGE: "Failed to reformulate text",
    },
    "research_contextual": {
        PRIMARY_LANGUAGE: "Échec de la recherche contextuelle",
        SECONDARY_LANGUAGE: "Failed to perform contextual research",
    },
    "research_manipulation": {
        PRIMARY_LANGUAGE: "Échec de la recherche sur la manipulation",
        SECONDARY_LANGUAGE: "Failed to perform manipulation research",
    },
    "persona": {
        PRIMARY_LANGUAGE: "Échec de la génération du profil de persona",
        SECONDARY_LANGUAGE: "Failed to generate persona profile",
    },
    "chat": {
        PRIMARY_LANGUAGE: "Échec de la conversation",
        SECONDARY_LANGUAGE: "Failed to chat",
    },
    "web_search": {
        PRIMARY_LANGUAGE: "Échec de la recherche web",
        SECONDARY_LANGUAGE: "Web search failed",
    },
}

MESSAGES: dict[str, dict[str, str]] = {
    "empty_response": {
        PRIMARY_LANGUAGE: "Le modèle n'a pas fourni de réponse.",
        SECONDARY_LANGUAGE: "The model did not provide a response.",
    },
    "payload_too_large": {
        PRIMARY_LANGUAGE: (
            "Le texte est trop long : {length} caractères pour un maximum autorisé de {limit}."
        ),
        SECONDARY_LANGUAGE: (
            "The text is too long: {length} characters for an allowed maximum of {limit}."
        ),
    },
    "web_search_placeholder": {
        PRIMARY_LANGUAGE: (
            'Résultat de recherche web (placeholder - clé API Perplexity non configurée) pour : '
            '"{query}". La fonctionnalité de recherche réelle n\'est pas activée.'
        ),
        SECONDARY_LANGUAGE: (
            'Web search result (placeholder - Perplexity API key not configured) for: '
            '"{query}". Actual search functionality is not enabled.'
        ),
    },
    "web_search_empty": {
        PRIMARY_LANGUAGE: "Aucune information pertinente trouvée par l'API Perplexity.",
        SECONDARY_LANGUAGE: "No relevant information found by Perplexity API.",
    },
    "undefined_persona": {
        PRIMARY_LANGUAGE: "Persona Indéfini",
        SECONDARY_LANGUAGE: "Undefined Persona",
    },
    "persona_description_unavailable": {
        PRIMARY_LANGUAGE: "Description indisponible en raison d'une erreur.",
        SECONDARY_LANGUAGE: "Description unavailable due to an error.",
    },
    "soul_concept_unavailable": {
        PRIMARY_LANGUAGE: "Concept d'âme non généré.",
        SECONDARY_LANGUAGE: "Soul concept not generated.",
    },
    "nervous_system_concept_unavailable": {
        PRIMARY_LANGUAGE: "Concept de système nerveux non généré.",
        SECONDARY_LANGUAGE: "Nervous system concept not generated.",
    },
}


def action_key(feature: Feature, style: str) -> str:
    if feature is Feature.RESEARCH:
        return f"{feature.value}_{style.lower()}"
    return feature.value


def translate(key: str, language: str | None, **params: object) -> str:
    locale = resolve_language(language)
    template = MESSAGES[key][locale]
    return template.format(**params) if params else template


def action_failed_message(action: str, label: str, detail: str, language: str | None) -> str:
    locale = resolve_language(language)
    prefixes = ACTION_FAILED_PREFIXES.get(action)
    if prefixes is None:
        prefix = "Échec de l'action" if locale == PRIMARY_LANGUAGE else "Action failed"
    else:
        prefix = prefixes[locale]
    return f'{prefix} "{label}": {detail}'
