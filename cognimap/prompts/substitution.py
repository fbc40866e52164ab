from __future__ import annotations

import re
from typing import Mapping

from cognimap.core.errors import PayloadTooLargeError
from cognimap.core.types import MAX_INPUT_CHARS, PromptTemplate, ResolvedPrompt

# Longest tokens first so "{{{text}}}" is never read as "{text}" wrapped in braces.
KNOWN_TOKENS = ("{{{query}}}", "{{{text}}}", "{{language}}", "{text}")

_TOKEN_PATTERN = re.compile("|".join(re.escape(token) for token in KNOWN_TOKENS))


def substitute(template: str, values: Mapping[str, str]) -> str:
    """Replace every known token in a single pass.

    ``values`` is keyed by the full token (``"{text}"``). Tokens without a value
    are left in place, and replacement text is never scanned again.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token in values:
            return values[token]
        return token

    return _TOKEN_PATTERN.sub(_replace, template)


def ensure_within_limit(text: str, limit: int = MAX_INPUT_CHARS) -> None:
    if len(text) > limit:
        raise PayloadTooLargeError(length=len(text), limit=limit)


def render_prompt(template: PromptTemplate, *, text: str, language: str) -> ResolvedPrompt:
    user_values = {
        "{text}": text,
        "{{{text}}}": text,
        "{{{query}}}": text,
    }

    instructions = None
    if template.system_template is not None:
        instructions = substitute(template.system_template, {"{{language}}": language})

    return ResolvedPrompt(
        feature=template.feature,
        style=template.style,
        prompt=substitute(template.user_template, user_values),
        instructions=instructions,
    )
