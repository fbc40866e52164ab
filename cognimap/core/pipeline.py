from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Generic

from cognimap.prompts.resolver import TemplateResolver
from cognimap.prompts.substitution import ensure_within_limit, render_prompt

from .errors import CognimapError, ModelInvocationError
from .generation import ModelInvoker
from .i18n import action_key
from .normalization import ResultT, normalize
from .types import MAX_INPUT_CHARS, Feature, ModelRequest, ModelResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionDefinition(Generic[ResultT]):
    feature: Feature
    result_type: type[ResultT]
    structured: bool
    temperature: float | None = None


class ActionRunner:
    """Runs one action end to end: limit check, resolve, substitute, invoke, normalize.

    Nothing raised below the runner reaches the caller; every outcome is a
    ``result_type`` instance.
    """

    def __init__(
        self,
        resolver: TemplateResolver,
        invoker: ModelInvoker,
        max_input_chars: int = MAX_INPUT_CHARS,
    ) -> None:
        self.resolver = resolver
        self.invoker = invoker
        self.max_input_chars = max_input_chars

    async def run(
        self,
        action: ActionDefinition[ResultT],
        *,
        style: str,
        text: str,
        language: str,
        label: str | None = None,
        primary_text: str | None = None,
        instructions_suffix: str | None = None,
        extra: dict[str, Any] | None = None,
        failure_extra: dict[str, Any] | None = None,
    ) -> ResultT:
        """``primary_text`` is the user payload checked against the length
        ceiling when ``text`` is a composed prompt body."""

        label = label or style
        outcome: ModelResponse | CognimapError

        try:
            ensure_within_limit(text if primary_text is None else primary_text, self.max_input_chars)

            template = await self.resolver.resolve(action.feature, style)
            prompt = render_prompt(template, text=text, language=language)
            if instructions_suffix:
                instructions = prompt.instructions or ""
                prompt = replace(
                    prompt,
                    instructions=f"{instructions}\n\n{instructions_suffix}".strip(),
                )

            request = ModelRequest(
                prompt=prompt,
                temperature=action.temperature,
                json_schema=action.result_type.output_schema() if action.structured else None,
            )
            outcome = await self.invoker.invoke(request)
        except ModelInvocationError as exc:
            logger.error(
                "Model invocation failed for %s/%s [%s]: %s",
                action.feature.value,
                style,
                exc.code,
                exc.message,
            )
            outcome = exc
        except CognimapError as exc:
            logger.warning("%s/%s not completed: %s", action.feature.value, style, exc)
            outcome = exc

        return normalize(
            action.result_type,
            outcome,
            language=language,
            action=action_key(action.feature, style),
            label=label,
            extra=extra,
            failure_extra=failure_extra,
        )
