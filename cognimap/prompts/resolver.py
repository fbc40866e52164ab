from __future__ import annotations

import logging

from cognimap.core.errors import ConfigurationError
from cognimap.core.types import Feature, PromptTemplate, TemplateRole

from .defaults import DEFAULT_PROMPTS, SINGLE_BODY_FEATURES, default_styles, template_key
from .remote_config import RemoteConfigClient

logger = logging.getLogger(__name__)


class TemplateResolver:
    """Resolves ``(feature, style)`` to a template, remote value first, static default second."""

    def __init__(
        self,
        remote_config: RemoteConfigClient,
        defaults: dict[str, str] | None = None,
    ) -> None:
        self.remote_config = remote_config
        self.defaults = DEFAULT_PROMPTS if defaults is None else defaults

    async def resolve(self, feature: Feature | str, style: str) -> PromptTemplate:
        feature = Feature(feature)
        await self.remote_config.fetch_and_activate()

        user_template = self._lookup(feature, style, TemplateRole.USER)
        system_template = None
        if feature not in SINGLE_BODY_FEATURES:
            system_template = self._lookup(feature, style, TemplateRole.SYSTEM)

        return PromptTemplate(
            feature=feature,
            style=style,
            user_template=user_template,
            system_template=system_template,
        )

    def styles(self, feature: Feature | str) -> list[str]:
        return default_styles(Feature(feature))

    def _lookup(self, feature: Feature, style: str, role: TemplateRole) -> str:
        key = template_key(feature, style, role)

        remote_value = self.remote_config.get_string(key)
        if remote_value:
            logger.debug("Template %s resolved from remote config", key)
            return remote_value

        default_value = self.defaults.get(key)
        if default_value:
            return default_value

        error = ConfigurationError(feature=feature.value, style=style, key=key)
        logger.warning("%s Using a placeholder template.", error)
        return _placeholder_template(feature, style, role)


def _placeholder_template(feature: Feature, style: str, role: TemplateRole) -> str:
    if role is TemplateRole.SYSTEM:
        return (
            f"Default system prompt for {feature.value}/{style}. "
            "Please configure it in remote config or defaults. "
            "Respond in {{language}}."
        )

    if feature in SINGLE_BODY_FEATURES:
        return f"Default {feature.value} prompt for {{{{{{text}}}}}} ({style}). Please configure."

    return f"Default user prompt for {{text}} for {feature.value}/{style}. Please configure."
