"""Web search backed by the Perplexity chat completions API.

Without an API key the service answers with a localized placeholder instead of
searching. HTTP failures and malformed replies are reported inside the result,
never raised.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from cognimap.config import Settings
from cognimap.core.i18n import action_failed_message, translate
from cognimap.core.types import PRIMARY_LANGUAGE

from .schemas import WebSearchRequest, WebSearchResult

logger = logging.getLogger(__name__)

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"

SYSTEM_PROMPT = (
    "You are a helpful AI assistant that provides concise and relevant search results. "
    "Prioritize accuracy and cite sources if possible."
)


class WebSearchService:
    def __init__(
        self,
        api_key: str | None,
        model: str = "sonar",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebSearchService":
        return cls(
            api_key=settings.perplexity_api_key,
            model=settings.perplexity_model,
            timeout=settings.web_search_timeout,
        )

    async def search(self, request: WebSearchRequest) -> WebSearchResult:
        language = request.language or PRIMARY_LANGUAGE
        logger.info("Web search for %r (language=%s)", request.query, language)

        if not self.api_key or not self.api_key.strip():
            return WebSearchResult(
                search_results=translate(
                    "web_search_placeholder",
                    language,
                    query=request.query,
                ),
                source="PlaceholderWebSearchTool",
            )

        system_prompt = SYSTEM_PROMPT
        if request.language:
            system_prompt += (
                f" The user prefers results in {request.language}. "
                "Please tailor your search and response accordingly."
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    PERPLEXITY_URL,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "model": self.model,
                        "messages": [
                            {"role": "system", "content": system_prompt},
                            {"role": "user", "content": request.query},
                        ],
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Perplexity API error %s: %s",
                exc.response.status_code,
                exc.response.text,
            )
            detail = f"{exc.response.status_code} {exc.response.reason_phrase}. {exc.response.text}"
            return self._failure(language, detail)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error calling Perplexity API: %s", exc)
            return self._failure(language, str(exc) or type(exc).__name__)

        content = _message_content(data)
        if content is None:
            logger.error("Malformed Perplexity response: %r", data)
            return self._failure(language, "malformed response")
        if not content.strip():
            content = translate("web_search_empty", language)

        return WebSearchResult(search_results=content, source="PerplexityAPI")

    def _failure(self, language: str, detail: str) -> WebSearchResult:
        return WebSearchResult(
            search_results=action_failed_message("web_search", "Perplexity", detail, language),
            source="PerplexityAPIError",
        )


def _message_content(data: Any) -> str | None:
    """First choice's message content, ``""`` when there is none, None when malformed."""

    if not isinstance(data, dict):
        return None

    choices = data.get("choices") or []
    if not isinstance(choices, list):
        return None
    if not choices:
        return ""

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None

    content = message.get("content")
    if content is None:
        return ""
    return content if isinstance(content, str) else None
