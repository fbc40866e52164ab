from __future__ import annotations

import importlib
import importlib.util
import json
import logging
from typing import TYPE_CHECKING, Any, Protocol

from .errors import EmptyResponseError, ModelInvocationError
from .types import ModelRequest, ModelResponse

if TYPE_CHECKING:
    import apple_fm_sdk as fm_types

    from cognimap.config import Settings

logger = logging.getLogger(__name__)

fm: Any = None
if importlib.util.find_spec("apple_fm_sdk") is not None:
    fm = importlib.import_module("apple_fm_sdk")
HAS_APPLE_FM_SDK = fm is not None

genai: Any = None
genai_errors: Any = None
if (
    importlib.util.find_spec("google") is not None
    and importlib.util.find_spec("google.genai") is not None
):
    genai = importlib.import_module("google.genai")
    genai_errors = importlib.import_module("google.genai.errors")
HAS_GOOGLE_GENAI = genai is not None


class GenerationBackend(Protocol):
    name: str

    async def generate(self, request: ModelRequest) -> str: ...


class GeminiBackend:
    """Hosted Gemini model through the google-genai client."""

    name = "gemini"

    def __init__(self, model: str, api_key: str | None = None) -> None:
        self.model = model
        self.api_key = api_key
        self._client: Any = None

    async def generate(self, request: ModelRequest) -> str:
        client = self._get_client()

        config: dict[str, Any] = {}
        if request.prompt.instructions:
            config["system_instruction"] = request.prompt.instructions
        if request.temperature is not None:
            config["temperature"] = request.temperature
        if request.json_schema is not None:
            config["response_mime_type"] = "application/json"
            config["response_json_schema"] = request.json_schema

        response = await client.aio.models.generate_content(
            model=self.model,
            contents=request.prompt.prompt,
            config=config,
        )
        return response.text or ""

    def _get_client(self) -> Any:
        if not HAS_GOOGLE_GENAI:
            raise ModelInvocationError(
                message="google-genai is not installed in this environment.",
                code="model_unavailable",
            )

        if self._client is None:
            if self.api_key:
                self._client = genai.Client(api_key=self.api_key)
            else:
                self._client = genai.Client()
        return self._client


class AppleFoundationBackend:
    """On-device Apple Foundation Models through apple_fm_sdk."""

    name = "apple"

    async def generate(self, request: ModelRequest) -> str:
        session = self._create_session(request)

        if request.temperature is not None:
            logger.debug(
                "Ignoring temperature=%s, not supported by the on-device backend",
                request.temperature,
            )

        if request.json_schema is None:
            return await session.respond(request.prompt.prompt)

        generated = await session.respond(
            request.prompt.prompt,
            json_schema=request.json_schema,
        )
        return generated.to_json()

    def _create_session(self, request: ModelRequest) -> "fm_types.LanguageModelSession":
        if not HAS_APPLE_FM_SDK:
            raise ModelInvocationError(
                message="Foundation model SDK is not installed in this environment.",
                code="model_unavailable",
            )

        model = fm.SystemLanguageModel()
        is_available, reason = model.is_available()

        if not is_available:
            reason_name = getattr(reason, "name", str(reason) if reason else "UNKNOWN")
            raise ModelInvocationError(
                message=(
                    "Foundation model is unavailable on this machine "
                    f"(reason={reason_name})."
                ),
                code="model_unavailable",
            )

        if request.prompt.instructions:
            return fm.LanguageModelSession(instructions=request.prompt.instructions, model=model)

        return fm.LanguageModelSession(model=model)


def create_backend(settings: "Settings") -> GenerationBackend:
    if settings.model_provider == "apple":
        return AppleFoundationBackend()
    return GeminiBackend(model=settings.gemini_model, api_key=settings.gemini_api_key)


class ModelInvoker:
    """Sends resolved prompts to a backend and returns tagged responses.

    Backend failures come out as ``ModelInvocationError``; blank output comes
    out as ``EmptyResponseError``.
    """

    def __init__(self, backend: GenerationBackend) -> None:
        self.backend = backend

    async def invoke(self, request: ModelRequest) -> ModelResponse:
        prompt = request.prompt
        logger.debug(
            "Invoking %s backend for %s/%s (structured=%s)",
            self.backend.name,
            prompt.feature.value,
            prompt.style,
            request.structured,
        )

        try:
            content = await self.backend.generate(request)
        except Exception as exc:
            raise map_model_error(exc) from exc

        text = "" if content is None else str(content)
        if not text.strip():
            raise EmptyResponseError(feature=prompt.feature.value, style=prompt.style)

        if not request.structured:
            return ModelResponse(feature=prompt.feature, style=prompt.style, text=text)

        return ModelResponse(
            feature=prompt.feature,
            style=prompt.style,
            data=_parse_json_object(text),
        )


def _parse_json_object(text: str) -> dict[str, Any]:
    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as exc:
        raise ModelInvocationError(
            message=f"Model returned invalid JSON: {exc.msg}",
            code="invalid_json",
            cause=exc,
        ) from exc

    if not isinstance(data, dict):
        raise ModelInvocationError(
            message=f"Model returned a JSON {type(data).__name__}, expected an object.",
            code="invalid_json",
        )

    return data


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```"):
        stripped = stripped[3:-3]
        if stripped.startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()


def map_model_error(exc: Exception) -> ModelInvocationError:
    """Map backend exceptions to ``ModelInvocationError`` with a stable code."""

    if isinstance(exc, ModelInvocationError):
        return exc

    message = str(exc) or type(exc).__name__
    cause = exc.__cause__
    details = getattr(exc, "details", None)

    if HAS_GOOGLE_GENAI and isinstance(exc, genai_errors.APIError):
        status = getattr(exc, "code", None)
        if status == 429:
            code = "rate_limited"
        elif status is not None and status >= 500:
            code = "server_error"
        else:
            code = "invalid_request"
        return ModelInvocationError(
            message=getattr(exc, "message", None) or message,
            code=code,
            cause=cause,
            details=details,
        )

    if HAS_APPLE_FM_SDK and isinstance(exc, fm.ExceededContextWindowSizeError):
        return ModelInvocationError(message, "context_length_exceeded", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(exc, fm.InvalidGenerationSchemaError):
        return ModelInvocationError(message, "invalid_json_schema", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(
        exc, (fm.UnsupportedGuideError, fm.UnsupportedLanguageOrLocaleError)
    ):
        return ModelInvocationError(message, "unsupported_parameter", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(
        exc, (fm.GuardrailViolationError, fm.RefusalError)
    ):
        return ModelInvocationError(message, "content_policy_violation", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(
        exc, (fm.RateLimitedError, fm.ConcurrentRequestsError)
    ):
        return ModelInvocationError(message, "rate_limited", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(exc, fm.AssetsUnavailableError):
        return ModelInvocationError(message, "model_unavailable", cause, details)

    if HAS_APPLE_FM_SDK and isinstance(
        exc, (fm.GenerationError, fm.FoundationModelsError)
    ):
        return ModelInvocationError(message, "generation_error", cause, details)

    return ModelInvocationError(message, "internal_error", cause, details)
