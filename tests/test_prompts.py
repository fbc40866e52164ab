from __future__ import annotations

import asyncio

import httpx
import pytest

from cognimap.core.errors import PayloadTooLargeError
from cognimap.core.types import Feature, PromptTemplate, TemplateRole
from cognimap.prompts.defaults import DEFAULT_PROMPTS, template_key
from cognimap.prompts.remote_config import RemoteConfigClient, parse_remote_values
from cognimap.prompts.resolver import TemplateResolver
from cognimap.prompts.substitution import ensure_within_limit, render_prompt, substitute


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _remote_client(handler, clock=None, **kwargs) -> RemoteConfigClient:
    return RemoteConfigClient(
        url="https://config.example.test/prompts.json",
        transport=httpx.MockTransport(handler),
        clock=clock or FakeClock(),
        **kwargs,
    )


def test_template_key_is_case_normalized():
    key = template_key(Feature.REFORMULATION, "analytical_rhetoric", TemplateRole.SYSTEM)
    assert key == "REFORMULATION_ANALYTICAL_RHETORIC_SYSTEM_PROMPT"

    key = template_key(Feature.SUMMARY, "Academic", TemplateRole.USER)
    assert key == "SUMMARY_ACADEMIC_USER_PROMPT"


def test_every_default_style_resolves_to_non_empty_templates():
    resolver = TemplateResolver(RemoteConfigClient())

    for feature in Feature:
        for style in resolver.styles(feature):
            template = asyncio.run(resolver.resolve(feature, style))
            assert template.user_template.strip(), (feature, style)
            if feature is Feature.RESEARCH:
                assert template.system_template is None
            else:
                assert template.system_template and template.system_template.strip()


def test_styles_lists_reformulation_styles():
    resolver = TemplateResolver(RemoteConfigClient())

    styles = resolver.styles(Feature.REFORMULATION)

    assert "neutral" in styles
    assert "analytical_rhetoric" in styles
    assert "technical_detailed" in styles
    assert resolver.styles(Feature.RESEARCH) == ["contextual", "manipulation"]


def test_unknown_style_yields_placeholder_template():
    resolver = TemplateResolver(RemoteConfigClient())

    template = asyncio.run(resolver.resolve(Feature.REFORMULATION, "pirate"))

    assert "pirate" in template.user_template
    assert "{text}" in template.user_template
    assert "pirate" in template.system_template
    assert "{{language}}" in template.system_template


def test_unknown_feature_is_rejected():
    resolver = TemplateResolver(RemoteConfigClient())

    with pytest.raises(ValueError):
        asyncio.run(resolver.resolve("astrology", "default"))


def test_remote_value_overrides_static_default():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"REFORMULATION_NEUTRAL_USER_PROMPT": "Remote neutral: {text}"},
        )

    resolver = TemplateResolver(_remote_client(handler))

    template = asyncio.run(resolver.resolve(Feature.REFORMULATION, "neutral"))

    assert template.user_template == "Remote neutral: {text}"
    assert template.system_template == DEFAULT_PROMPTS["REFORMULATION_NEUTRAL_SYSTEM_PROMPT"]


def test_empty_remote_value_falls_back_to_default():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"REFORMULATION_NEUTRAL_USER_PROMPT": ""})

    resolver = TemplateResolver(_remote_client(handler))

    template = asyncio.run(resolver.resolve(Feature.REFORMULATION, "neutral"))

    assert template.user_template == DEFAULT_PROMPTS["REFORMULATION_NEUTRAL_USER_PROMPT"]


def test_remote_failure_is_absorbed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    resolver = TemplateResolver(_remote_client(handler))

    template = asyncio.run(resolver.resolve(Feature.SUMMARY, "academic"))

    assert template.user_template == DEFAULT_PROMPTS["SUMMARY_ACADEMIC_USER_PROMPT"]


def test_remote_transport_error_is_absorbed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _remote_client(handler)

    assert asyncio.run(client.fetch_and_activate()) is False
    assert client.get_string("SUMMARY_ACADEMIC_USER_PROMPT") == ""


def test_refresh_respects_minimum_fetch_interval():
    calls = []
    clock = FakeClock()

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"CHAT_PERSONA_USER_PROMPT": f"v{len(calls)} {{text}}"})

    client = _remote_client(handler, clock=clock, min_fetch_interval=60)
    resolver = TemplateResolver(client)

    asyncio.run(resolver.resolve(Feature.CHAT, "persona"))
    asyncio.run(resolver.resolve(Feature.CHAT, "persona"))
    assert len(calls) == 1

    clock.now += 61
    template = asyncio.run(resolver.resolve(Feature.CHAT, "persona"))

    assert len(calls) == 2
    assert template.user_template == "v2 {text}"


def test_failed_refresh_keeps_previous_values():
    responses = iter(
        [
            httpx.Response(200, json={"NARRATIVES_PARANOID_USER_PROMPT": "remote {text}"}),
            httpx.Response(500),
        ]
    )
    clock = FakeClock()
    client = _remote_client(lambda request: next(responses), clock=clock, min_fetch_interval=0)

    assert asyncio.run(client.fetch_and_activate()) is True
    assert asyncio.run(client.fetch_and_activate()) is False
    assert client.get_string("NARRATIVES_PARANOID_USER_PROMPT") == "remote {text}"


def test_bearer_token_is_sent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers.get("authorization")
        return httpx.Response(200, json={})

    client = _remote_client(handler, token="secret")
    asyncio.run(client.fetch_and_activate())

    assert seen["authorization"] == "Bearer secret"


def test_firebase_fetch_endpoint_is_used_without_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(
            200,
            json={"entries": {"ANALYSIS_DEFAULT_USER_PROMPT": "fb {text}"}, "state": "UPDATE"},
        )

    client = RemoteConfigClient(
        firebase_project_id="demo-project",
        firebase_api_key="api-key",
        firebase_app_id="1:123:web:abc",
        transport=httpx.MockTransport(handler),
    )

    assert client.enabled
    assert asyncio.run(client.fetch_and_activate()) is True
    assert "projects/demo-project/namespaces/firebase:fetch" in seen["url"]
    assert "key=api-key" in seen["url"]
    assert client.get_string("ANALYSIS_DEFAULT_USER_PROMPT") == "fb {text}"


def test_disabled_client_never_fetches():
    client = RemoteConfigClient()

    assert not client.enabled
    assert asyncio.run(client.fetch_and_activate(force=True)) is False


def test_parse_remote_values_accepts_template_shape():
    payload = {
        "parameters": {
            "SUMMARY_ACADEMIC_SYSTEM_PROMPT": {"defaultValue": {"value": "academic"}},
            "IGNORED": {"defaultValue": {"useInAppDefault": True}},
        }
    }

    assert parse_remote_values(payload) == {"SUMMARY_ACADEMIC_SYSTEM_PROMPT": "academic"}


def test_parse_remote_values_rejects_non_objects():
    with pytest.raises(ValueError):
        parse_remote_values(["not", "an", "object"])


def test_substitute_replaces_every_occurrence():
    result = substitute("{text} / {text}", {"{text}": "abc"})

    assert result == "abc / abc"


def test_substitute_is_single_pass():
    result = substitute("Say {text} in {{language}}", {"{text}": "{{language}}", "{{language}}": "fr"})

    assert result == "Say {{language}} in fr"


def test_substitute_does_not_split_triple_brace_tokens():
    result = substitute("Input: {{{text}}} / {{{query}}}", {"{{{text}}}": "T", "{{{query}}}": "Q"})

    assert result == "Input: T / Q"


def test_substitute_leaves_tokens_without_values():
    assert substitute("Keep {text}", {}) == "Keep {text}"


def test_render_prompt_substitutes_by_role():
    template = PromptTemplate(
        feature=Feature.REFORMULATION,
        style="neutral",
        system_template="Answer in {{language}}. Not {text}.",
        user_template="Rewrite: {text} ({{language}})",
    )

    prompt = render_prompt(template, text="hello", language="en")

    assert prompt.instructions == "Answer in en. Not {text}."
    assert prompt.prompt == "Rewrite: hello ({{language}})"
    assert prompt.feature is Feature.REFORMULATION
    assert prompt.style == "neutral"


def test_ensure_within_limit():
    ensure_within_limit("x" * 10, limit=10)

    with pytest.raises(PayloadTooLargeError) as excinfo:
        ensure_within_limit("x" * 11, limit=10)

    assert excinfo.value.length == 11
    assert excinfo.value.limit == 10


def test_malformed_url_is_absorbed():
    client = RemoteConfigClient(url="http://[::1")
    resolver = TemplateResolver(client)

    assert asyncio.run(client.fetch_and_activate()) is False
    template = asyncio.run(resolver.resolve(Feature.REFORMULATION, "neutral"))

    assert template.user_template == DEFAULT_PROMPTS["REFORMULATION_NEUTRAL_USER_PROMPT"]
