from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from cognimap.config import Settings
from cognimap.core.generation import ModelInvoker
from cognimap.core.pipeline import ActionRunner
from cognimap.main import create_app
from cognimap.prompts.remote_config import RemoteConfigClient
from cognimap.prompts.resolver import TemplateResolver


class StubBackend:
    """Records every request and answers with a canned reply or error."""

    name = "stub"

    def __init__(self, reply=None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, (dict, list)):
            return json.dumps(self.reply)
        return self.reply


@pytest.fixture()
def backend() -> StubBackend:
    return StubBackend(reply="stub completion")


@pytest.fixture()
def remote_config() -> RemoteConfigClient:
    return RemoteConfigClient()


@pytest.fixture()
def runner(backend: StubBackend, remote_config: RemoteConfigClient) -> ActionRunner:
    return ActionRunner(TemplateResolver(remote_config), ModelInvoker(backend))


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        prompts_document_path=tmp_path / "prompts.json",
        perplexity_api_key=None,
        remote_config_url=None,
        firebase_project_id=None,
    )


@pytest.fixture()
def client(settings: Settings, backend: StubBackend, remote_config: RemoteConfigClient) -> TestClient:
    return TestClient(create_app(settings, backend=backend, remote_config=remote_config))
