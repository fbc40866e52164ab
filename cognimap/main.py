from __future__ import annotations

from fastapi import FastAPI

from cognimap.cognition.web_search import WebSearchService
from cognimap.config import Settings, configure_logging, get_settings
from cognimap.core.generation import GenerationBackend, ModelInvoker, create_backend
from cognimap.core.pipeline import ActionRunner
from cognimap.dependencies import register_exception_handlers
from cognimap.internal import admin
from cognimap.prompts.remote_config import RemoteConfigClient
from cognimap.prompts.resolver import TemplateResolver
from cognimap.routers import analysis, personas, reformulation, research


def create_app(
    settings: Settings | None = None,
    *,
    backend: GenerationBackend | None = None,
    remote_config: RemoteConfigClient | None = None,
    web_search: WebSearchService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="cognimap",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
    )

    resolver = TemplateResolver(remote_config or RemoteConfigClient.from_settings(settings))
    invoker = ModelInvoker(backend or create_backend(settings))

    app.state.settings = settings
    app.state.runner = ActionRunner(resolver, invoker, max_input_chars=settings.max_input_chars)
    app.state.web_search = web_search or WebSearchService.from_settings(settings)

    register_exception_handlers(app)

    app.include_router(analysis.router)
    app.include_router(reformulation.router)
    app.include_router(research.router)
    app.include_router(personas.router)
    app.include_router(admin.router)

    return app


app = create_app()
