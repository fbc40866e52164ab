from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cognimap.cognition.web_search import WebSearchService
from cognimap.config import Settings
from cognimap.core.errors import PromptDocumentError
from cognimap.core.pipeline import ActionRunner
from cognimap.prompts.remote_config import RemoteConfigClient
from cognimap.prompts.resolver import TemplateResolver


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_runner(request: Request) -> ActionRunner:
    return request.app.state.runner


def get_resolver(request: Request) -> TemplateResolver:
    return request.app.state.runner.resolver


def get_remote_config(request: Request) -> RemoteConfigClient:
    return request.app.state.runner.resolver.remote_config


def get_web_search(request: Request) -> WebSearchService:
    return request.app.state.web_search


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = exc.errors()
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()))
            message = f"{location}: {errors[0]['msg']}" if location else errors[0]["msg"]
        else:
            message = "Invalid request"

        return JSONResponse(
            status_code=400,
            content={
                "error": {
                    "message": message,
                    "type": "invalid_request_error",
                    "code": "invalid_request",
                }
            },
        )

    @app.exception_handler(PromptDocumentError)
    async def handle_prompt_document_error(
        _request: Request,
        exc: PromptDocumentError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_error()},
        )
