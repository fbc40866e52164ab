from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from cognimap.config import Settings
from cognimap.dependencies import get_remote_config, get_settings
from cognimap.prompts.document import load_document, parse_document, reset_document, save_document
from cognimap.prompts.remote_config import RemoteConfigClient

router = APIRouter(prefix="/internal", tags=["internal"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/prompts")
async def get_prompts(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return load_document(settings.prompts_document_path).model_dump()


@router.put("/prompts")
async def put_prompts(
    payload: Any = Body(...),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    document = parse_document(payload)
    save_document(settings.prompts_document_path, document)
    return document.model_dump()


@router.delete("/prompts")
async def delete_prompts(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return reset_document(settings.prompts_document_path).model_dump()


@router.post("/remote-config/refresh")
async def refresh_remote_config(
    remote_config: RemoteConfigClient = Depends(get_remote_config),
) -> dict[str, Any]:
    activated = await remote_config.fetch_and_activate(force=True)
    return {
        "enabled": remote_config.enabled,
        "activated": activated,
        "keys": sorted(remote_config.values),
    }
