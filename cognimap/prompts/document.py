"""
Human-editable JSON mirror of the default templates.

The document is an editing convenience for the admin surface: it is loaded and
saved here but never consulted by the resolver.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel, ValidationError

from cognimap.core.errors import PromptDocumentError

from .defaults import DEFAULT_PROMPTS

logger = logging.getLogger(__name__)


class PromptDetail(BaseModel):
    name: str
    description: str = ""
    prompt: str

    model_config = ConfigDict(extra="allow")


class PromptDocument(RootModel[dict[str, PromptDetail]]):
    pass


def default_document() -> PromptDocument:
    details: dict[str, PromptDetail] = {}
    for key, prompt in DEFAULT_PROMPTS.items():
        parts = key.removesuffix("_PROMPT").split("_")
        feature, role = parts[0].lower(), parts[-1].lower()
        style = "_".join(parts[1:-1]).lower()
        details[key] = PromptDetail(
            name=f"{feature} / {style} ({role})",
            description=f"{role.capitalize()} template of the '{style}' {feature} prompt.",
            prompt=prompt,
        )
    return PromptDocument(details)


def load_document(path: Path) -> PromptDocument:
    if not path.exists():
        return default_document()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PromptDocumentError(
            status_code=500,
            message=f"Unable to read prompt document {path}: {exc}",
            code="document_unreadable",
        ) from exc

    return parse_document(raw)


def parse_document(raw: Any) -> PromptDocument:
    try:
        return PromptDocument.model_validate(raw)
    except ValidationError as exc:
        first_error = exc.errors()[0]["msg"] if exc.errors() else "Invalid prompt document"
        raise PromptDocumentError(
            status_code=400,
            message=first_error,
            code="invalid_document",
        ) from exc


def save_document(path: Path, document: PromptDocument) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(document.model_dump(), ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise PromptDocumentError(
            status_code=500,
            message=f"Unable to write prompt document {path}: {exc}",
            code="document_unwritable",
        ) from exc

    logger.info("Saved prompt document with %d entries to %s", len(document.root), path)


def reset_document(path: Path) -> PromptDocument:
    path.unlink(missing_ok=True)
    return default_document()
