from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CognimapError(Exception):
    """Base class for failures that actions turn into schema-valid results."""


@dataclass
class ConfigurationError(CognimapError):
    feature: str
    style: str
    key: str

    def __str__(self) -> str:
        return (
            f"No template configured for {self.feature}/{self.style} "
            f"(key={self.key}) in remote config or static defaults."
        )


@dataclass
class PayloadTooLargeError(CognimapError):
    length: int
    limit: int

    def __str__(self) -> str:
        return f"Input text is {self.length} characters long; the limit is {self.limit}."


@dataclass
class ModelInvocationError(CognimapError):
    message: str
    code: str | None = None
    cause: Any = None
    details: Any = None

    def __str__(self) -> str:
        return self.message


@dataclass
class EmptyResponseError(CognimapError):
    feature: str
    style: str

    def __str__(self) -> str:
        return f"The model returned no content for {self.feature}/{self.style}."


@dataclass
class PromptDocumentError(CognimapError):
    status_code: int
    message: str
    code: str | None = None

    def __str__(self) -> str:
        return self.message

    def to_error(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": "invalid_request_error" if self.status_code < 500 else "server_error",
            "code": self.code,
        }
