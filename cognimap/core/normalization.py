"""
Coerces model output and action failures into always-schema-valid results.

Every result model declares a zero value for each of its fields (``[]`` for
arrays, ``""`` for strings, ``0`` for numbers, a zero object for nested
models), so validating a partial or ``null``-riddled payload fills the gaps
instead of failing. Failures become the same result type with a localized
message written into the model's designated message field.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import CognimapError, EmptyResponseError, ModelInvocationError, PayloadTooLargeError
from .i18n import action_failed_message, translate
from .types import ModelResponse

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound="NormalizedResult")


class ResultModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        json_schema_serialization_defaults_required=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class NormalizedResult(ResultModel):
    # Dotted python attribute path of the human-readable field used for failures.
    message_field: ClassVar[str]
    # When False, a successful reply with a blank message field reads as empty.
    blank_message_allowed: ClassVar[bool] = False

    @classmethod
    def output_schema(cls) -> dict[str, Any]:
        return cls.model_json_schema(by_alias=True, mode="serialization")

    @classmethod
    def from_message(
        cls: type[ResultT],
        message: str,
        extra: dict[str, Any] | None = None,
    ) -> ResultT:
        data: dict[str, Any] = copy.deepcopy(extra) if extra else {}
        *parents, leaf = cls.message_field.split(".")

        node = data
        for name in parents:
            child = node.get(name)
            if not isinstance(child, dict):
                child = {}
                node[name] = child
            node = child
        node[leaf] = message

        return cls.model_validate(data)

    @property
    def message(self) -> str:
        value: Any = self
        for name in self.message_field.split("."):
            value = getattr(value, name)
        return value


def normalize(
    result_type: type[ResultT],
    outcome: ModelResponse | CognimapError,
    *,
    language: str | None,
    action: str,
    label: str,
    extra: dict[str, Any] | None = None,
    failure_extra: dict[str, Any] | None = None,
) -> ResultT:
    """Turn a model response or a failure into a ``result_type`` instance.

    ``extra`` holds caller-side fields (for instance the style that was
    applied) merged into every result, success or failure. ``failure_extra``
    is merged into failure results only.
    """

    failure_data = {**(extra or {}), **(failure_extra or {})}

    if isinstance(outcome, PayloadTooLargeError):
        message = translate(
            "payload_too_large",
            language,
            length=outcome.length,
            limit=outcome.limit,
        )
        return result_type.from_message(message, failure_data)

    if isinstance(outcome, EmptyResponseError):
        return result_type.from_message(translate("empty_response", language), failure_data)

    if isinstance(outcome, ModelInvocationError):
        message = action_failed_message(action, label, outcome.message, language)
        return result_type.from_message(message, failure_data)

    if isinstance(outcome, CognimapError):
        message = action_failed_message(action, label, str(outcome), language)
        return result_type.from_message(message, failure_data)

    if outcome.data is not None:
        payload = {**outcome.data, **(extra or {})}
        try:
            result = result_type.model_validate(payload)
        except ValidationError as exc:
            logger.warning(
                "Model output for %s/%s does not match %s: %s",
                outcome.feature.value,
                outcome.style,
                result_type.__name__,
                exc,
            )
            detail = f"invalid model output ({exc.error_count()} validation errors)"
            return result_type.from_message(
                action_failed_message(action, label, detail, language),
                failure_data,
            )

        if not result.blank_message_allowed and not result.message.strip():
            logger.warning(
                "Model output for %s/%s has an empty %s",
                outcome.feature.value,
                outcome.style,
                result_type.message_field,
            )
            # Keep whatever else the model produced.
            return result_type.from_message(
                translate("empty_response", language),
                result.model_dump(),
            )
        return result

    return result_type.from_message(outcome.text or "", extra)
