"""Pydantic contracts for the inbound request and the provider's extraction output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ingest_app.logging_config import get_logger, log_event
from logic.errors import (
    InputError,
    InvalidItemDataError,
    InvalidResponseShapeError,
    MalformedResponseError,
)
from models.extraction import ExtractionItem, ValidatedResponse
from models.taxonomy import is_known_subcategory

LOGGER = get_logger(__name__)

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class IngestRequest(BaseModel):
    """Inbound request handed over by the HTTP boundary."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    owner_id: str = Field(min_length=1, alias="ownerId")
    image_reference: str = Field(min_length=1, alias="imageReference")


def parse_ingest_request(owner_id: Any, image_reference: Any) -> IngestRequest:
    """Validate caller input, converting schema errors into :class:`InputError`."""

    try:
        return IngestRequest.model_validate({"ownerId": owner_id, "imageReference": image_reference})
    except ValidationError as exc:
        fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        raise InputError(f"Invalid ingest request: missing or empty {', '.join(fields)}") from exc


def _strip_code_fence(raw_text: str) -> str:
    text = raw_text.strip()
    match = _CODE_FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def _parse_json(raw_text: str | None) -> Any:
    text = _strip_code_fence(raw_text or "")
    if not text:
        return {"items": [], "warnings": []}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Provider returned unparseable JSON: {exc.msg}") from exc


def _summarise_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "reason": error["msg"]}
        for error in exc.errors()
    ]


def validate_response(raw_text: str | None) -> ValidatedResponse:
    """Parse provider text and verify it against the extraction schema.

    Any single invalid item rejects the entire response; a partially
    hallucinated batch is never handed downstream.

    Raises:
        MalformedResponseError: The text is not JSON.
        InvalidResponseShapeError: ``items`` is missing or not a list, or
            ``warnings`` is present but not a list of strings.
        InvalidItemDataError: An item is missing a mandatory field, carries
            an unknown enum value, a malformed hex color or an out-of-range
            confidence.
    """

    parsed = _parse_json(raw_text)
    if not isinstance(parsed, dict):
        raise InvalidResponseShapeError("Invalid response shape: expected a JSON object")

    raw_items = parsed.get("items")
    if not isinstance(raw_items, list):
        raise InvalidResponseShapeError("Invalid response shape: 'items' must be a list")

    raw_warnings = parsed.get("warnings")
    if raw_warnings is None:
        raw_warnings = []
    if not isinstance(raw_warnings, list) or not all(isinstance(w, str) for w in raw_warnings):
        raise InvalidResponseShapeError("Invalid response shape: 'warnings' must be a list of strings")

    items: List[ExtractionItem] = []
    for index, raw_item in enumerate(raw_items, start=1):
        if not isinstance(raw_item, dict):
            raise InvalidItemDataError(f"Invalid item data at position {index}: not an object", index=index)
        try:
            item = ExtractionItem.model_validate(raw_item)
        except ValidationError as exc:
            errors = _summarise_errors(exc)
            log_event(
                LOGGER,
                logging.ERROR,
                "extraction_contract_violation",
                index=index,
                errors=errors,
            )
            failed = ", ".join(error["field"] for error in errors)
            raise InvalidItemDataError(
                f"Invalid item data at position {index}: {failed}", index=index, errors=errors
            ) from exc

        if not is_known_subcategory(item.category, item.subcategory):
            log_event(
                LOGGER,
                logging.DEBUG,
                "undocumented_subcategory",
                category=item.category,
                subcategory=item.subcategory,
            )
        items.append(item)

    return ValidatedResponse(items=tuple(items), warnings=tuple(raw_warnings))


__all__ = ["IngestRequest", "parse_ingest_request", "validate_response"]
