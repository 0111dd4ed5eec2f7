"""Structural contract for one batch extraction result.

``INGESTION_RESULT_SCHEMA`` is the canonical description. The provider gets a
trimmed copy through :func:`provider_schema` because Gemini's
``response_schema`` only understands a subset of JSON Schema; the keywords it
drops are re-checked by :mod:`logic.validation`.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from models.taxonomy import ENUM_FIELDS, HEX_COLOR_PATTERN

REQUIRED_ITEM_FIELDS: List[str] = [
    "id",
    "category",
    "subcategory",
    "colorName",
    "colorHex",
    "pattern",
    "materialFamily",
    "confidence",
]

OPTIONAL_ITEM_FIELDS: List[str] = [
    "secondaryColors",
    "fit",
    "length",
    "rise",
    "sleeve",
    "neckline",
    "dominantFinish",
    "brandText",
    "notes",
]

_UNSUPPORTED_PROVIDER_KEYWORDS = {"pattern", "minimum", "maximum"}


def _enum(field_name: str) -> Dict[str, Any]:
    return {"type": "string", "enum": list(ENUM_FIELDS[field_name])}


INGESTION_RESULT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["items", "warnings"],
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "required": list(REQUIRED_ITEM_FIELDS),
                "properties": {
                    "id": {"type": "string"},
                    "category": _enum("category"),
                    "subcategory": {"type": "string"},
                    "colorName": {"type": "string"},
                    "colorHex": {"type": "string", "pattern": HEX_COLOR_PATTERN},
                    "secondaryColors": {"type": "array", "items": {"type": "string"}},
                    "pattern": _enum("pattern"),
                    "materialFamily": _enum("materialFamily"),
                    "fit": _enum("fit"),
                    "length": _enum("length"),
                    "rise": _enum("rise"),
                    "sleeve": _enum("sleeve"),
                    "neckline": _enum("neckline"),
                    "dominantFinish": _enum("dominantFinish"),
                    "brandText": {"type": "string"},
                    "notes": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0, "maximum": 1},
                },
            },
        },
        "warnings": {"type": "array", "items": {"type": "string"}},
    },
}


def _strip_for_provider(node: Any) -> Any:
    if isinstance(node, list):
        return [_strip_for_provider(value) for value in node]
    if not isinstance(node, dict):
        return node

    stripped: Dict[str, Any] = {}
    for key, value in node.items():
        if key in _UNSUPPORTED_PROVIDER_KEYWORDS:
            continue
        if key == "type" and isinstance(value, str):
            stripped[key] = value.upper()
        elif key == "properties":
            stripped[key] = {name: _strip_for_provider(spec) for name, spec in value.items()}
        else:
            stripped[key] = _strip_for_provider(value)
    return stripped


def provider_schema() -> Dict[str, Any]:
    """Return the subset of the schema accepted as a Gemini generation constraint."""

    return _strip_for_provider(copy.deepcopy(INGESTION_RESULT_SCHEMA))


__all__ = [
    "INGESTION_RESULT_SCHEMA",
    "REQUIRED_ITEM_FIELDS",
    "OPTIONAL_ITEM_FIELDS",
    "provider_schema",
]
