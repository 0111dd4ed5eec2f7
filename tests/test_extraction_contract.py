"""Taxonomy, output schema and extraction item contract tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logic.schema import (
    INGESTION_RESULT_SCHEMA,
    OPTIONAL_ITEM_FIELDS,
    REQUIRED_ITEM_FIELDS,
    provider_schema,
)
from models import taxonomy
from models.extraction import ExtractionItem


def _item_schema(schema: dict) -> dict:
    return schema["properties"]["items"]["items"]


def test_schema_required_fields_match_contract() -> None:
    item_schema = _item_schema(INGESTION_RESULT_SCHEMA)
    assert item_schema["required"] == REQUIRED_ITEM_FIELDS
    assert set(REQUIRED_ITEM_FIELDS).isdisjoint(OPTIONAL_ITEM_FIELDS)
    assert set(item_schema["properties"]) == set(REQUIRED_ITEM_FIELDS) | set(OPTIONAL_ITEM_FIELDS)
    assert INGESTION_RESULT_SCHEMA["required"] == ["items", "warnings"]


def test_schema_enums_come_from_taxonomy() -> None:
    properties = _item_schema(INGESTION_RESULT_SCHEMA)["properties"]
    assert properties["category"]["enum"] == list(taxonomy.CATEGORIES)
    assert properties["materialFamily"]["enum"] == list(taxonomy.MATERIAL_FAMILIES)
    assert properties["rise"]["enum"] == list(taxonomy.RISES)
    assert "unknown" in properties["length"]["enum"]
    assert "other" in properties["category"]["enum"]
    assert properties["colorHex"]["pattern"] == taxonomy.HEX_COLOR_PATTERN


def test_provider_schema_drops_unsupported_keywords() -> None:
    schema = provider_schema()
    properties = _item_schema(schema)["properties"]

    assert schema["type"] == "OBJECT"
    assert properties["colorHex"] == {"type": "STRING"}
    assert properties["confidence"] == {"type": "NUMBER"}
    # A property literally named "pattern" must survive keyword stripping.
    assert properties["pattern"]["enum"] == list(taxonomy.PATTERNS)
    assert INGESTION_RESULT_SCHEMA["properties"]["items"]["items"]["properties"]["colorHex"]["pattern"]


def test_known_subcategories() -> None:
    assert taxonomy.is_known_subcategory("top", "t-shirt")
    assert taxonomy.is_known_subcategory("shoes", "sneakers")
    assert not taxonomy.is_known_subcategory("shoes", "t-shirt")


def test_extraction_item_accepts_wire_names(raw_item) -> None:
    item = ExtractionItem.model_validate(raw_item(brandText="Acme", notes="small logo"))
    assert item.item_id == "img1#1"
    assert item.color_hex == "#1F2A44"
    assert item.secondary_colors == ("white",)
    assert item.material_family == "cotton"
    assert item.brand_text == "Acme"


def test_extraction_item_optional_fields_default(raw_item) -> None:
    payload = raw_item()
    for key in ("secondaryColors", "fit", "length", "rise", "sleeve", "neckline", "dominantFinish"):
        payload.pop(key)
    item = ExtractionItem.model_validate(payload)
    assert item.secondary_colors == ()
    assert item.fit is None
    assert item.brand_text is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"colorHex": "blue"},
        {"colorHex": "#12345"},
        {"colorHex": "#GGGGGG"},
        {"category": "hat"},
        {"pattern": "tartan"},
        {"materialFamily": "kevlar"},
        {"fit": "baggy"},
        {"confidence": 1.2},
        {"confidence": -0.1},
        {"confidence": True},
        {"confidence": "0.9"},
    ],
)
def test_extraction_item_rejects_invalid_values(raw_item, overrides: dict) -> None:
    with pytest.raises(ValidationError):
        ExtractionItem.model_validate(raw_item(**overrides))


@pytest.mark.parametrize("missing", REQUIRED_ITEM_FIELDS)
def test_extraction_item_requires_mandatory_fields(raw_item, missing: str) -> None:
    payload = raw_item()
    payload.pop(missing)
    with pytest.raises(ValidationError):
        ExtractionItem.model_validate(payload)


def test_extraction_item_is_frozen(raw_item) -> None:
    item = ExtractionItem.model_validate(raw_item())
    with pytest.raises(ValidationError):
        item.confidence = 0.1
