"""Confidence filter and record transformer tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from logic.filtering import filter_by_confidence, low_confidence_warning
from models.extraction import ExtractionItem
from models.ingestion_mapping import (
    derive_display_name,
    fallback_item_id,
    map_validated_item_to_record,
    resolve_item_id,
)
from models import taxonomy
from models.wardrobe_record import from_document

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _items(raw_item, *confidences: float) -> list:
    return [
        ExtractionItem.model_validate(raw_item(index=i, confidence=value))
        for i, value in enumerate(confidences, start=1)
    ]


def test_filter_partitions_in_order(raw_item) -> None:
    items = _items(raw_item, 0.9, 0.2, 0.5, 0.1)
    result = filter_by_confidence(items, ["provider note"])

    assert [item.confidence for item in result.accepted] == [0.9, 0.5]
    assert [item.confidence for item in result.rejected] == [0.2, 0.1]
    assert result.warnings == ["provider note", "2 items had low confidence and were excluded"]


def test_filter_accepts_items_at_threshold(raw_item) -> None:
    result = filter_by_confidence(_items(raw_item, 0.3, 0.29), threshold=0.3)
    assert [item.confidence for item in result.accepted] == [0.3]
    assert len(result.rejected) == 1


def test_filter_without_rejections_adds_no_warning(raw_item) -> None:
    warnings = ("keep me",)
    result = filter_by_confidence(_items(raw_item, 0.8, 0.95), warnings)
    assert result.rejected == []
    assert result.warnings == ["keep me"]


def test_filter_empty_input() -> None:
    result = filter_by_confidence([])
    assert result.accepted == [] and result.rejected == [] and result.warnings == []


@pytest.mark.parametrize("threshold", [0.0, 1.0])
def test_filter_threshold_bounds(raw_item, threshold: float) -> None:
    result = filter_by_confidence(_items(raw_item, 0.0, 1.0), threshold=threshold)
    assert len(result.accepted) + len(result.rejected) == 2


@pytest.mark.parametrize("threshold", [-0.01, 1.01])
def test_filter_rejects_invalid_threshold(raw_item, threshold: float) -> None:
    with pytest.raises(ValueError):
        filter_by_confidence(_items(raw_item, 0.5), threshold=threshold)


def test_low_confidence_warning_text() -> None:
    assert low_confidence_warning(1) == "1 items had low confidence and were excluded"


def test_display_name() -> None:
    assert derive_display_name("navy", "cotton", "t-shirt") == "Navy Cotton T-shirt"
    assert derive_display_name("light blue", "denim", "jeans") == "Light Blue Denim Jeans"
    assert derive_display_name("", "leather", "boots") == "Leather Boots"


def test_item_id_resolution() -> None:
    assert fallback_item_id("img1", 3) == "img1#3"
    assert resolve_item_id("img1#2", "img1", 7) == "img1#2"
    assert resolve_item_id("", "img1", 3) == "img1#3"
    assert resolve_item_id("garbage", "img1", 3) == "img1#3"
    assert resolve_item_id("img1#0", "img1", 1) == "img1#1"
    assert resolve_item_id(None, "img1", 2) == "img1#2"
    with pytest.raises(ValueError):
        fallback_item_id("img1", 0)


def test_map_item_to_record(raw_item) -> None:
    item = ExtractionItem.model_validate(
        raw_item(id="", secondaryColors=["white", "red"], brandText="Acme", fit="slim")
    )
    record = map_validated_item_to_record(item, owner_id="user-1", image_reference="img1", index=3, now=NOW)

    assert record.owner_id == "user-1"
    assert record.name == "Navy Cotton T-shirt"
    assert record.source_item_id == "img1#3"
    assert record.record_id is None
    assert record.fit == "slim"
    assert record.category == item.category
    assert record.pattern == item.pattern
    assert record.material_family == item.material_family
    assert record.created_at == record.updated_at == NOW
    assert record.image_reference == "img1"


def test_legacy_view_is_derived(raw_item) -> None:
    item = ExtractionItem.model_validate(raw_item(secondaryColors=["white"], brandText="Acme"))
    record = map_validated_item_to_record(item, "user-1", "img1", 1, now=NOW)
    legacy = record.legacy

    assert legacy.colors == ("navy", "white")
    assert legacy.materials == ("cotton",)
    assert legacy.patterns == ("solid",)
    assert legacy.style == "casual"
    assert legacy.occasion == ("casual",)
    assert legacy.season == ("all",)
    assert legacy.brand == "Acme"


def test_mapping_is_pure(raw_item) -> None:
    item = ExtractionItem.model_validate(raw_item())
    first = map_validated_item_to_record(item, "user-1", "img1", 1, now=NOW)
    second = map_validated_item_to_record(item, "user-1", "img1", 1, now=NOW)
    assert first == second


def test_document_roundtrip_recomputes_legacy(raw_item) -> None:
    item = ExtractionItem.model_validate(raw_item(secondaryColors=["grey"]))
    record = map_validated_item_to_record(item, "user-1", "img1", 1, now=NOW)
    document = {**record.to_document(), "id": "doc-1"}

    assert document["userId"] == "user-1"
    assert document["colors"] == ["navy", "grey"]
    assert document["imageUrl"] == "img1"
    assert document["createdAt"] == NOW.isoformat()

    document["colors"] = ["stale"]
    restored = from_document(document)
    assert restored.record_id == "doc-1"
    assert restored.legacy.colors == ("navy", "grey")
    assert restored.created_at == NOW


def test_from_document_requires_identity() -> None:
    with pytest.raises(ValueError):
        from_document({"userId": "user-1", "category": "top"})


RECORD_ATTRIBUTES = {
    "category": "category",
    "pattern": "pattern",
    "materialFamily": "material_family",
    "fit": "fit",
    "length": "length",
    "rise": "rise",
    "sleeve": "sleeve",
    "neckline": "neckline",
    "dominantFinish": "dominant_finish",
}


@pytest.mark.parametrize(
    "wire_name, value",
    [(wire_name, value) for wire_name, values in taxonomy.ENUM_FIELDS.items() for value in values],
)
def test_every_enum_value_survives_mapping(raw_item, wire_name: str, value: str) -> None:
    item = ExtractionItem.model_validate(raw_item(**{wire_name: value}))
    record = map_validated_item_to_record(item, "user-1", "img1", 1, now=NOW)

    assert getattr(record, RECORD_ATTRIBUTES[wire_name]) == value
    document = {**record.to_document(), "id": "doc-1"}
    assert document[wire_name] == value
    assert getattr(from_document(document), RECORD_ATTRIBUTES[wire_name]) == value


@pytest.mark.parametrize("explicit_null", [False, True])
@pytest.mark.parametrize("wire_name", ["fit", "length", "rise", "sleeve", "neckline", "dominantFinish"])
def test_missing_optional_enum_maps_to_none(raw_item, wire_name: str, explicit_null: bool) -> None:
    payload = raw_item()
    if explicit_null:
        payload[wire_name] = None
    else:
        payload.pop(wire_name)
    record = map_validated_item_to_record(ExtractionItem.model_validate(payload), "user-1", "img1", 1, now=NOW)

    assert getattr(record, RECORD_ATTRIBUTES[wire_name]) is None
    document = {**record.to_document(), "id": "doc-1"}
    assert document[wire_name] is None
    assert getattr(from_document(document), RECORD_ATTRIBUTES[wire_name]) is None
