"""Wardrobe record data model and its derived legacy view."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from models.taxonomy import DEFAULT_OCCASIONS, DEFAULT_SEASONS, DEFAULT_STYLE


@dataclass(frozen=True)
class LegacyView:
    """Flattened fields kept for consumers that predate detailed analysis."""

    colors: Tuple[str, ...]
    materials: Tuple[str, ...]
    patterns: Tuple[str, ...]
    style: str = DEFAULT_STYLE
    occasion: Tuple[str, ...] = DEFAULT_OCCASIONS
    season: Tuple[str, ...] = DEFAULT_SEASONS
    brand: Optional[str] = None


@dataclass(frozen=True)
class WardrobeRecord:
    """A garment owned by a user, as stored in the wardrobe collection.

    ``record_id`` stays ``None`` until the persistence committer attaches the
    identifier generated by the document store.
    """

    owner_id: str
    name: str
    category: str
    subcategory: str
    color_name: str
    color_hex: str
    pattern: str
    material_family: str
    confidence: float
    image_reference: str
    created_at: datetime
    updated_at: datetime
    source_item_id: str
    secondary_colors: Tuple[str, ...] = field(default_factory=tuple)
    fit: Optional[str] = None
    length: Optional[str] = None
    rise: Optional[str] = None
    sleeve: Optional[str] = None
    neckline: Optional[str] = None
    dominant_finish: Optional[str] = None
    brand_text: Optional[str] = None
    notes: Optional[str] = None
    record_id: Optional[str] = None

    @property
    def legacy(self) -> LegacyView:
        return LegacyView(
            colors=(self.color_name, *self.secondary_colors),
            materials=(self.material_family,),
            patterns=(self.pattern,),
            brand=self.brand_text,
        )

    def to_document(self) -> Dict[str, Any]:
        """Serialise the record into the document shape stored in the wardrobe collection."""

        legacy = self.legacy
        return {
            "id": self.record_id,
            "userId": self.owner_id,
            "name": self.name,
            "category": self.category,
            "subcategory": self.subcategory,
            "colorName": self.color_name,
            "colorHex": self.color_hex,
            "secondaryColors": list(self.secondary_colors),
            "pattern": self.pattern,
            "materialFamily": self.material_family,
            "fit": self.fit,
            "length": self.length,
            "rise": self.rise,
            "sleeve": self.sleeve,
            "neckline": self.neckline,
            "dominantFinish": self.dominant_finish,
            "brandText": self.brand_text,
            "notes": self.notes,
            "confidence": self.confidence,
            "sourceItemId": self.source_item_id,
            "colors": list(legacy.colors),
            "materials": list(legacy.materials),
            "patterns": list(legacy.patterns),
            "style": legacy.style,
            "occasion": list(legacy.occasion),
            "season": list(legacy.season),
            "brand": legacy.brand,
            "imageUrl": self.image_reference,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


def from_document(document: Dict[str, Any]) -> WardrobeRecord:
    """Rebuild a :class:`WardrobeRecord` from a stored wardrobe document.

    Legacy fields in the document are ignored; they are recomputed from the
    detailed attributes.
    """

    required_fields = ["id", "userId", "category", "pattern", "materialFamily", "createdAt", "updatedAt"]
    missing = [name for name in required_fields if not document.get(name)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeRecord: {missing}")

    return WardrobeRecord(
        record_id=str(document["id"]),
        owner_id=str(document["userId"]),
        name=str(document.get("name") or ""),
        category=str(document["category"]),
        subcategory=str(document.get("subcategory") or ""),
        color_name=str(document.get("colorName") or ""),
        color_hex=str(document.get("colorHex") or ""),
        secondary_colors=tuple(document.get("secondaryColors") or ()),
        pattern=str(document["pattern"]),
        material_family=str(document["materialFamily"]),
        fit=document.get("fit"),
        length=document.get("length"),
        rise=document.get("rise"),
        sleeve=document.get("sleeve"),
        neckline=document.get("neckline"),
        dominant_finish=document.get("dominantFinish"),
        brand_text=document.get("brandText"),
        notes=document.get("notes"),
        confidence=float(document.get("confidence", 0.0)),
        source_item_id=str(document.get("sourceItemId") or ""),
        image_reference=str(document.get("imageUrl") or ""),
        created_at=datetime.fromisoformat(document["createdAt"]),
        updated_at=datetime.fromisoformat(document["updatedAt"]),
    )


__all__ = ["LegacyView", "WardrobeRecord", "from_document"]
