"""Mapping logic from validated extraction items to :class:`WardrobeRecord`."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from models.extraction import ValidatedItem
from models.wardrobe_record import WardrobeRecord

logger = logging.getLogger(__name__)

_ITEM_ID_RE = re.compile(r"^.+#[1-9][0-9]*$")
_WORD_START_RE = re.compile(r"(^|\s)(\S)")


def fallback_item_id(image_reference: str, index: int) -> str:
    """Synthesize ``<imageReference>#<index>`` for a 1-based position."""

    if index < 1:
        raise ValueError("Item index is 1-based")
    return f"{image_reference}#{index}"


def resolve_item_id(item_id: Optional[str], image_reference: str, index: int) -> str:
    """Keep a well-formed provider id, otherwise synthesize one from the position.

    Validation already requires an ``id`` key, so in a pipeline run this only
    replaces empty or malformed ids; ``None`` is handled for direct callers.
    """

    candidate = (item_id or "").strip()
    if candidate and _ITEM_ID_RE.match(candidate):
        return candidate
    logger.debug("Synthesizing item id", extra={"index": index})
    return fallback_item_id(image_reference, index)


def derive_display_name(color_name: str, material_family: str, subcategory: str) -> str:
    """Join the non-empty parts and capitalise the first letter of each word.

    Words are space separated, so ``t-shirt`` becomes ``T-shirt`` and not
    ``T-Shirt``.
    """

    parts = [part.strip() for part in (color_name, material_family, subcategory) if part and part.strip()]
    return _WORD_START_RE.sub(lambda match: match.group(1) + match.group(2).upper(), " ".join(parts))


def map_validated_item_to_record(
    item: ValidatedItem,
    owner_id: str,
    image_reference: str,
    index: int,
    now: Optional[datetime] = None,
) -> WardrobeRecord:
    """Map an accepted item into a pre-commit :class:`WardrobeRecord`.

    Pure: performs no I/O. ``index`` is the item's 1-based position among the
    accepted items and is only used when the item's own id is unusable.
    """

    timestamp = now or datetime.now(timezone.utc)
    return WardrobeRecord(
        owner_id=owner_id,
        name=derive_display_name(item.color_name, item.material_family, item.subcategory),
        category=item.category,
        subcategory=item.subcategory,
        color_name=item.color_name,
        color_hex=item.color_hex,
        secondary_colors=tuple(item.secondary_colors),
        pattern=item.pattern,
        material_family=item.material_family,
        fit=item.fit,
        length=item.length,
        rise=item.rise,
        sleeve=item.sleeve,
        neckline=item.neckline,
        dominant_finish=item.dominant_finish,
        brand_text=item.brand_text,
        notes=item.notes,
        confidence=item.confidence,
        image_reference=image_reference,
        source_item_id=resolve_item_id(item.item_id, image_reference, index),
        created_at=timestamp,
        updated_at=timestamp,
    )


__all__ = [
    "derive_display_name",
    "fallback_item_id",
    "map_validated_item_to_record",
    "resolve_item_id",
]
