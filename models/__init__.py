"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.extraction import ExtractionItem, ValidatedItem, ValidatedResponse
from models.outcome import IngestionOutcome
from models.wardrobe_record import LegacyView, WardrobeRecord, from_document

__all__ = [
    "ExtractionItem",
    "IngestionOutcome",
    "LegacyView",
    "ValidatedItem",
    "ValidatedResponse",
    "WardrobeRecord",
    "from_document",
]
