"""Result type returned by an ingestion run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.wardrobe_record import WardrobeRecord


@dataclass
class IngestionOutcome:
    """Success flag, committed records and warnings for one ingestion run."""

    success: bool
    records: List[WardrobeRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None
    retryable: bool = False

    @classmethod
    def succeeded(cls, records: List[WardrobeRecord], warnings: List[str]) -> "IngestionOutcome":
        return cls(success=True, records=list(records), warnings=list(warnings))

    @classmethod
    def failed(cls, error: str, retryable: bool = False) -> "IngestionOutcome":
        return cls(success=False, error=error, retryable=retryable)

    def to_dict(self) -> Dict[str, Any]:
        """Render the outbound result shape handed to the HTTP boundary."""

        payload: Dict[str, Any] = {
            "success": self.success,
            "records": [record.to_document() for record in self.records],
            "warnings": list(self.warnings),
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


__all__ = ["IngestionOutcome"]
