"""Confidence-based partitioning of validated extraction items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from models.extraction import ValidatedItem

DEFAULT_CONFIDENCE_THRESHOLD = 0.3


@dataclass
class FilterResult:
    """Accepted and rejected items plus the warnings to report."""

    accepted: List[ValidatedItem] = field(default_factory=list)
    rejected: List[ValidatedItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def low_confidence_warning(count: int) -> str:
    return f"{count} items had low confidence and were excluded"


def filter_by_confidence(
    items: Sequence[ValidatedItem],
    warnings: Sequence[str] = (),
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> FilterResult:
    """Split items into accepted (``confidence >= threshold``) and rejected.

    Order is preserved in both lists. A single summary warning is appended
    when anything was rejected; the input warnings are not modified.
    """

    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Confidence threshold must be within [0, 1], got {threshold}")

    result = FilterResult(warnings=list(warnings))
    for item in items:
        if item.confidence >= threshold:
            result.accepted.append(item)
        else:
            result.rejected.append(item)

    if result.rejected:
        result.warnings.append(low_confidence_warning(len(result.rejected)))
    return result


__all__ = [
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "FilterResult",
    "filter_by_confidence",
    "low_confidence_warning",
]
