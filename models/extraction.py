"""Pydantic models for garment extraction results returned by the provider."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.taxonomy import (
    HEX_COLOR_PATTERN,
    Category,
    DominantFinish,
    Fit,
    Length,
    MaterialFamily,
    Neckline,
    Pattern,
    Rise,
    Sleeve,
)


class ExtractionItem(BaseModel):
    """One garment as reported by the provider.

    A successfully constructed instance is a validated item: every enum field
    holds a declared member, the hex color is well formed and the confidence
    is a number in ``[0, 1]``. Instances are frozen so downstream stages can
    share them without copying.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    item_id: str = Field(alias="id")
    category: Category
    subcategory: str
    color_name: str = Field(alias="colorName")
    color_hex: str = Field(alias="colorHex", pattern=HEX_COLOR_PATTERN)
    secondary_colors: Tuple[str, ...] = Field(default=(), alias="secondaryColors")
    pattern: Pattern
    material_family: MaterialFamily = Field(alias="materialFamily")
    fit: Optional[Fit] = None
    length: Optional[Length] = None
    rise: Optional[Rise] = None
    sleeve: Optional[Sleeve] = None
    neckline: Optional[Neckline] = None
    dominant_finish: Optional[DominantFinish] = Field(default=None, alias="dominantFinish")
    brand_text: Optional[str] = Field(default=None, alias="brandText")
    notes: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("confidence", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> Any:
        # bool is an int subclass and numeric strings would otherwise coerce.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("confidence must be a number")
        return value


ValidatedItem = ExtractionItem


class ValidatedResponse(BaseModel):
    """Validated items plus the provider warnings, untouched."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[ExtractionItem, ...] = ()
    warnings: Tuple[str, ...] = ()


__all__ = ["ExtractionItem", "ValidatedItem", "ValidatedResponse"]
