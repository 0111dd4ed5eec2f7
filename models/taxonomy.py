"""Canonical taxonomy definitions for garment extraction.

The extraction schema, the system instruction and the response validator all
read their closed value sets from here.
"""

from typing import Dict, List, Literal, Tuple, get_args

Category = Literal["top", "bottom", "dress", "outerwear", "shoes", "bag", "accessory", "other"]
Pattern = Literal["solid", "stripe", "check", "floral", "dots", "graphic", "logo", "camo", "other"]
MaterialFamily = Literal[
    "cotton", "denim", "wool", "cashmere", "silk", "linen", "leather", "synthetic", "blend", "other"
]
Fit = Literal["skinny", "slim", "regular", "relaxed", "oversized", "tailored", "unknown"]
Length = Literal["crop", "short", "midi", "ankle", "full", "unknown"]
Rise = Literal["low", "mid", "high", "na"]
Sleeve = Literal["sleeveless", "short", "three-quarter", "long", "na"]
Neckline = Literal["crew", "v-neck", "buttoned", "collared", "scoop", "turtleneck", "na"]
DominantFinish = Literal[
    "matte", "sheen", "satin", "gloss", "suede", "distressed", "quilted", "ribbed", "cable", "none"
]

CATEGORIES: Tuple[str, ...] = get_args(Category)
PATTERNS: Tuple[str, ...] = get_args(Pattern)
MATERIAL_FAMILIES: Tuple[str, ...] = get_args(MaterialFamily)
FITS: Tuple[str, ...] = get_args(Fit)
LENGTHS: Tuple[str, ...] = get_args(Length)
RISES: Tuple[str, ...] = get_args(Rise)
SLEEVES: Tuple[str, ...] = get_args(Sleeve)
NECKLINES: Tuple[str, ...] = get_args(Neckline)
DOMINANT_FINISHES: Tuple[str, ...] = get_args(DominantFinish)

# Documented vocabulary only; the validator does not enforce it.
SUBCATEGORIES: Dict[str, List[str]] = {
    "top": ["t-shirt", "polo", "shirt", "tank", "sweatshirt", "hoodie", "blouse"],
    "bottom": ["jeans", "trousers", "shorts", "skirt"],
    "dress": ["midi-dress", "mini-dress", "maxi-dress", "jumpsuit"],
    "outerwear": ["blazer", "coat", "jacket", "cardigan", "gilet"],
    "shoes": ["sneakers", "boots", "heels", "flats", "loafers", "sandals"],
    "bag": ["tote", "crossbody", "backpack", "clutch"],
    "accessory": ["belt", "hat", "scarf", "watch", "jewelry", "sunglasses"],
    "other": ["other"],
}

# Enum-valued item fields keyed by their wire name.
ENUM_FIELDS: Dict[str, Tuple[str, ...]] = {
    "category": CATEGORIES,
    "pattern": PATTERNS,
    "materialFamily": MATERIAL_FAMILIES,
    "fit": FITS,
    "length": LENGTHS,
    "rise": RISES,
    "sleeve": SLEEVES,
    "neckline": NECKLINES,
    "dominantFinish": DOMINANT_FINISHES,
}

HEX_COLOR_PATTERN = r"^#([0-9A-Fa-f]{6})$"

DEFAULT_STYLE = "casual"
DEFAULT_OCCASIONS: Tuple[str, ...] = ("casual",)
DEFAULT_SEASONS: Tuple[str, ...] = ("all",)


def is_known_subcategory(category: str, value: str) -> bool:
    """Return whether ``value`` is part of the documented vocabulary for ``category``."""

    return value.strip().lower() in SUBCATEGORIES.get(category, [])


__all__ = [
    "Category",
    "Pattern",
    "MaterialFamily",
    "Fit",
    "Length",
    "Rise",
    "Sleeve",
    "Neckline",
    "DominantFinish",
    "CATEGORIES",
    "PATTERNS",
    "MATERIAL_FAMILIES",
    "FITS",
    "LENGTHS",
    "RISES",
    "SLEEVES",
    "NECKLINES",
    "DOMINANT_FINISHES",
    "SUBCATEGORIES",
    "ENUM_FIELDS",
    "HEX_COLOR_PATTERN",
    "DEFAULT_STYLE",
    "DEFAULT_OCCASIONS",
    "DEFAULT_SEASONS",
    "is_known_subcategory",
]
