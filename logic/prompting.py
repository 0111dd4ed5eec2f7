"""System instruction sent ahead of every garment extraction request."""

from __future__ import annotations

from typing import List

from models.taxonomy import ENUM_FIELDS, SUBCATEGORIES

EXTRACTION_RULES: List[str] = [
    "If two garments are layered (e.g., tee under blazer), list both as separate items.",
    'Choose the closest enum; if unknown, use "other" (or "unknown"/"na"/"none") and lower confidence.',
    "Always provide both colorName and colorHex (approximate the hex).",
    'Use "logo" pattern only if a logo graphic dominates the front.',
    'Keep "brandText" short (what you can read, not a guess).',
    'IDs must be "<photoUrl>#<index>" starting at 1.',
    "Return JSON only.",
]


def _enum_line(field_name: str) -> str:
    return "|".join(ENUM_FIELDS[field_name])


def _subcategory_lines() -> str:
    return "\n".join(
        f"- {category}: {', '.join(values)}" for category, values in SUBCATEGORIES.items()
    )


def system_instruction() -> str:
    """Compose the extraction instruction from the canonical taxonomy."""

    rules = "\n".join(f"- {rule}" for rule in EXTRACTION_RULES)
    return (
        "You are a wardrobe ingestion engine for single-person photos.\n\n"
        "Goal:\n"
        "- Identify each distinct garment visible on the person and return STRICT JSON only.\n"
        "- Use the provided enums exactly; do not invent new labels.\n"
        '- If unsure about any field, set a lower "confidence" (0-1) and add a short "notes" hint.\n\n'
        "Output contract (JSON only; no prose):\n"
        "{\n"
        '  "items": [\n'
        "    {\n"
        '      "id": "<photoUrl>#<index>",\n'
        f'      "category": "{_enum_line("category")}",\n'
        '      "subcategory": "...(from enum list below)...",\n'
        '      "colorName": "<common name: black, navy, beige, ...>",\n'
        '      "colorHex": "#RRGGBB",\n'
        '      "secondaryColors": ["<optional names>"],\n'
        f'      "pattern": "{_enum_line("pattern")}",\n'
        f'      "materialFamily": "{_enum_line("materialFamily")}",\n'
        f'      "fit": "{_enum_line("fit")}",\n'
        f'      "length": "{_enum_line("length")}",\n'
        f'      "rise": "{_enum_line("rise")}",\n'
        f'      "sleeve": "{_enum_line("sleeve")}",\n'
        f'      "neckline": "{_enum_line("neckline")}",\n'
        f'      "dominantFinish": "{_enum_line("dominantFinish")}",\n'
        '      "brandText": "<short visible word(s) on garment, if any>",\n'
        '      "notes": "<1 short line if you lowered confidence>",\n'
        '      "confidence": 0.0-1.0\n'
        "    }\n"
        "  ],\n"
        '  "warnings": ["<string>", "..."]\n'
        "}\n\n"
        "Category subcategory enum:\n"
        f"{_subcategory_lines()}\n\n"
        "Rules:\n"
        f"{rules}\n"
    )


__all__ = ["EXTRACTION_RULES", "system_instruction"]
