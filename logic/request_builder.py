"""Assemble the instruction payload for one garment extraction call."""

from __future__ import annotations

import json
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from logic.prompting import system_instruction
from logic.schema import provider_schema
from tools.image_loader import ImagePayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Exemplar:
    """A few-shot example: an asset image and the output expected for it."""

    filename: str
    expected_output: Dict[str, Any]


DEFAULT_EXEMPLARS: List[Exemplar] = [
    Exemplar(
        filename="studio.jpg",
        expected_output={
            "items": [
                {
                    "id": "example#1",
                    "category": "top",
                    "subcategory": "t-shirt",
                    "colorName": "white",
                    "colorHex": "#F2F2F2",
                    "pattern": "solid",
                    "materialFamily": "cotton",
                    "confidence": 0.99,
                }
            ],
            "warnings": [],
        },
    )
]


@dataclass
class InferenceRequest:
    """Ordered contents plus the output constraint for the provider."""

    contents: List[Dict[str, Any]]
    response_schema: Dict[str, Any] = field(default_factory=provider_schema)


def _text_part(text: str) -> Dict[str, Any]:
    return {"role": "user", "parts": [{"text": text}]}


def _image_part(payload: ImagePayload) -> Dict[str, Any]:
    return {
        "role": "user",
        "parts": [{"inline_data": {"mime_type": payload.mime_type, "data": payload.data}}],
    }


class RequestBuilder:
    """Builds extraction requests, including any exemplar assets that exist."""

    def __init__(
        self,
        exemplar_dir: str | Path | None = "assets",
        exemplars: Optional[Sequence[Exemplar]] = None,
    ) -> None:
        self.exemplar_dir = Path(exemplar_dir) if exemplar_dir else None
        self.exemplars = list(DEFAULT_EXEMPLARS if exemplars is None else exemplars)

    def _load_exemplar(self, exemplar: Exemplar) -> Optional[ImagePayload]:
        if self.exemplar_dir is None:
            return None
        path = self.exemplar_dir / exemplar.filename
        if not path.is_file():
            logger.debug("Skipping missing exemplar asset", extra={"exemplar": exemplar.filename})
            return None
        mime_type, _ = mimetypes.guess_type(path.name)
        return ImagePayload(data=path.read_bytes(), mime_type=mime_type or "image/jpeg")

    def build(self, image: ImagePayload, image_reference: str) -> InferenceRequest:
        """Return the ordered request for ``image``.

        Order: system instruction, exemplar pairs, the target image, then the
        image reference text the model uses to form item ids.
        """

        contents: List[Dict[str, Any]] = [_text_part(system_instruction())]

        for exemplar in self.exemplars:
            payload = self._load_exemplar(exemplar)
            if payload is None:
                continue
            contents.append(_image_part(payload))
            contents.append(_text_part(json.dumps(exemplar.expected_output)))

        contents.append(_image_part(image))
        contents.append(_text_part(f"photoUrl: {image_reference}"))
        return InferenceRequest(contents=contents)


__all__ = ["DEFAULT_EXEMPLARS", "Exemplar", "InferenceRequest", "RequestBuilder"]
