"""Shared fixtures for the wardrobe ingestion tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import pytest

from logic.request_builder import InferenceRequest
from tools.image_loader import ImagePayload
from tools.inference_provider import InferenceProvider


def _raw_item(index: int = 1, image_reference: str = "img1", **overrides: Any) -> Dict[str, Any]:
    """Return a well-formed provider item for ``image_reference``."""

    item: Dict[str, Any] = {
        "id": f"{image_reference}#{index}",
        "category": "top",
        "subcategory": "t-shirt",
        "colorName": "navy",
        "colorHex": "#1F2A44",
        "secondaryColors": ["white"],
        "pattern": "solid",
        "materialFamily": "cotton",
        "fit": "regular",
        "length": "unknown",
        "rise": "na",
        "sleeve": "short",
        "neckline": "crew",
        "dominantFinish": "matte",
        "confidence": 0.9,
    }
    item.update(overrides)
    return item


def _response_text(items: List[Dict[str, Any]], warnings: Optional[List[str]] = None) -> str:
    return json.dumps({"items": items, "warnings": warnings or []})


class FakeProvider(InferenceProvider):
    """Returns canned text and records every request it receives."""

    def __init__(self, text: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.requests: List[InferenceRequest] = []

    def generate(self, request: InferenceRequest, timeout: Optional[float] = None) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture()
def raw_item() -> Callable[..., Dict[str, Any]]:
    return _raw_item


@pytest.fixture()
def response_text() -> Callable[..., str]:
    return _response_text


@pytest.fixture()
def fake_provider() -> type:
    return FakeProvider


@pytest.fixture()
def static_image() -> Callable[..., ImagePayload]:
    def _resolve(reference: str, timeout: Optional[float] = None) -> ImagePayload:  # noqa: ARG001
        return ImagePayload(data=b"\xff\xd8\xff-fake-jpeg", mime_type="image/jpeg")

    return _resolve
