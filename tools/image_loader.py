"""Resolve image references to inline bytes the provider can consume."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from logic.errors import ImageResolutionError
from tools.observability import instrument_tool

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}


@dataclass(frozen=True)
class ImagePayload:
    """Image bytes plus the MIME type sent alongside them."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE


def _normalise_mime_type(raw: Optional[str]) -> str:
    mime_type = (raw or "").split(";", 1)[0].strip().lower()
    return mime_type if mime_type in ALLOWED_MIME_TYPES else DEFAULT_MIME_TYPE


def _from_data_url(reference: str) -> ImagePayload:
    header, _, encoded = reference.partition(",")
    if not encoded or ";base64" not in header:
        raise ImageResolutionError("Only base64 data URLs are supported")
    try:
        data = base64.b64decode(encoded, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise ImageResolutionError("Data URL does not contain valid base64") from exc
    return ImagePayload(data=data, mime_type=_normalise_mime_type(header[5:]))


def _from_http(reference: str, timeout: Optional[float]) -> ImagePayload:
    try:
        response = requests.get(reference, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Network error fetching image", extra={"error": str(exc)})
        raise ImageResolutionError(f"Network error fetching image: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.warning(
            "Non-success status when fetching image", extra={"status_code": response.status_code}
        )
        raise ImageResolutionError(f"Failed to fetch image: HTTP {response.status_code}")

    mime_type = _normalise_mime_type(response.headers.get("Content-Type"))
    return ImagePayload(data=response.content, mime_type=mime_type)


def _from_path(reference: str) -> ImagePayload:
    path = Path(reference[len("file://"):] if reference.startswith("file://") else reference)
    if not path.is_file():
        raise ImageResolutionError(f"Image file not found: {path}")
    guessed, _ = mimetypes.guess_type(path.name)
    return ImagePayload(data=path.read_bytes(), mime_type=_normalise_mime_type(guessed))


@instrument_tool("resolve_image")
def resolve_image(
    reference: str, timeout: Optional[float] = 10.0, allow_local: bool = False
) -> ImagePayload:
    """Turn an image reference into inline bytes.

    Args:
        reference: HTTP(S) URL or ``data:`` URL; ``file://`` URLs and local
            paths only when ``allow_local`` is set.
        timeout: Network timeout in seconds for HTTP references.
        allow_local: Read from the local filesystem. Only trusted callers
            such as the command line should enable this.

    Raises:
        ImageResolutionError: If the reference cannot be read, is empty or
            points at the local filesystem without ``allow_local``.
    """

    if not reference or not reference.strip():
        raise ImageResolutionError("Image reference is empty")

    scheme = urlparse(reference).scheme
    if reference.startswith("data:"):
        payload = _from_data_url(reference)
    elif scheme in {"http", "https"}:
        payload = _from_http(reference, timeout)
    elif allow_local:
        payload = _from_path(reference)
    else:
        raise ImageResolutionError("Image reference must be an http(s) or data URL")

    if not payload.data:
        raise ImageResolutionError("Resolved image is empty")

    logger.debug(
        "Resolved image reference",
        extra={"mime_type": payload.mime_type, "length": len(payload.data)},
    )
    return payload


__all__ = ["ImagePayload", "ImageResolutionError", "resolve_image"]
