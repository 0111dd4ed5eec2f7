"""Error taxonomy for the wardrobe ingestion pipeline."""

from __future__ import annotations


class IngestionError(RuntimeError):
    """Base class for every failure an ingestion run can report."""

    retryable = False


class InputError(IngestionError, ValueError):
    """Raised when the caller supplied a missing or unusable owner or image."""


class ImageResolutionError(InputError):
    """Raised when an image reference cannot be resolved to inline bytes."""


class ProviderError(IngestionError):
    """Raised when the inference call fails or returns unusable text."""

    retryable = True


class ProviderTimeoutError(ProviderError):
    """Raised when the inference call exceeds the configured timeout."""


class MalformedResponseError(ProviderError):
    """Raised when the provider output cannot be parsed as JSON."""


class ResponseValidationError(IngestionError):
    """Raised when a parsed response violates the extraction schema."""


class InvalidResponseShapeError(ResponseValidationError):
    """Raised when the top-level response is not ``{items: [...], warnings: [...]}``."""


class InvalidItemDataError(ResponseValidationError):
    """Raised when any single extraction item fails schema validation."""

    def __init__(self, message: str, index: int | None = None, errors: list | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.errors = errors or []


class PersistenceError(IngestionError):
    """Raised when the batch commit fails; nothing was written."""

    retryable = True


class CommitTimeoutError(PersistenceError):
    """Raised when the batch commit exceeds the configured timeout."""


__all__ = [
    "IngestionError",
    "InputError",
    "ImageResolutionError",
    "ProviderError",
    "ProviderTimeoutError",
    "MalformedResponseError",
    "ResponseValidationError",
    "InvalidResponseShapeError",
    "InvalidItemDataError",
    "PersistenceError",
    "CommitTimeoutError",
]
