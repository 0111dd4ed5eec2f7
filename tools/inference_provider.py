"""Inference provider capability and the Gemini implementation."""

from __future__ import annotations

import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from logic.errors import ProviderError, ProviderTimeoutError
from logic.request_builder import InferenceRequest
from tools.observability import instrument_tool

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class InferenceProvider:
    """Multimodal model that turns an extraction request into raw text."""

    def generate(self, request: InferenceRequest, timeout: Optional[float] = None) -> str:
        raise NotImplementedError


class GeminiInferenceProvider(InferenceProvider):
    """Calls Gemini with structured JSON output constrained by the request schema."""

    def __init__(self, model: str = DEFAULT_GEMINI_MODEL, api_key: Optional[str] = None) -> None:
        self.model_name = model
        if api_key:
            genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model_name=model)

    @instrument_tool("gemini_generate_content")
    def generate(self, request: InferenceRequest, timeout: Optional[float] = None) -> str:
        generation_config = genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=request.response_schema,
        )
        request_options = {"timeout": timeout} if timeout else None
        try:
            response = self._model.generate_content(
                request.contents,
                generation_config=generation_config,
                request_options=request_options,
            )
        except google_exceptions.DeadlineExceeded as exc:
            raise ProviderTimeoutError(f"Inference call timed out after {timeout}s") from exc
        except google_exceptions.GoogleAPIError as exc:
            logger.error("Gemini call failed", extra={"model": self.model_name, "error": str(exc)})
            raise ProviderError(f"Inference call failed: {exc}") from exc

        try:
            return response.text
        except ValueError as exc:
            # Raised when the candidate was blocked or carries no text part.
            raise ProviderError(f"Inference returned no text: {exc}") from exc


__all__ = ["DEFAULT_GEMINI_MODEL", "GeminiInferenceProvider", "InferenceProvider"]
