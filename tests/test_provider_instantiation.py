"""Gemini inference provider tests with the model client patched out."""

from __future__ import annotations

from typing import Dict, List

import pytest
from google.api_core import exceptions as google_exceptions

from logic.errors import ProviderError, ProviderTimeoutError
from logic.request_builder import RequestBuilder
from tools.image_loader import ImagePayload
from tools.inference_provider import DEFAULT_GEMINI_MODEL, GeminiInferenceProvider, InferenceProvider


class FakeResponse:
    def __init__(self, text: str | None = None, blocked: bool = False) -> None:
        self._text = text
        self._blocked = blocked

    @property
    def text(self) -> str:
        if self._blocked:
            raise ValueError("The candidate was blocked for SAFETY")
        return self._text


class FakeModel:
    instances: List["FakeModel"] = []

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        self.calls: List[Dict[str, object]] = []
        self.response: object = FakeResponse('{"items": [], "warnings": []}')
        FakeModel.instances.append(self)

    def generate_content(self, contents, generation_config=None, request_options=None):
        self.calls.append(
            {
                "contents": contents,
                "generation_config": generation_config,
                "request_options": request_options,
            }
        )
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture()
def fake_model(monkeypatch: pytest.MonkeyPatch) -> type:
    FakeModel.instances = []
    monkeypatch.setattr("tools.inference_provider.genai.GenerativeModel", FakeModel)
    return FakeModel


def _request():
    image = ImagePayload(data=b"bytes")
    return RequestBuilder(exemplar_dir=None).build(image, "img1")


def test_provider_configures_key_and_model(monkeypatch: pytest.MonkeyPatch, fake_model: type) -> None:
    configured: Dict[str, str] = {}
    monkeypatch.setattr(
        "tools.inference_provider.genai.configure", lambda **kwargs: configured.update(kwargs)
    )

    provider = GeminiInferenceProvider(api_key="secret")

    assert isinstance(provider, InferenceProvider)
    assert configured == {"api_key": "secret"}
    assert fake_model.instances[0].model_name == DEFAULT_GEMINI_MODEL


def test_provider_sends_contents_with_json_constraint(fake_model: type) -> None:
    provider = GeminiInferenceProvider(model="gemini-test")
    request = _request()

    text = provider.generate(request, timeout=12.0)

    call = fake_model.instances[0].calls[0]
    assert text == '{"items": [], "warnings": []}'
    assert call["contents"] == request.contents
    assert call["request_options"] == {"timeout": 12.0}
    config = call["generation_config"]
    assert config.response_mime_type == "application/json"
    assert config.response_schema == request.response_schema


def test_provider_without_timeout_sends_no_request_options(fake_model: type) -> None:
    provider = GeminiInferenceProvider()
    provider.generate(_request())
    assert fake_model.instances[0].calls[0]["request_options"] is None


def test_provider_maps_deadline_to_timeout(fake_model: type) -> None:
    provider = GeminiInferenceProvider()
    fake_model.instances[0].response = google_exceptions.DeadlineExceeded("deadline")

    with pytest.raises(ProviderTimeoutError) as excinfo:
        provider.generate(_request(), timeout=1.0)
    assert excinfo.value.retryable


def test_provider_maps_api_errors(fake_model: type) -> None:
    provider = GeminiInferenceProvider()
    fake_model.instances[0].response = google_exceptions.ServiceUnavailable("overloaded")

    with pytest.raises(ProviderError) as excinfo:
        provider.generate(_request())
    assert not isinstance(excinfo.value, ProviderTimeoutError)
    assert "overloaded" in str(excinfo.value)


def test_provider_blocked_response(fake_model: type) -> None:
    provider = GeminiInferenceProvider()
    fake_model.instances[0].response = FakeResponse(blocked=True)

    with pytest.raises(ProviderError, match="no text"):
        provider.generate(_request())


def test_base_provider_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        InferenceProvider().generate(_request())
