"""Wardrobe ingestion agent turning a single photo into committed wardrobe records."""

from __future__ import annotations

import concurrent.futures
import contextvars
import logging
from enum import Enum
from typing import Callable, List, Optional, TypeVar

from ingest_app.logging_config import get_logger, log_event, operation_context
from logic.errors import (
    IngestionError,
    PersistenceError,
    ProviderError,
    ProviderTimeoutError,
    ResponseValidationError,
)
from logic.filtering import DEFAULT_CONFIDENCE_THRESHOLD, filter_by_confidence
from logic.request_builder import InferenceRequest, RequestBuilder
from logic.validation import parse_ingest_request, validate_response
from models.ingestion_mapping import map_validated_item_to_record
from models.outcome import IngestionOutcome
from models.wardrobe_record import WardrobeRecord
from tools.image_loader import ImagePayload, resolve_image
from tools.inference_provider import InferenceProvider
from tools.wardrobe_tools import WardrobeTools

logger = get_logger(__name__)
T = TypeVar("T")

NO_ITEMS_WARNING = "No garments were detected in the image"


class PipelineState(str, Enum):
    """Stages of one ingestion run; ``FAILED`` is absorbing."""

    VALIDATING_INPUT = "validating_input"
    BUILDING_REQUEST = "building_request"
    AWAITING_INFERENCE = "awaiting_inference"
    VALIDATING_RESPONSE = "validating_response"
    FILTERING = "filtering"
    TRANSFORMING = "transforming"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


def _call_with_timeout(func: Callable[[], T], timeout: Optional[float], on_timeout: Exception) -> T:
    """Run ``func`` and give up waiting after ``timeout`` seconds.

    The worker is abandoned, not stopped, so only side-effect free calls such
    as inference go through here; commits enforce their deadline in the store.
    """

    if timeout is None:
        return func()
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    context = contextvars.copy_context()
    future = executor.submit(context.run, func)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as exc:
        future.cancel()
        raise on_timeout from exc
    finally:
        executor.shutdown(wait=False)


class WardrobeIngestionAgent:
    """Runs the photo ingestion pipeline for one owner and image at a time.

    The agent holds configuration and collaborators only; every run keeps its
    own item lists, so concurrent calls never share mutable state.
    """

    def __init__(
        self,
        provider: InferenceProvider,
        wardrobe_tools: WardrobeTools,
        request_builder: RequestBuilder | None = None,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        inference_timeout: Optional[float] = None,
        commit_timeout: Optional[float] = None,
        image_fetch_timeout: Optional[float] = 10.0,
        image_resolver: Callable[..., ImagePayload] = resolve_image,
    ) -> None:
        if not 0.0 <= confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be within [0, 1]")
        self.provider = provider
        self.wardrobe_tools = wardrobe_tools
        self.request_builder = request_builder or RequestBuilder()
        self.confidence_threshold = confidence_threshold
        self.inference_timeout = inference_timeout
        self.commit_timeout = commit_timeout
        self.image_fetch_timeout = image_fetch_timeout
        self.image_resolver = image_resolver

    @staticmethod
    def _enter(trail: List[PipelineState], state: PipelineState) -> None:
        trail.append(state)
        log_event(logger, logging.DEBUG, "pipeline_state_entered", state=state.value)

    def ingest(self, owner_id: str, image_reference: str) -> IngestionOutcome:
        """Extract garments from ``image_reference`` and commit them for ``owner_id``.

        Never raises: every failure becomes ``IngestionOutcome(success=False)``.
        """

        with operation_context("agent:wardrobe_ingestion.ingest") as correlation_id:
            trail: List[PipelineState] = []
            try:
                outcome = self._run(trail, owner_id, image_reference)
            except IngestionError as exc:
                failed_in = trail[-1] if trail else PipelineState.VALIDATING_INPUT
                self._enter(trail, PipelineState.FAILED)
                level = logging.WARNING
                if isinstance(exc, (ResponseValidationError, PersistenceError)):
                    level = logging.ERROR
                log_event(
                    logger,
                    level,
                    "ingestion_failed",
                    correlation_id=correlation_id,
                    failed_state=failed_in.value,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    retryable=exc.retryable,
                )
                return IngestionOutcome.failed(str(exc), retryable=exc.retryable)
            except Exception as exc:  # pragma: no cover - unexpected failure at agent boundary
                self._enter(trail, PipelineState.FAILED)
                log_event(
                    logger,
                    logging.ERROR,
                    "ingestion_crashed",
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                return IngestionOutcome.failed(f"Unexpected ingestion failure: {exc}")

            log_event(
                logger,
                logging.INFO,
                "agent_call_completed",
                agent="wardrobe_ingestion",
                method="ingest",
                correlation_id=correlation_id,
                stored=len(outcome.records),
                warnings=len(outcome.warnings),
                states=[state.value for state in trail],
            )
            return outcome

    def _run(self, trail: List[PipelineState], owner_id: str, image_reference: str) -> IngestionOutcome:
        self._enter(trail, PipelineState.VALIDATING_INPUT)
        request = parse_ingest_request(owner_id, image_reference)

        self._enter(trail, PipelineState.BUILDING_REQUEST)
        image = self.image_resolver(request.image_reference, timeout=self.image_fetch_timeout)
        inference_request = self.request_builder.build(image, request.image_reference)

        self._enter(trail, PipelineState.AWAITING_INFERENCE)
        raw_text = self._infer(inference_request)

        self._enter(trail, PipelineState.VALIDATING_RESPONSE)
        validated = validate_response(raw_text)

        self._enter(trail, PipelineState.FILTERING)
        filtered = filter_by_confidence(
            validated.items, validated.warnings, threshold=self.confidence_threshold
        )
        warnings = filtered.warnings
        if not validated.items:
            warnings.append(NO_ITEMS_WARNING)

        self._enter(trail, PipelineState.TRANSFORMING)
        records: List[WardrobeRecord] = [
            map_validated_item_to_record(
                item,
                owner_id=request.owner_id,
                image_reference=request.image_reference,
                index=index,
            )
            for index, item in enumerate(filtered.accepted, start=1)
        ]

        self._enter(trail, PipelineState.COMMITTING)
        committed = self.wardrobe_tools.commit_records(records, timeout=self.commit_timeout)

        self._enter(trail, PipelineState.DONE)
        return IngestionOutcome.succeeded(committed, warnings)

    def _infer(self, inference_request: InferenceRequest) -> Optional[str]:
        raw_text = _call_with_timeout(
            lambda: self.provider.generate(inference_request, timeout=self.inference_timeout),
            self.inference_timeout,
            ProviderTimeoutError(f"Inference call timed out after {self.inference_timeout}s"),
        )
        if raw_text is not None and not isinstance(raw_text, str):
            raise ProviderError("Inference provider returned a non-text payload")
        return raw_text


__all__ = ["NO_ITEMS_WARNING", "PipelineState", "WardrobeIngestionAgent"]
