"""Wardrobe ingestion app bootstrap."""

from __future__ import annotations

import functools
import logging

from ingest_app.config import IngestConfig
from ingest_app.logging_config import configure_logging, get_logger, log_event
from agents.wardrobe_ingestion import WardrobeIngestionAgent
from logic.request_builder import RequestBuilder
from models.outcome import IngestionOutcome
from tools.image_loader import resolve_image
from tools.inference_provider import GeminiInferenceProvider, InferenceProvider
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools

LOGGER = get_logger(__name__)


class WardrobeIngestApp:
    """Wires configuration, the Gemini provider and the document store together."""

    def __init__(
        self,
        config: IngestConfig | None = None,
        provider: InferenceProvider | None = None,
        store: WardrobeStore | None = None,
    ) -> None:
        self.config = config or IngestConfig.from_env()
        configure_logging()

        self.provider = provider or GeminiInferenceProvider(
            model=self.config.model, api_key=self.config.api_key
        )
        self.wardrobe_store = store or SQLiteWardrobeStore(
            self.config.wardrobe_db_path, timeout=self.config.commit_timeout or 5.0
        )
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store, collection=self.config.collection)
        self.wardrobe_ingestion = WardrobeIngestionAgent(
            provider=self.provider,
            wardrobe_tools=self.wardrobe_tools,
            request_builder=RequestBuilder(exemplar_dir=self.config.exemplar_dir),
            confidence_threshold=self.config.confidence_threshold,
            inference_timeout=self.config.inference_timeout,
            commit_timeout=self.config.commit_timeout,
            image_fetch_timeout=self.config.image_fetch_timeout,
            image_resolver=functools.partial(
                resolve_image, allow_local=self.config.allow_local_images
            ),
        )
        log_event(
            LOGGER,
            logging.DEBUG,
            "app_initialised",
            model=self.config.model,
            environment=self.config.environment or "local",
        )

    def ingest(self, owner_id: str, image_reference: str) -> IngestionOutcome:
        """Run one ingestion and return its outcome."""

        return self.wardrobe_ingestion.ingest(owner_id, image_reference)

    def ingest_request(self, payload: dict) -> dict:
        """Handle a ``{ownerId, imageReference}`` payload and return the outbound shape."""

        outcome = self.ingest(payload.get("ownerId"), payload.get("imageReference"))
        return outcome.to_dict()


__all__ = ["WardrobeIngestApp"]
