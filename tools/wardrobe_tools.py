"""Persistence committer and read helpers over a :class:`WardrobeStore`."""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import List, Optional

from logic.errors import CommitTimeoutError, PersistenceError
from models.wardrobe_record import WardrobeRecord, from_document
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore

logger = logging.getLogger(__name__)

WARDROBE_COLLECTION = "wardrobe"


def _default_store() -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore()


class WardrobeTools:
    """Thin wrapper that commits and reads wardrobe records through a store."""

    def __init__(
        self, store: Optional[WardrobeStore] = None, collection: str = WARDROBE_COLLECTION
    ) -> None:
        self.store = store or _default_store()
        self.collection = collection

    def commit_records(
        self, records: List[WardrobeRecord], timeout: Optional[float] = None
    ) -> List[WardrobeRecord]:
        """Assign store ids and write all records as one atomic batch.

        Returns the records carrying their new ids, in input order.

        Raises:
            CommitTimeoutError: If the write could not commit within
                ``timeout`` seconds. The batch was rolled back.
            PersistenceError: If id generation or the batch write fails for
                any other reason. No record is durably stored in that case.
        """

        if not records:
            return []

        deadline = time.monotonic() + timeout if timeout is not None else None
        try:
            committed = [
                dataclasses.replace(record, record_id=self.store.new_id()) for record in records
            ]
            self.store.batch_write(
                self.collection,
                [(record.record_id, record.to_document()) for record in committed],
                deadline=deadline,
            )
        except CommitTimeoutError as exc:
            logger.error("Batch commit timed out", extra={"records": len(records), "timeout": timeout})
            raise CommitTimeoutError(f"Batch commit timed out after {timeout}s") from exc
        except Exception as exc:
            logger.error(
                "Batch commit failed",
                extra={"records": len(records), "error_type": type(exc).__name__, "error": str(exc)},
            )
            raise PersistenceError(f"Batch commit failed: {exc}") from exc

        logger.info("Committed wardrobe records", extra={"records": len(committed)})
        return committed

    def list_records_for_owner(self, owner_id: str) -> List[WardrobeRecord]:
        return [
            from_document(document)
            for document in self.store.find(self.collection, "userId", owner_id)
        ]


__all__ = ["WARDROBE_COLLECTION", "WardrobeTools"]
