"""Persistence adapter between the food store and a key-value backend.

The whole item collection is stored as one JSON array under ITEMS_KEY and
rewritten on every mutation. Reads never raise: a missing, unparseable or
non-array document is treated as empty.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from .kv_store import KeyValueStore, MemoryKeyValueStore
from .models import FoodItem, WasteRecord, sort_items

logger = logging.getLogger(__name__)

ITEMS_KEY = "foodfresh_items_v1"
WASTE_KEY = "foodfresh_waste_v1"


class FoodPersistence:
    """Reads and writes FoodFresh documents in a key-value store."""

    def __init__(
        self,
        kv_store: KeyValueStore | None = None,
        items_key: str = ITEMS_KEY,
        waste_key: str = WASTE_KEY,
    ):
        self.kv_store = kv_store if kv_store is not None else MemoryKeyValueStore()
        self.items_key = items_key
        self.waste_key = waste_key

    def _read_array(self, key: str) -> list[Any]:
        """Load a JSON array document, or [] if absent or unusable."""
        try:
            raw = self.kv_store.get(key)
            if not raw:
                return []
            data = json.loads(raw)
        except (ValueError, RecursionError):
            # UnicodeDecodeError is a ValueError; RecursionError comes from deep nesting
            logger.warning("Stored document %r is not valid JSON; treating as empty", key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored document %r is not an array; treating as empty", key)
            return []
        return data

    def _write_array(self, key: str, data: list[Any]) -> None:
        self.kv_store.set(key, json.dumps(data, indent=2))
        logger.debug("Wrote %d entries to %r", len(data), key)

    # --- Inventory ---

    def load_items(self) -> list[FoodItem]:
        """Load the item collection in standing sort order.

        Entries missing ``opened`` are backfilled with False. Entries that
        fail validation, such as a malformed expiration date, are skipped.

        Returns:
            List of FoodItem, empty if nothing usable is stored
        """
        items = []
        for entry in self._read_array(self.items_key):
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object entry in %r", self.items_key)
                continue
            try:
                items.append(FoodItem.model_validate({"opened": False, **entry}))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid item %r in %r: %s",
                    entry.get("id"),
                    self.items_key,
                    e.errors()[0]["msg"] if e.errors() else e,
                )
        return sort_items(items)

    def save_items(self, items: list[FoodItem]) -> None:
        """Overwrite the stored item collection.

        Args:
            items: Full collection to persist
        """
        self._write_array(self.items_key, [i.to_document() for i in items])

    # --- Waste ledger ---

    def load_waste(self) -> list[WasteRecord]:
        """Load waste records in insertion order."""
        records = []
        for entry in self._read_array(self.waste_key):
            try:
                records.append(WasteRecord.model_validate(entry))
            except ValidationError:
                logger.warning("Skipping invalid waste record in %r", self.waste_key)
        return records

    def save_waste(self, records: list[WasteRecord]) -> None:
        """Overwrite the stored waste ledger.

        Args:
            records: Every waste record, oldest first
        """
        self._write_array(self.waste_key, [r.to_document() for r in records])

    def raw_waste_document(self) -> str | None:
        """The stored ledger document exactly as persisted, for restoring it."""
        return self.kv_store.get(self.waste_key)

    def restore_waste_document(self, raw: str | None) -> None:
        """Put back a ledger document captured by raw_waste_document()."""
        if raw is None:
            self.kv_store.delete(self.waste_key)
        else:
            self.kv_store.set(self.waste_key, raw)
