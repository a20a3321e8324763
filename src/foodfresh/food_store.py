"""The food store: authoritative inventory plus waste ledger."""

from __future__ import annotations

import logging
from pathlib import Path

from .kv_store import BackendType, create_key_value_store
from .models import (
    FoodItem,
    FoodItemInput,
    StorageLocation,
    WasteRecord,
    new_item_id,
    sort_items,
)
from .observable import Subject
from .persistence import FoodPersistence
from .waste_ledger import WasteLedger

logger = logging.getLogger(__name__)


class FoodStore:
    """Owns the sorted item collection and the waste ledger.

    Every command follows the same sequence: build the next state, persist
    it, swap it in, then publish the new snapshot. If persisting raises, the
    in-memory state and subscribers are untouched. Commands that reference
    an unknown id are no-ops and return None.
    """

    def __init__(self, persistence: FoodPersistence | None = None):
        """Initialize the store and load persisted state.

        Args:
            persistence: FoodPersistence instance. Uses an in-memory
                backend if not provided.
        """
        self.persistence = persistence or FoodPersistence()
        self._items: list[FoodItem] = self.persistence.load_items()
        self._ledger = WasteLedger(self.persistence.load_waste())
        self._items_subject: Subject[list[FoodItem]] = Subject(list(self._items))
        self._waste_subject: Subject[list[WasteRecord]] = Subject(self._ledger.records)

    # --- Reads ---

    def list(self) -> Subject[list[FoodItem]]:
        """Channel of item snapshots. Subscribers get the latest one at once."""
        return self._items_subject

    def waste_list(self) -> Subject[list[WasteRecord]]:
        """Channel of waste ledger snapshots."""
        return self._waste_subject

    @property
    def items(self) -> list[FoodItem]:
        """Current item snapshot."""
        return list(self._items)

    @property
    def waste_records(self) -> list[WasteRecord]:
        return self._ledger.records

    @property
    def total_waste_cost(self) -> float:
        return self._ledger.total_waste_cost

    def get(self, item_id: str) -> FoodItem | None:
        """Find an item by id."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    # --- Inventory commands ---

    def add(self, item_input: FoodItemInput) -> FoodItem:
        """Add a new item.

        Args:
            item_input: Validated name, expiration date, location and price

        Returns:
            The created FoodItem
        """
        item = FoodItem(
            name=item_input.name,
            expiration_date=item_input.expiration_date,
            storage_location=item_input.storage_location or StorageLocation.FRIDGE,
            price=item_input.price,
        )
        while self.get(item.id) is not None:
            item = item.model_copy(update={"id": new_item_id()})

        self._commit_items([*self._items, item])
        return item

    def edit(self, item_id: str, item_input: FoodItemInput) -> FoodItem | None:
        """Replace an item's name, date, location and price.

        The id, creation time and opened flag are kept. An input without a
        storage location keeps the current one.

        Returns:
            The updated item, or None if no item has that id
        """
        existing = self.get(item_id)
        if existing is None:
            logger.debug("edit: no item with id %s", item_id)
            return None

        updated = existing.model_copy(
            update={
                "name": item_input.name,
                "expiration_date": item_input.expiration_date,
                "storage_location": item_input.storage_location or existing.storage_location,
                "price": item_input.price,
            }
        )
        self._commit_items([updated if i.id == item_id else i for i in self._items])
        return updated

    def toggle_opened(self, item_id: str) -> FoodItem | None:
        """Flip an item's opened flag.

        Returns:
            The updated item, or None if no item has that id
        """
        existing = self.get(item_id)
        if existing is None:
            logger.debug("toggle_opened: no item with id %s", item_id)
            return None

        updated = existing.model_copy(update={"opened": not existing.opened})
        self._commit_items([updated if i.id == item_id else i for i in self._items])
        return updated

    def remove(self, item_id: str) -> FoodItem | None:
        """Delete an item.

        Returns:
            The removed item, or None if no item has that id
        """
        existing = self.get(item_id)
        if existing is None:
            logger.debug("remove: no item with id %s", item_id)
            return None

        self._commit_items([i for i in self._items if i.id != item_id])
        return existing

    def clear(self) -> None:
        """Remove every item. The waste ledger is not affected."""
        self._commit_items([])

    # --- Waste commands ---

    def waste(self, item: FoodItem | str) -> WasteRecord | None:
        """Move an item out of inventory and into the waste ledger.

        The record is taken from the stored item, so a stale copy passed by
        the caller cannot skew the ledger. The ledger is written first and
        the items second. If the items write fails, the previous ledger
        document is restored and the error propagates with nothing changed.

        Args:
            item: The item to waste, or its id

        Returns:
            The new WasteRecord, or None if the item is not in inventory
        """
        item_id = item if isinstance(item, str) else item.id
        stored = self.get(item_id)
        if stored is None:
            logger.debug("waste: no item with id %s", item_id)
            return None

        record = WasteRecord(name=stored.name, price=stored.price)
        next_ledger = self._ledger.appended(record)
        next_items = [i for i in self._items if i.id != item_id]

        previous_waste = self.persistence.raw_waste_document()
        self.persistence.save_waste(next_ledger.records)
        try:
            self.persistence.save_items(next_items)
        except Exception:
            self.persistence.restore_waste_document(previous_waste)
            raise

        self._ledger = next_ledger
        self._items = next_items
        self._items_subject.publish(list(self._items))
        self._waste_subject.publish(self._ledger.records)
        return record

    def clear_waste(self) -> None:
        """Empty the waste ledger and reset its total to zero."""
        self.persistence.save_waste([])
        self._ledger.clear()
        self._waste_subject.publish(self._ledger.records)

    # --- Internals ---

    def _commit_items(self, items: list[FoodItem]) -> None:
        """Sort, persist, swap in and publish a new collection."""
        ordered = sort_items(items)
        self.persistence.save_items(ordered)
        self._items = ordered
        self._items_subject.publish(list(ordered))


def create_food_store(
    backend: BackendType = BackendType.JSON,
    data_dir: Path | None = None,
    db_path: Path | None = None,
) -> FoodStore:
    """Create a FoodStore wired to the given storage backend.

    Args:
        backend: Key-value backend to persist through
        data_dir: Directory for data files
        db_path: SQLite database path (SQLite backend only)

    Returns:
        A FoodStore loaded from the backend's current documents
    """
    kv_store = create_key_value_store(backend=backend, data_dir=data_dir, db_path=db_path)
    return FoodStore(persistence=FoodPersistence(kv_store))
