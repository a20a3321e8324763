"""Tests for the persistence adapter."""

import json
import logging
from datetime import date, datetime, timezone

import pytest

from foodfresh.food_store import FoodStore
from foodfresh.kv_store import JSONFileKeyValueStore, MemoryKeyValueStore
from foodfresh.models import FoodItem, FoodItemInput, StorageLocation, WasteRecord
from foodfresh.persistence import ITEMS_KEY, WASTE_KEY, FoodPersistence


@pytest.fixture
def memory_kv():
    return MemoryKeyValueStore()


@pytest.fixture
def adapter(memory_kv):
    return FoodPersistence(memory_kv)


def stored_item(item_id="a", expires="2026-03-01", created="2026-01-01T00:00:00Z", **extra):
    doc = {
        "id": item_id,
        "name": "Milk",
        "expirationDate": expires,
        "storageLocation": "fridge",
        "createdAt": created,
        "price": 2.5,
    }
    doc.update(extra)
    return doc


class TestLoadItems:
    """Tests for reading the item document."""

    def test_missing_key_is_empty(self, adapter):
        assert adapter.load_items() == []

    def test_empty_string_is_empty(self, adapter, memory_kv):
        memory_kv.set(ITEMS_KEY, "")
        assert adapter.load_items() == []

    def test_undecodable_file_is_empty(self, tmp_path, caplog):
        """Bytes that are not UTF-8 load as an empty collection."""
        kv = JSONFileKeyValueStore(data_dir=tmp_path)
        (tmp_path / f"{ITEMS_KEY}.json").write_bytes(b"\xff\xfe[garbage")
        with caplog.at_level(logging.WARNING, logger="foodfresh.persistence"):
            assert FoodPersistence(kv).load_items() == []
        assert "treating as empty" in caplog.text

    def test_undecodable_file_does_not_break_store(self, tmp_path):
        kv = JSONFileKeyValueStore(data_dir=tmp_path)
        (tmp_path / f"{ITEMS_KEY}.json").write_bytes(b"\xff\xfe[garbage")
        store = FoodStore(FoodPersistence(kv))
        assert store.items == []

    def test_deeply_nested_json_is_empty(self, adapter, memory_kv, caplog):
        memory_kv.set(ITEMS_KEY, "[" * 100000 + "]" * 100000)
        with caplog.at_level(logging.WARNING, logger="foodfresh.persistence"):
            assert adapter.load_items() == []
        assert "treating as empty" in caplog.text

    def test_expiration_with_time_component_keeps_item(self, adapter, memory_kv):
        """A stored datetime is read as its calendar date, not dropped."""
        memory_kv.set(ITEMS_KEY, json.dumps([stored_item(expires="2026-10-20T09:30:00")]))
        [item] = adapter.load_items()
        assert item.id == "a"
        assert item.expiration_date == date(2026, 10, 20)

    def test_expiration_with_time_component_survives_rewrite(self, memory_kv):
        memory_kv.set(ITEMS_KEY, json.dumps([stored_item(expires="2026-10-20T09:30:00")]))
        store = FoodStore(FoodPersistence(memory_kv))
        store.add(FoodItemInput(name="Bread", expiration_date=date(2026, 10, 25), price=3.0))

        stored = json.loads(memory_kv.get(ITEMS_KEY))
        assert stored[0]["id"] == "a"
        assert stored[0]["expirationDate"] == "2026-10-20"

    def test_corrupt_json_is_empty(self, adapter, memory_kv, caplog):
        memory_kv.set(ITEMS_KEY, "{not json")
        with caplog.at_level(logging.WARNING, logger="foodfresh.persistence"):
            assert adapter.load_items() == []
        assert "not valid JSON" in caplog.text

    @pytest.mark.parametrize("payload", ['{"items": []}', '"text"', "42", "null"])
    def test_non_array_is_empty(self, adapter, memory_kv, payload):
        memory_kv.set(ITEMS_KEY, payload)
        assert adapter.load_items() == []

    def test_backfills_opened(self, adapter, memory_kv):
        memory_kv.set(ITEMS_KEY, json.dumps([stored_item()]))
        [item] = adapter.load_items()
        assert item.opened is False

    def test_keeps_stored_opened(self, adapter, memory_kv):
        memory_kv.set(ITEMS_KEY, json.dumps([stored_item(opened=True)]))
        [item] = adapter.load_items()
        assert item.opened is True

    def test_applies_sort_order(self, adapter, memory_kv):
        docs = [
            stored_item("late", expires="2026-03-09"),
            stored_item("tie-b", expires="2026-03-01", created="2026-01-02T00:00:00Z"),
            stored_item("tie-a", expires="2026-03-01", created="2026-01-01T00:00:00Z"),
        ]
        memory_kv.set(ITEMS_KEY, json.dumps(docs))
        assert [i.id for i in adapter.load_items()] == ["tie-a", "tie-b", "late"]

    def test_missing_location_defaults_to_fridge(self, adapter, memory_kv):
        doc = stored_item()
        del doc["storageLocation"]
        memory_kv.set(ITEMS_KEY, json.dumps([doc]))
        [item] = adapter.load_items()
        assert item.storage_location == StorageLocation.FRIDGE

    def test_skips_invalid_entries(self, adapter, memory_kv, caplog):
        docs = [stored_item("good"), stored_item("bad", expires="2026-13-45"), "junk"]
        memory_kv.set(ITEMS_KEY, json.dumps(docs))
        with caplog.at_level(logging.WARNING, logger="foodfresh.persistence"):
            items = adapter.load_items()
        assert [i.id for i in items] == ["good"]
        assert "Skipping" in caplog.text


class TestSaveItems:
    """Tests for writing the item document."""

    def test_writes_full_array(self, adapter, memory_kv):
        item = FoodItem(
            id="a",
            name="Milk",
            expiration_date=date(2026, 3, 1),
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            price=2.5,
        )
        adapter.save_items([item])
        data = json.loads(memory_kv.get(ITEMS_KEY))
        assert data == [
            {
                "id": "a",
                "name": "Milk",
                "expirationDate": "2026-03-01",
                "storageLocation": "fridge",
                "createdAt": data[0]["createdAt"],
                "price": 2.5,
                "opened": False,
            }
        ]

    def test_overwrites(self, adapter, memory_kv):
        adapter.save_items([FoodItem(name="A", expiration_date=date(2026, 3, 1))])
        adapter.save_items([])
        assert json.loads(memory_kv.get(ITEMS_KEY)) == []

    def test_round_trip_preserves_ids(self, persistence):
        items = [
            FoodItem(name="A", expiration_date=date(2026, 3, 1)),
            FoodItem(name="B", expiration_date=date(2026, 2, 1), opened=True),
        ]
        persistence.save_items(items)
        loaded = persistence.load_items()
        assert {i.id for i in loaded} == {i.id for i in items}
        assert {i.id: i for i in loaded} == {i.id: i for i in items}


class TestWasteDocument:
    """Tests for the ledger document."""

    def test_missing_is_empty(self, adapter):
        assert adapter.load_waste() == []

    def test_round_trip_keeps_order(self, adapter):
        records = [WasteRecord(name="Milk", price=2.5), WasteRecord(name="Bread", price=3.0)]
        adapter.save_waste(records)
        assert adapter.load_waste() == records

    def test_corrupt_is_empty(self, adapter, memory_kv):
        memory_kv.set(WASTE_KEY, "]]")
        assert adapter.load_waste() == []

    def test_skips_invalid_records(self, adapter, memory_kv):
        memory_kv.set(WASTE_KEY, json.dumps([{"name": "Milk", "price": 1}, {"price": "x"}]))
        assert adapter.load_waste() == [WasteRecord(name="Milk", price=1)]

    def test_restore_raw_document(self, adapter, memory_kv):
        adapter.save_waste([WasteRecord(name="Milk", price=1)])
        raw = adapter.raw_waste_document()
        adapter.save_waste([])
        adapter.restore_waste_document(raw)
        assert adapter.load_waste() == [WasteRecord(name="Milk", price=1)]

    def test_restore_absent_document_deletes(self, adapter, memory_kv):
        raw = adapter.raw_waste_document()
        adapter.save_waste([WasteRecord(name="Milk", price=1)])
        adapter.restore_waste_document(raw)
        assert memory_kv.get(WASTE_KEY) is None


def test_custom_keys(memory_kv):
    adapter = FoodPersistence(memory_kv, items_key="items", waste_key="waste")
    adapter.save_items([])
    adapter.save_waste([])
    assert memory_kv.get("items") == "[]"
    assert memory_kv.get("waste") == "[]"


def test_defaults_to_memory_backend():
    assert isinstance(FoodPersistence().kv_store, MemoryKeyValueStore)
