"""FoodFresh - Perishable food inventory with freshness tracking and a waste ledger."""

from .config import ConfigManager
from .food_store import FoodStore, create_food_store
from .freshness import days_left, group_by_status, status, status_text
from .kv_store import (
    BackendType,
    JSONFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    SQLiteKeyValueStore,
    create_key_value_store,
)
from .models import FoodItem, FoodItemInput, FreshnessStatus, StorageLocation, WasteRecord
from .observable import Subject, Subscription
from .persistence import ITEMS_KEY, WASTE_KEY, FoodPersistence
from .waste_ledger import WasteLedger

__version__ = "0.1.0"

__all__ = [
    "BackendType",
    "ConfigManager",
    "create_food_store",
    "create_key_value_store",
    "days_left",
    "FoodItem",
    "FoodItemInput",
    "FoodPersistence",
    "FoodStore",
    "FreshnessStatus",
    "group_by_status",
    "ITEMS_KEY",
    "JSONFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "status",
    "status_text",
    "StorageLocation",
    "Subject",
    "Subscription",
    "WASTE_KEY",
    "WasteLedger",
    "WasteRecord",
]
