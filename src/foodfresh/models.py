"""Core data models for FoodFresh."""

from datetime import date, datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .item_normalizer import normalize_food_name


class StorageLocation(str, Enum):
    """Where an item is kept."""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    PANTRY = "pantry"


class FreshnessStatus(str, Enum):
    """Freshness category derived from days left."""

    EXPIRED = "expired"
    USE_SOON = "use-soon"
    FRESH = "fresh"


def new_item_id() -> str:
    return uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    """Base model that reads and writes the camelCase document keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodItemInput(_CamelModel):
    """Command record for adding or editing an item.

    Validation happens here, at the caller boundary. The store trusts
    whatever it is handed.
    """

    name: str
    expiration_date: date
    storage_location: StorageLocation | None = None
    price: float = Field(ge=0)

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        normalized = normalize_food_name(value)
        if not normalized:
            raise ValueError("name must not be empty")
        return normalized


class FoodItem(_CamelModel):
    """A perishable item in the inventory."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_item_id)
    name: str
    expiration_date: date
    storage_location: StorageLocation = StorageLocation.FRIDGE
    created_at: datetime = Field(default_factory=_utc_now)
    price: float = 0.0
    opened: bool = False

    @field_validator("expiration_date", mode="before")
    @classmethod
    def _drop_time_component(cls, value):
        # Stored dates may carry a time part; only the calendar date counts.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            return value[:10]
        return value

    @field_validator("created_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Naive timestamps are treated as UTC so sort keys stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def sort_key(self) -> tuple[date, datetime]:
        """Ordering key: expiration date, then creation time."""
        return (self.expiration_date, self.created_at)

    def to_document(self) -> dict:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class WasteRecord(_CamelModel):
    """Snapshot of a wasted item's name and cost."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: float = 0.0

    def to_document(self) -> dict:
        return self.model_dump(mode="json")


def sort_items(items: list[FoodItem]) -> list[FoodItem]:
    """Return items in standing order (expiration date, then created_at)."""
    return sorted(items, key=lambda item: item.sort_key)
