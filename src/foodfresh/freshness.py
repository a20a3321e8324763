"""Freshness classification for inventory items.

Status is always derived on read against today's calendar date and is never
stored on the item.
"""

from datetime import date

from .models import FoodItem, FreshnessStatus

USE_SOON_DAYS = 3


def days_left(item: FoodItem, today: date | None = None) -> int:
    """Whole calendar days from today until the item expires.

    Negative once the item has expired, zero on the expiration day itself.
    """
    today = today or date.today()
    return (item.expiration_date - today).days


def status(
    item: FoodItem,
    today: date | None = None,
    use_soon_days: int = USE_SOON_DAYS,
) -> FreshnessStatus:
    """Classify an item as expired, use-soon, or fresh.

    The use-soon window is inclusive at both ends: the expiration day itself
    and the day ``use_soon_days`` out both count as use-soon.
    """
    diff = days_left(item, today)
    if diff < 0:
        return FreshnessStatus.EXPIRED
    if diff <= use_soon_days:
        return FreshnessStatus.USE_SOON
    return FreshnessStatus.FRESH


def status_text(item: FoodItem, today: date | None = None) -> str:
    """Human-readable description of time remaining."""
    diff = days_left(item, today)
    if diff < 0:
        return f"Expired {abs(diff)} day(s) ago"
    if diff == 0:
        return "Expires today"
    return f"{diff} day(s) left"


def filter_by_status(
    items: list[FoodItem],
    wanted: FreshnessStatus,
    today: date | None = None,
    use_soon_days: int = USE_SOON_DAYS,
) -> list[FoodItem]:
    """Items with the given status, preserving input order."""
    today = today or date.today()
    return [i for i in items if status(i, today, use_soon_days) == wanted]


def expired_items(items: list[FoodItem], today: date | None = None) -> list[FoodItem]:
    return filter_by_status(items, FreshnessStatus.EXPIRED, today)


def use_soon_items(
    items: list[FoodItem],
    today: date | None = None,
    use_soon_days: int = USE_SOON_DAYS,
) -> list[FoodItem]:
    return filter_by_status(items, FreshnessStatus.USE_SOON, today, use_soon_days)


def fresh_items(
    items: list[FoodItem],
    today: date | None = None,
    use_soon_days: int = USE_SOON_DAYS,
) -> list[FoodItem]:
    return filter_by_status(items, FreshnessStatus.FRESH, today, use_soon_days)


def group_by_status(
    items: list[FoodItem],
    today: date | None = None,
    use_soon_days: int = USE_SOON_DAYS,
) -> dict[FreshnessStatus, list[FoodItem]]:
    """Bucket items by status. Every status key is present, possibly empty.

    Args:
        items: Items to classify, typically a store snapshot
        today: Reference date, defaults to the current date
        use_soon_days: Inclusive use-soon threshold

    Returns:
        Dict mapping each FreshnessStatus to its items in input order
    """
    today = today or date.today()
    groups: dict[FreshnessStatus, list[FoodItem]] = {s: [] for s in FreshnessStatus}
    for item in items:
        groups[status(item, today, use_soon_days)].append(item)
    return groups
