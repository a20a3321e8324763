"""Waste ledger: discarded items and their running cost."""

from .models import WasteRecord


class WasteLedger:
    """Ordered waste records plus a running total.

    The total always equals the sum of record prices. Records are only ever
    appended one at a time or cleared all at once.
    """

    def __init__(self, records: list[WasteRecord] | None = None):
        self._records: list[WasteRecord] = list(records or [])
        self._total = sum((r.price for r in self._records), 0.0)

    @property
    def records(self) -> list[WasteRecord]:
        """Copy of the records in insertion order."""
        return list(self._records)

    @property
    def total_waste_cost(self) -> float:
        return self._total

    def __len__(self) -> int:
        return len(self._records)

    def appended(self, record: WasteRecord) -> "WasteLedger":
        """Return a new ledger with one more record.

        The store builds the next state this way and only swaps it in once
        persistence succeeds.
        """
        ledger = WasteLedger()
        ledger._records = self._records + [record]
        ledger._total = self._total + record.price
        return ledger

    def clear(self) -> None:
        self._records = []
        self._total = 0.0
