"""Tests for the waste ledger."""

from foodfresh.models import WasteRecord
from foodfresh.waste_ledger import WasteLedger


class TestWasteLedger:
    """Tests for WasteLedger."""

    def test_empty(self):
        ledger = WasteLedger()
        assert ledger.records == []
        assert ledger.total_waste_cost == 0.0
        assert isinstance(ledger.total_waste_cost, float)
        assert len(ledger) == 0

    def test_total_from_initial_records(self):
        ledger = WasteLedger([WasteRecord(name="A", price=1.25), WasteRecord(name="B", price=2)])
        assert ledger.total_waste_cost == 3.25

    def test_appended_returns_new_ledger(self):
        ledger = WasteLedger()
        grown = ledger.appended(WasteRecord(name="Milk", price=2.5))
        assert len(ledger) == 0
        assert grown.records == [WasteRecord(name="Milk", price=2.5)]
        assert grown.total_waste_cost == 2.5

    def test_total_matches_sum(self):
        ledger = WasteLedger()
        for price in [0.1, 0.2, 0.3, 4.99, 0]:
            ledger = ledger.appended(WasteRecord(name="X", price=price))
            assert ledger.total_waste_cost == sum(r.price for r in ledger.records)

    def test_clear(self):
        ledger = WasteLedger([WasteRecord(name="A", price=1)])
        ledger.clear()
        assert ledger.records == []
        assert ledger.total_waste_cost == 0

    def test_records_is_a_copy(self):
        ledger = WasteLedger([WasteRecord(name="A", price=1)])
        ledger.records.append(WasteRecord(name="B", price=2))
        assert len(ledger) == 1
