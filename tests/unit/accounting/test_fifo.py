"""Tests for FIFO lot removal — pure functions."""

from datetime import datetime
from decimal import Decimal

import pytest

from zacgt.accounting.fifo import AssetInventory, remove_fifo, total_cost
from zacgt.domain.errors import InsufficientBalanceError
from zacgt.domain.models.ledger import Lot


def _lot(qty: str, price: str, day: int = 1, asset: str = "BTC") -> Lot:
    return Lot(
        asset=asset,
        quantity=Decimal(qty),
        unit_price=Decimal(price),
        acquired_at=datetime(2024, 11, day),
    )


def _inventory(*lots: Lot) -> AssetInventory:
    inventory = AssetInventory("btc")
    for lot in lots:
        inventory.add_lot(lot)
    return inventory


class TestAssetInventory:
    def test_asset_uppercased(self):
        assert AssetInventory("eth").asset == "ETH"

    def test_totals(self):
        inventory = _inventory(_lot("0.1", "80000", 1), _lot("0.2", "90000", 2))
        assert inventory.total_quantity() == Decimal("0.3")
        assert inventory.total_cost_basis() == Decimal("26000")

    def test_rejects_other_asset(self):
        inventory = _inventory()
        with pytest.raises(ValueError, match="Cannot add ETH lot to BTC inventory"):
            inventory.add_lot(_lot("1", "2000", asset="ETH"))

    def test_empty_inventory_is_empty(self):
        assert _inventory().is_empty()

    def test_dust_only_is_empty(self):
        assert _inventory(_lot("0.000000005", "80000")).is_empty()

    def test_holdings_as_of_filters_by_acquisition(self):
        inventory = _inventory(_lot("0.1", "80000", 1), _lot("0.2", "90000", 20))
        quantity, cost = inventory.holdings_as_of(datetime(2024, 11, 10))
        assert quantity == Decimal("0.1")
        assert cost == Decimal("8000")

    def test_holdings_as_of_includes_same_instant(self):
        inventory = _inventory(_lot("0.1", "80000", 1))
        quantity, _ = inventory.holdings_as_of(datetime(2024, 11, 1))
        assert quantity == Decimal("0.1")


class TestRemoveFifoOrder:
    def test_oldest_lot_consumed_first(self):
        inventory = _inventory(_lot("1", "1000", 1), _lot("1", "2000", 5))
        consumed = remove_fifo(inventory, Decimal("1"))

        assert len(consumed) == 1
        assert consumed[0].unit_price == Decimal("1000")
        assert total_cost(consumed) == Decimal("1000")

        assert len(inventory.lots) == 1
        assert inventory.lots[0].unit_price == Decimal("2000")

    def test_spans_lots_and_splits_the_second(self):
        """q1 + 0.5*q2 consumes lot1, half of lot2, and leaves lot3 alone."""
        inventory = _inventory(_lot("1", "100", 1), _lot("2", "200", 2), _lot("3", "300", 3))
        consumed = remove_fifo(inventory, Decimal("2"))

        assert [c.quantity for c in consumed] == [Decimal("1"), Decimal("1")]
        assert [c.acquired_at.day for c in consumed] == [1, 2]
        assert total_cost(consumed) == Decimal("300")  # 1*100 + 1*200

        assert [lot.quantity for lot in inventory.lots] == [Decimal("1"), Decimal("3")]
        assert inventory.lots[0].acquired_at.day == 2
        assert inventory.lots[1].unit_price == Decimal("300")

    def test_consumption_keeps_lot_price_and_date(self):
        inventory = _inventory(_lot("0.2", "90000", 2))
        consumed = remove_fifo(inventory, Decimal("0.05"))

        assert consumed[0].unit_price == Decimal("90000")
        assert consumed[0].acquired_at == datetime(2024, 11, 2)
        assert consumed[0].cost_basis == Decimal("4500")

    def test_remove_everything(self):
        inventory = _inventory(_lot("0.1", "80000", 1), _lot("0.2", "90000", 2))
        consumed = remove_fifo(inventory, Decimal("0.3"))

        assert len(consumed) == 2
        assert inventory.is_empty()
        assert len(inventory.lots) == 0

    def test_consumed_records_are_copies(self):
        inventory = _inventory(_lot("1", "100", 1), _lot("1", "200", 2))
        consumed = remove_fifo(inventory, Decimal("1.5"))
        remove_fifo(inventory, Decimal("0.5"))

        assert consumed[1].quantity == Decimal("0.5")


class TestRemoveFifoDust:
    def test_dust_leftover_lot_is_pruned(self):
        inventory = _inventory(_lot("0.1", "80000", 1))
        remove_fifo(inventory, Decimal("0.099999995"))

        assert len(inventory.lots) == 0

    def test_dust_remaining_stops_the_walk(self):
        inventory = _inventory(_lot("0.1", "80000", 1), _lot("0.2", "90000", 2))
        consumed = remove_fifo(inventory, Decimal("0.1000000005"))

        assert len(consumed) == 1
        assert len(inventory.lots) == 1
        assert inventory.lots[0].quantity == Decimal("0.2")


class TestRemoveFifoInsufficient:
    def test_more_than_held(self):
        inventory = _inventory(_lot("0.1", "80000", 1))
        with pytest.raises(InsufficientBalanceError) as exc_info:
            remove_fifo(inventory, Decimal("0.2"))

        err = exc_info.value
        assert err.asset == "BTC"
        assert err.requested == Decimal("0.2")
        assert err.available == Decimal("0.1")
        assert "Insufficient BTC balance" in str(err)
        assert "0.2" in str(err) and "0.1" in str(err)

    def test_inventory_untouched_on_failure(self):
        inventory = _inventory(_lot("0.1", "80000", 1))
        with pytest.raises(InsufficientBalanceError):
            remove_fifo(inventory, Decimal("0.2"))
        assert inventory.total_quantity() == Decimal("0.1")

    def test_empty_inventory(self):
        with pytest.raises(InsufficientBalanceError):
            remove_fifo(_inventory(), Decimal("1"))


class TestInventoryConservation:
    def test_bought_minus_disposed(self):
        inventory = _inventory()
        bought = Decimal(0)
        disposed = Decimal(0)
        for day, qty in enumerate(["0.5", "1.25", "0.75", "2"], start=1):
            inventory.add_lot(_lot(qty, "1000", day))
            bought += Decimal(qty)
        for qty in ["0.3", "1.2", "0.05", "1.9"]:
            remove_fifo(inventory, Decimal(qty))
            disposed += Decimal(qty)
            assert abs(inventory.total_quantity() - (bought - disposed)) <= Decimal("0.00000001")
        assert inventory.total_quantity() == Decimal("1.05")
