"""LedgerEngine — replays transactions through FIFO inventories and builds the CGT report."""

from collections.abc import Sequence
from decimal import Decimal

from zacgt.accounting.fifo import AssetInventory, remove_fifo, total_cost
from zacgt.domain.enums import TransactionKind
from zacgt.domain.models.ledger import (
    AssetBalance,
    AssetHolding,
    DisposalEvent,
    LedgerResult,
    Lot,
    TaxYearSummary,
    YearBoundarySnapshot,
)
from zacgt.domain.models.transaction import Transaction
from zacgt.domain.tax_year import tax_year_boundary, tax_year_for


class LedgerEngine:
    """Calculate capital gains (FIFO), tax-year totals and 1 March base costs.

    State lives only for the duration of one ``calculate`` call; build a new
    engine per request.
    """

    def __init__(self) -> None:
        self._inventories: dict[str, AssetInventory] = {}
        self._events: list[DisposalEvent] = []

    def calculate(self, transactions: Sequence[Transaction]) -> LedgerResult:
        """Run the full replay. ``transactions`` must already be in date order."""
        self._inventories = {}
        self._events = []

        for tx in transactions:
            self._process(tx)

        return LedgerResult(
            balances=self._current_balances(),
            disposal_events=list(self._events),
            tax_year_summaries=summarize_tax_years(self._events),
            year_boundary_snapshots=self._year_boundary_snapshots(transactions),
        )

    def _process(self, tx: Transaction) -> None:
        if tx.kind == TransactionKind.BUY:
            self._add_lot(tx)
        elif tx.kind == TransactionKind.SELL:
            # Proceeds are the ZAR received, not buy_quantity * unit_price
            self._dispose(tx, proceeds=tx.buy_quantity)
        elif tx.kind == TransactionKind.TRADE:
            self._dispose(tx, proceeds=tx.buy_quantity * tx.unit_price)
            self._add_lot(tx)
        else:
            raise ValueError(f"Unhandled transaction kind: {tx.kind}")

    def _add_lot(self, tx: Transaction) -> None:
        self._inventory(tx.buy_asset).add_lot(Lot(
            asset=tx.buy_asset,
            quantity=tx.buy_quantity,
            unit_price=tx.unit_price,
            acquired_at=tx.date,
        ))

    def _dispose(self, tx: Transaction, proceeds: Decimal) -> None:
        consumed = remove_fifo(self._inventory(tx.sell_asset), tx.sell_quantity)
        self._events.append(DisposalEvent(
            date=tx.date,
            disposed_asset=tx.sell_asset,
            disposed_quantity=tx.sell_quantity,
            cost_basis=total_cost(consumed),
            proceeds=proceeds,
            kind=tx.kind,
            lots_consumed=consumed,
        ))

    def _inventory(self, asset: str) -> AssetInventory:
        asset = asset.upper()
        if asset not in self._inventories:
            self._inventories[asset] = AssetInventory(asset)
        return self._inventories[asset]

    def _current_balances(self) -> dict[str, AssetBalance]:
        return {
            asset: AssetBalance(
                asset=asset,
                total_quantity=inventory.total_quantity(),
                total_cost_basis=inventory.total_cost_basis(),
                lots=[lot.model_copy() for lot in inventory.lots],
            )
            for asset, inventory in self._inventories.items()
            if not inventory.is_empty()
        }

    def _year_boundary_snapshots(self, transactions: Sequence[Transaction]) -> list[YearBoundarySnapshot]:
        """Holdings at 1 March for every tax year any transaction touches.

        Filters the final lots by acquisition date rather than replaying the
        ledger up to each boundary.
        """
        tax_years = dict.fromkeys(tax_year_for(tx.date) for tx in transactions)

        snapshots: list[YearBoundarySnapshot] = []
        for tax_year in tax_years:
            boundary = tax_year_boundary(tax_year)
            holdings: list[AssetHolding] = []
            for asset, inventory in self._inventories.items():
                quantity, cost_basis = inventory.holdings_as_of(boundary)
                if quantity > 0:
                    holdings.append(AssetHolding(asset=asset, quantity=quantity, cost_basis=cost_basis))
            if holdings:
                snapshots.append(YearBoundarySnapshot(
                    tax_year=tax_year,
                    boundary_date=boundary,
                    assets=holdings,
                ))
        return snapshots


def summarize_tax_years(events: Sequence[DisposalEvent]) -> list[TaxYearSummary]:
    """Group disposal gains by tax year, then by asset."""
    summaries: dict[int, TaxYearSummary] = {}
    for event in events:
        summary = summaries.get(event.tax_year)
        if summary is None:
            summary = summaries[event.tax_year] = TaxYearSummary(tax_year=event.tax_year)
        summary.record(event.gain)
        summary.for_asset(event.disposed_asset).record(event.gain)
    return list(summaries.values())


def compute_ledger(transactions: Sequence[Transaction]) -> LedgerResult:
    """Replay ``transactions`` on a fresh engine."""
    return LedgerEngine().calculate(transactions)
