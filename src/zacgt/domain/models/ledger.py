"""Domain types for FIFO lot tracking and South African CGT reporting."""

from decimal import Decimal
from typing import Any

from pydantic import ConfigDict, computed_field

from zacgt.domain.enums import TransactionKind
from zacgt.domain.models.base import CamelModel, LedgerDateTime
from zacgt.domain.tax_year import tax_year_for

DUST_THRESHOLD = Decimal("0.00000001")


class Lot(CamelModel):
    """A purchased slice of an asset not yet fully disposed of.

    Quantity shrinks in place as FIFO disposals consume it; the owning
    inventory prunes the lot once it drops to dust.
    """

    asset: str
    quantity: Decimal
    unit_price: Decimal
    acquired_at: LedgerDateTime

    @computed_field(alias="costBasis")
    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.unit_price

    def is_empty(self) -> bool:
        return self.quantity <= DUST_THRESHOLD


class LotConsumption(CamelModel):
    """The portion of a lot used up by one disposal."""

    model_config = ConfigDict(frozen=True)

    acquired_at: LedgerDateTime
    quantity: Decimal
    unit_price: Decimal

    @computed_field(alias="costBasis")
    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.unit_price

    @classmethod
    def from_lot(cls, lot: Lot, quantity: Decimal | None = None) -> "LotConsumption":
        return cls(
            acquired_at=lot.acquired_at,
            quantity=lot.quantity if quantity is None else quantity,
            unit_price=lot.unit_price,
        )


class DisposalEvent(CamelModel):
    """A realized capital gain or loss from a SELL or TRADE."""

    model_config = ConfigDict(frozen=True)

    date: LedgerDateTime
    disposed_asset: str
    disposed_quantity: Decimal
    cost_basis: Decimal  # Sum of consumed lot costs
    proceeds: Decimal  # ZAR received, or ZAR value of the coin received
    kind: TransactionKind
    lots_consumed: list[LotConsumption] = []

    @computed_field
    @property
    def gain(self) -> Decimal:
        return self.proceeds - self.cost_basis

    @computed_field(alias="taxYear")
    @property
    def tax_year(self) -> int:
        return tax_year_for(self.date)

    def is_gain(self) -> bool:
        return self.gain > 0

    def is_loss(self) -> bool:
        return self.gain < 0

    def describe(self) -> str:
        """One-line summary, e.g. ``2025-05-05: Sold 0.50000000 BTC for R600,000.00 (...)``."""
        label = "Gain" if self.is_gain() else "Loss"
        return (
            f"{self.date:%Y-%m-%d}: Sold {self.disposed_quantity:.8f} {self.disposed_asset} "
            f"for R{self.proceeds:,.2f} (Cost: R{self.cost_basis:,.2f}, {label}: R{abs(self.gain):,.2f})"
        )


class GainTotals(CamelModel):
    total_gain: Decimal = Decimal(0)
    total_loss: Decimal = Decimal(0)  # Absolute value
    net_gain: Decimal = Decimal(0)

    def record(self, gain: Decimal) -> None:
        if gain > 0:
            self.total_gain += gain
        elif gain < 0:
            self.total_loss += abs(gain)
        self.net_gain += gain


class AssetGainSummary(GainTotals):
    asset: str


class TaxYearSummary(GainTotals):
    """Gains and losses realized in one tax year, overall and per asset."""

    tax_year: int
    by_asset: list[AssetGainSummary] = []

    def for_asset(self, asset: str) -> AssetGainSummary:
        """Get or create the per-asset bucket."""
        for summary in self.by_asset:
            if summary.asset == asset:
                return summary
        summary = AssetGainSummary(asset=asset)
        self.by_asset.append(summary)
        return summary


class AssetHolding(CamelModel):
    asset: str
    quantity: Decimal
    cost_basis: Decimal


class YearBoundarySnapshot(CamelModel):
    """Holdings and base cost as of 1 March closing a tax year."""

    tax_year: int
    boundary_date: LedgerDateTime
    assets: list[AssetHolding] = []


class AssetBalance(CamelModel):
    asset: str
    total_quantity: Decimal
    total_cost_basis: Decimal
    lots: list[Lot] = []


class LedgerResult(CamelModel):
    """Everything one engine run produces."""

    balances: dict[str, AssetBalance] = {}
    disposal_events: list[DisposalEvent] = []
    tax_year_summaries: list[TaxYearSummary] = []
    year_boundary_snapshots: list[YearBoundarySnapshot] = []

    def tax_years(self) -> list[int]:
        return [summary.tax_year for summary in self.tax_year_summaries]

    def summary_for(self, tax_year: int) -> TaxYearSummary | None:
        return next((s for s in self.tax_year_summaries if s.tax_year == tax_year), None)

    def snapshot_for(self, tax_year: int) -> YearBoundarySnapshot | None:
        return next((s for s in self.year_boundary_snapshots if s.tax_year == tax_year), None)

    def events_for(self, tax_year: int) -> list[DisposalEvent]:
        return [event for event in self.disposal_events if event.tax_year == tax_year]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
