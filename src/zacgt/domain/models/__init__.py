from zacgt.domain.models.ledger import (
    DUST_THRESHOLD,
    AssetBalance,
    AssetGainSummary,
    AssetHolding,
    DisposalEvent,
    GainTotals,
    LedgerResult,
    Lot,
    LotConsumption,
    TaxYearSummary,
    YearBoundarySnapshot,
)
from zacgt.domain.models.transaction import Transaction

__all__ = [
    "DUST_THRESHOLD",
    "AssetBalance",
    "AssetGainSummary",
    "AssetHolding",
    "DisposalEvent",
    "GainTotals",
    "LedgerResult",
    "Lot",
    "LotConsumption",
    "TaxYearSummary",
    "Transaction",
    "YearBoundarySnapshot",
]
