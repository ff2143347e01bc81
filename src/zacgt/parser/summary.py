"""Pre-flight overview of a parsed ledger, without running the FIFO engine."""

from collections import Counter
from datetime import datetime

from pydantic import Field

from zacgt.domain.enums import TransactionKind
from zacgt.domain.models.base import CamelModel, LedgerDateTime
from zacgt.domain.models.transaction import Transaction


class DateRange(CamelModel):
    earliest: LedgerDateTime
    latest: LedgerDateTime


class TransactionOverview(CamelModel):
    transaction_count: int
    date_range: DateRange | None = None
    transaction_types: dict[str, int] = Field(default_factory=dict)
    assets_involved: list[str] = []


def summarize_transactions(transactions: list[Transaction]) -> TransactionOverview:
    """Count, date range, per-kind counts and distinct non-ZAR assets, in first-seen order."""
    kinds = Counter(tx.kind for tx in transactions)
    assets: dict[str, None] = {}
    for tx in transactions:
        assets.update(dict.fromkeys(tx.involved_assets()))

    date_range = None
    if transactions:
        dates: list[datetime] = [tx.date for tx in transactions]
        date_range = DateRange(earliest=min(dates), latest=max(dates))

    return TransactionOverview(
        transaction_count=len(transactions),
        date_range=date_range,
        transaction_types={kind.value: kinds.get(kind, 0) for kind in TransactionKind},
        assets_involved=list(assets),
    )
