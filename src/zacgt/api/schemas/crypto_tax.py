"""Pydantic schemas for the crypto tax API."""

from pydantic import Field

from zacgt.config import settings
from zacgt.domain.models.base import CamelModel
from zacgt.domain.models.ledger import (
    AssetBalance,
    DisposalEvent,
    LedgerResult,
    TaxYearSummary,
    YearBoundarySnapshot,
)
from zacgt.domain.models.transaction import Transaction
from zacgt.parser.summary import TransactionOverview


class TransactionsRequest(CamelModel):
    transactions: str = Field(min_length=settings.min_input_length)  # Pasted ledger incl. header row


class TaxYearRequest(TransactionsRequest):
    tax_year: int = Field(ge=settings.min_tax_year, le=settings.max_tax_year)


class TransactionRow(Transaction):
    index: int  # 1-based position after date sort


class CalculateData(LedgerResult):
    transactions: list[TransactionRow] = []


class CalculateMetadata(CamelModel):
    transaction_count: int
    disposal_event_count: int
    assets_tracked: list[str]
    tax_years_covered: list[int]


class CalculateResponse(CamelModel):
    success: bool = True
    message: str = "Tax calculations completed successfully"
    data: CalculateData
    metadata: CalculateMetadata


class BalancesData(CamelModel):
    balances: dict[str, AssetBalance]


class BalancesResponse(CamelModel):
    success: bool = True
    data: BalancesData


class TaxYearData(CamelModel):
    tax_year: int
    period: str  # "1 Mar 2024 – 28 Feb 2025"
    summary: TaxYearSummary
    base_costs: YearBoundarySnapshot | None = None
    events: list[DisposalEvent]
    event_count: int


class TaxYearResponse(CamelModel):
    success: bool = True
    data: TaxYearData


class ValidateResponse(CamelModel):
    success: bool = True
    message: str = "Transactions are valid"
    data: TransactionOverview
