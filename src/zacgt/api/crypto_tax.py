"""Crypto tax API — parse a pasted ledger and run FIFO capital gains."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from zacgt.api.deps import EngineDep
from zacgt.api.schemas.crypto_tax import (
    BalancesData,
    BalancesResponse,
    CalculateData,
    CalculateMetadata,
    CalculateResponse,
    TaxYearData,
    TaxYearRequest,
    TaxYearResponse,
    TransactionRow,
    TransactionsRequest,
    ValidateResponse,
)
from zacgt.config import settings
from zacgt.domain.models.transaction import Transaction
from zacgt.domain.tax_year import tax_year_range
from zacgt.parser.summary import summarize_transactions
from zacgt.parser.transaction_parser import parse_transactions
from zacgt.report.service import REPORT_FILENAME, build_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/crypto-tax", tags=["crypto-tax"])

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ENDPOINTS = {
    "POST /api/crypto-tax/calculate": "Calculate full tax report",
    "POST /api/crypto-tax/balances": "Get current balances only",
    "POST /api/crypto-tax/tax-year": "Get specific tax year summary",
    "POST /api/crypto-tax/validate": "Validate transactions without calculating",
    "POST /api/crypto-tax/export": "Download the tax report as xlsx",
    "GET /api/crypto-tax/health": "Health check",
}


def _rows(transactions: list[Transaction]) -> list[TransactionRow]:
    return [
        TransactionRow(index=idx, **tx.model_dump(exclude={"total_value"}))
        for idx, tx in enumerate(transactions, start=1)
    ]


@router.get("/health")
async def health() -> dict:
    return {
        "success": True,
        "message": f"{settings.app_name} API is running",
        "version": settings.version,
        "endpoints": ENDPOINTS,
    }


@router.post("/calculate", response_model=CalculateResponse)
async def calculate(body: TransactionsRequest, engine: EngineDep) -> CalculateResponse:
    """Full report: balances, disposals, tax-year summaries and 1 March base costs."""
    logger.info("Parsing transactions (%d chars)", len(body.transactions))
    transactions = parse_transactions(body.transactions)
    logger.info("Parsed %d transactions, starting FIFO calculation", len(transactions))
    result = engine.calculate(transactions)
    logger.info("FIFO calculation done: %d disposal events", len(result.disposal_events))

    return CalculateResponse(
        data=CalculateData(
            transactions=_rows(transactions),
            balances=result.balances,
            disposal_events=result.disposal_events,
            tax_year_summaries=result.tax_year_summaries,
            year_boundary_snapshots=result.year_boundary_snapshots,
        ),
        metadata=CalculateMetadata(
            transaction_count=len(transactions),
            disposal_event_count=len(result.disposal_events),
            assets_tracked=list(result.balances),
            tax_years_covered=result.tax_years(),
        ),
    )


@router.post("/balances", response_model=BalancesResponse)
async def balances(body: TransactionsRequest, engine: EngineDep) -> BalancesResponse:
    result = engine.calculate(parse_transactions(body.transactions))
    return BalancesResponse(data=BalancesData(balances=result.balances))


@router.post("/tax-year", response_model=TaxYearResponse)
async def tax_year(body: TaxYearRequest, engine: EngineDep) -> TaxYearResponse | JSONResponse:
    """Summary, base costs and disposal events for one tax year."""
    result = engine.calculate(parse_transactions(body.transactions))

    summary = result.summary_for(body.tax_year)
    if summary is None:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "message": f"No data found for tax year {body.tax_year}",
                "availableTaxYears": result.tax_years(),
            },
        )

    events = result.events_for(body.tax_year)
    return TaxYearResponse(
        data=TaxYearData(
            tax_year=body.tax_year,
            period=tax_year_range(body.tax_year),
            summary=summary,
            base_costs=result.snapshot_for(body.tax_year),
            events=events,
            event_count=len(events),
        )
    )


@router.post("/validate", response_model=ValidateResponse)
async def validate(body: TransactionsRequest) -> ValidateResponse:
    """Parse only; the FIFO engine is not run."""
    transactions = parse_transactions(body.transactions)
    return ValidateResponse(data=summarize_transactions(transactions))


@router.post("/export")
async def export(body: TransactionsRequest, engine: EngineDep) -> StreamingResponse:
    buf = build_report(body.transactions, engine)
    return StreamingResponse(
        buf,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
