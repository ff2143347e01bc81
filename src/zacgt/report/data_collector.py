"""Flattens a ledger run into row tuples for the spreadsheet export."""

from __future__ import annotations

from dataclasses import dataclass, field

from zacgt.domain.models.ledger import LedgerResult
from zacgt.domain.models.transaction import Transaction
from zacgt.domain.tax_year import tax_year_range

ALL_ASSETS = "ALL"


@dataclass
class ReportData:
    """All data needed to write the CGT workbook."""

    # One list of row tuples per sheet
    summary: list[tuple] = field(default_factory=list)
    transactions: list[tuple] = field(default_factory=list)
    disposals: list[tuple] = field(default_factory=list)
    tax_years: list[tuple] = field(default_factory=list)
    base_costs: list[tuple] = field(default_factory=list)
    balances: list[tuple] = field(default_factory=list)


def collect_report_data(transactions: list[Transaction], result: LedgerResult) -> ReportData:
    data = ReportData()

    data.summary = [
        ("Transactions", len(transactions)),
        ("Disposal Events", len(result.disposal_events)),
        ("Assets Held", ", ".join(result.balances) or "-"),
        ("Tax Years Covered", ", ".join(str(year) for year in result.tax_years()) or "-"),
    ]

    data.transactions = [
        (tx.date, tx.kind.value, tx.sell_asset, tx.sell_quantity,
         tx.buy_asset, tx.buy_quantity, tx.unit_price, tx.total_value)
        for tx in transactions
    ]

    data.disposals = [
        (event.date, event.tax_year, event.kind.value, event.disposed_asset, event.disposed_quantity,
         event.cost_basis, event.proceeds, event.gain, event.describe())
        for event in result.disposal_events
    ]

    for summary in result.tax_year_summaries:
        period = tax_year_range(summary.tax_year)
        data.tax_years.append(
            (summary.tax_year, period, ALL_ASSETS, summary.total_gain, summary.total_loss, summary.net_gain)
        )
        for by_asset in summary.by_asset:
            data.tax_years.append(
                (summary.tax_year, period, by_asset.asset, by_asset.total_gain, by_asset.total_loss, by_asset.net_gain)
            )

    for snapshot in result.year_boundary_snapshots:
        for holding in snapshot.assets:
            data.base_costs.append(
                (snapshot.tax_year, snapshot.boundary_date, holding.asset, holding.quantity, holding.cost_basis)
            )

    data.balances = [
        (balance.asset, balance.total_quantity, balance.total_cost_basis, len(balance.lots))
        for balance in result.balances.values()
    ]

    return data
