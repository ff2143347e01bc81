"""Tests for report data collection from a ledger run."""

from datetime import datetime
from decimal import Decimal

import pytest

from zacgt.accounting.ledger_engine import compute_ledger
from zacgt.parser.transaction_parser import parse_transactions
from zacgt.report.data_collector import ALL_ASSETS, ReportData, collect_report_data


class TestCollectReportData:
    @pytest.fixture()
    def data(self, btc_to_eth_ledger) -> ReportData:
        transactions = parse_transactions(btc_to_eth_ledger)
        return collect_report_data(transactions, compute_ledger(transactions))

    def test_summary(self, data):
        assert ("Transactions", 3) in data.summary
        assert ("Assets Held", "BTC, ETH") in data.summary
        assert ("Tax Years Covered", "2026") in data.summary

    def test_transaction_rows(self, data):
        assert len(data.transactions) == 3
        assert data.transactions[2][1] == "TRADE"
        assert data.transactions[2][7] == Decimal("20000")

    def test_disposal_rows(self, data):
        [row] = data.disposals
        assert row[0] == datetime(2025, 5, 5)
        assert row[1] == 2026
        assert row[3] == "BTC"
        assert row[7] == Decimal("9000.00003")
        assert row[8].startswith("2025-05-05: Sold 0.13333333 BTC for R20,000.00")
        assert row[8].endswith("Gain: R9,000.00)")

    def test_tax_year_rows_total_then_assets(self, data):
        assert [r[2] for r in data.tax_years] == [ALL_ASSETS, "BTC"]
        assert data.tax_years[0][1] == "1 Mar 2025 – 28 Feb 2026"

    def test_base_cost_rows(self, data):
        assert [(r[0], r[2]) for r in data.base_costs] == [(2025, "BTC"), (2026, "BTC"), (2026, "ETH")]

    def test_balance_rows(self, data):
        assert [(r[0], r[3]) for r in data.balances] == [("BTC", 1), ("ETH", 1)]


class TestEmptyLedger:
    def test_no_rows(self):
        data = collect_report_data([], compute_ledger([]))
        assert data.disposals == []
        assert data.base_costs == []
        assert ("Transactions", 0) in data.summary
