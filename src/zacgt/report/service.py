"""Report service — pasted ledger in, xlsx workbook out."""

import logging
from io import BytesIO

from zacgt.accounting.ledger_engine import LedgerEngine
from zacgt.parser.transaction_parser import parse_transactions
from zacgt.report.data_collector import collect_report_data
from zacgt.report.excel_writer import ExcelWriter

logger = logging.getLogger(__name__)

REPORT_FILENAME = "crypto_cgt_report.xlsx"


def build_report(raw_text: str, engine: LedgerEngine | None = None) -> BytesIO:
    """Parse, run FIFO and render the workbook. Parse and balance errors propagate."""
    transactions = parse_transactions(raw_text)
    result = (engine or LedgerEngine()).calculate(transactions)
    data = collect_report_data(transactions, result)
    buf = ExcelWriter().write_to_buffer(data)
    logger.info(
        "Report generated: %d transactions, %d disposals",
        len(transactions),
        len(result.disposal_events),
    )
    return buf
