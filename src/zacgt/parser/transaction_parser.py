"""Pasted ledger parser.

Turns text copied out of a spreadsheet (tab separated) or a CSV export
into date-ordered Transaction records. Expected columns:

    Date | Type | SellAsset | SellQuantity | BuyAsset | BuyQuantity | UnitPrice

The first line is a header and is skipped. Any bad line aborts the whole
parse: a partial ledger would make FIFO ordering unreliable.
"""

from __future__ import annotations

import csv
import re
from datetime import datetime
from decimal import Decimal, DecimalException, InvalidOperation

from zacgt.domain.enums import TransactionKind
from zacgt.domain.errors import DerivationError, ParseError
from zacgt.domain.models.transaction import Transaction, check_asset_placement

EXPECTED_COLUMNS = 7

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",  # 2023-05-03 10:34:09
    "%Y-%m-%d",  # 2023-05-03
    "%d/%m/%Y %H:%M:%S",  # 03/05/2023 10:34:09
    "%d/%m/%Y",  # 03/05/2023
)

_STRIP_CHARS = re.compile(r"[R$€£\s]")
_NUMERIC = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Largest |exponent| an amount may carry, e.g. 1e100
MAX_AMOUNT_EXPONENT = 100


def parse_transactions(raw_text: str) -> list[Transaction]:
    """Parse pasted text into transactions sorted by date (stable for equal dates)."""
    lines = split_lines(raw_text)
    if len(lines) == 1 and not lines[0]:
        raise ParseError(1, "No data provided")

    transactions: list[Transaction] = []
    # Line 1 is the header; blank lines still count towards line numbers
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            transactions.append(_parse_line(line, line_number))
        except ValueError as exc:
            raise ParseError(line_number, str(exc)) from exc

    transactions.sort(key=lambda tx: tx.date)
    return transactions


def split_lines(raw_text: str) -> list[str]:
    normalized = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.strip().split("\n")


def split_fields(line: str) -> list[str]:
    """Tab separated first (spreadsheet paste), comma separated as fallback."""
    fields = next(csv.reader([line], delimiter="\t"), [])
    if len(fields) == 1:
        fields = next(csv.reader([line], delimiter=","), [])
    return fields


def parse_date(value: str) -> datetime:
    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {value}")


def parse_amount(value: str) -> Decimal:
    """Parse a money or coin amount written in either locale.

    ``1,234.56`` and ``1.234,56`` both give 1234.56, ``0,1`` gives 0.1.
    Currency symbols and spaces are ignored; an empty value is 0.
    """
    cleaned = _STRIP_CHARS.sub("", value)
    if not cleaned:
        return Decimal(0)

    if "," in cleaned and "." not in cleaned:
        cleaned = cleaned.replace(",", ".")
    elif "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    else:
        cleaned = cleaned.replace(",", "")

    if not _NUMERIC.fullmatch(cleaned):
        raise ValueError(f"Invalid amount: {value!r} (cleaned: {cleaned!r})")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r} (cleaned: {cleaned!r})") from exc
    if amount and abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT:
        raise ValueError(f"Invalid amount: {value!r} is out of range")
    return amount


def parse_kind(value: str) -> TransactionKind:
    try:
        return TransactionKind(value.strip().upper())
    except ValueError:
        raise ValueError(f"Invalid transaction type: {value.strip()}. Must be BUY, SELL, or TRADE") from None


def _parse_line(line: str, line_number: int) -> Transaction:
    fields = split_fields(line)
    if len(fields) < EXPECTED_COLUMNS:
        raise ValueError(f"Expected {EXPECTED_COLUMNS} columns, got {len(fields)}")

    date = parse_date(fields[0])
    kind_text = fields[1].strip().upper()
    sell_asset = fields[2].strip().upper()
    sell_quantity = parse_amount(fields[3])
    buy_asset = fields[4].strip().upper()
    buy_quantity = parse_amount(fields[5])
    unit_price = parse_amount(fields[6])

    if kind_text == TransactionKind.BUY.value and buy_quantity == 0:
        buy_quantity = _derive_buy_quantity(sell_quantity, unit_price, line_number)

    kind = parse_kind(kind_text)
    check_asset_placement(kind, sell_asset, buy_asset)
    if sell_quantity < 0 or buy_quantity < 0:
        raise ValueError("Quantities cannot be negative")

    return Transaction(
        date=date,
        kind=kind,
        sell_asset=sell_asset,
        sell_quantity=sell_quantity,
        buy_asset=buy_asset,
        buy_quantity=buy_quantity,
        unit_price=unit_price,
    )


def _derive_buy_quantity(sell_quantity: Decimal, unit_price: Decimal, line_number: int) -> Decimal:
    """Coins bought = ZAR spent / price per coin."""
    if unit_price <= 0:
        raise DerivationError(
            line_number,
            "BuyQuantity is blank and UnitPrice is not positive; cannot derive the coin quantity",
        )
    try:
        return sell_quantity / unit_price
    except DecimalException as exc:
        raise DerivationError(line_number, f"Cannot derive BuyQuantity: {exc!r}") from exc
