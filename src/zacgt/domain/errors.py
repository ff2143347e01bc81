"""Errors raised by the parser and the FIFO ledger engine."""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for input problems the caller has to fix."""


class ParseError(LedgerError):
    """A pasted ledger line could not be turned into a Transaction."""

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Error on line {line_number}: {reason}")


class DerivationError(ParseError):
    """A BUY row has no coin quantity and no usable unit price to derive one."""


class InsufficientBalanceError(LedgerError):
    """A disposal asks for more of an asset than the inventory holds."""

    def __init__(self, asset: str, requested: Decimal, available: Decimal) -> None:
        self.asset = asset
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient {asset} balance. Trying to remove {requested}, only {available} available"
        )
