from zacgt.domain.enums.transaction import FiatCurrency, TransactionKind

__all__ = [
    "FiatCurrency",
    "TransactionKind",
]
