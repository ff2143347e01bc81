from enum import Enum


class TransactionKind(str, Enum):
    """Ledger row types. BUY/SELL settle against ZAR, TRADE is crypto to crypto."""

    BUY = "BUY"
    SELL = "SELL"
    TRADE = "TRADE"


class FiatCurrency(str, Enum):
    """Reporting currency. SARS assesses CGT in rand."""

    ZAR = "ZAR"
