"""Transaction record parsed from one ledger line."""

from decimal import Decimal

from pydantic import ConfigDict, computed_field, field_validator, model_validator

from zacgt.domain.enums import FiatCurrency, TransactionKind
from zacgt.domain.models.base import CamelModel, LedgerDateTime

FIAT = FiatCurrency.ZAR.value


def check_asset_placement(kind: TransactionKind, sell_asset: str, buy_asset: str) -> None:
    """Enforce where ZAR may appear for each transaction kind. Raises ValueError."""
    if not sell_asset or not buy_asset:
        raise ValueError("SellAsset and BuyAsset cannot be empty")

    if kind == TransactionKind.BUY and sell_asset != FIAT:
        raise ValueError(f"BUY transactions must sell {FIAT}")
    if kind == TransactionKind.SELL and buy_asset != FIAT:
        raise ValueError(f"SELL transactions must buy {FIAT}")
    if kind == TransactionKind.TRADE and FIAT in (sell_asset, buy_asset):
        raise ValueError(f"TRADE transactions cannot involve {FIAT}")


class Transaction(CamelModel):
    """One BUY, SELL or TRADE line. Immutable once parsed."""

    model_config = ConfigDict(frozen=True)

    date: LedgerDateTime
    kind: TransactionKind
    sell_asset: str
    sell_quantity: Decimal
    buy_asset: str
    buy_quantity: Decimal
    unit_price: Decimal  # ZAR per unit of buy_asset

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("sell_asset", "buy_asset")
    @classmethod
    def _normalize_asset(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_invariants(self) -> "Transaction":
        check_asset_placement(self.kind, self.sell_asset, self.buy_asset)
        if self.sell_quantity < 0 or self.buy_quantity < 0:
            raise ValueError("Quantities cannot be negative")
        return self

    @computed_field(alias="totalValue")
    @property
    def total_value(self) -> Decimal:
        """ZAR value of the transaction."""
        if self.kind == TransactionKind.SELL:
            return self.buy_quantity
        if self.kind == TransactionKind.BUY:
            return self.sell_quantity
        return self.buy_quantity * self.unit_price

    def involved_assets(self) -> list[str]:
        return [asset for asset in (self.sell_asset, self.buy_asset) if asset != FIAT]
