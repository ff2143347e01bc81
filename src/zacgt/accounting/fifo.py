"""FIFO lot inventory — pure functions, no I/O.

SARS accepts FIFO for crypto: the oldest purchase lot is disposed of first.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from zacgt.domain.errors import InsufficientBalanceError
from zacgt.domain.models.ledger import DUST_THRESHOLD, Lot, LotConsumption


@dataclass
class AssetInventory:
    """Open lots for one asset, oldest first."""

    asset: str
    lots: deque[Lot] = field(default_factory=deque)

    def __post_init__(self) -> None:
        self.asset = self.asset.upper()

    def add_lot(self, lot: Lot) -> None:
        if lot.asset != self.asset:
            raise ValueError(f"Cannot add {lot.asset} lot to {self.asset} inventory")
        self.lots.append(lot)

    def total_quantity(self) -> Decimal:
        return sum((lot.quantity for lot in self.lots), Decimal(0))

    def total_cost_basis(self) -> Decimal:
        return sum((lot.cost_basis for lot in self.lots), Decimal(0))

    def is_empty(self) -> bool:
        return not self.lots or self.total_quantity() <= DUST_THRESHOLD

    def holdings_as_of(self, moment: datetime) -> tuple[Decimal, Decimal]:
        """(quantity, cost_basis) of current lots acquired at or before ``moment``.

        Reads the lots as they stand now; lots are not replayed back in time.
        """
        held = [lot for lot in self.lots if lot.acquired_at <= moment]
        quantity = sum((lot.quantity for lot in held), Decimal(0))
        cost_basis = sum((lot.cost_basis for lot in held), Decimal(0))
        return quantity, cost_basis


def remove_fifo(inventory: AssetInventory, quantity: Decimal) -> list[LotConsumption]:
    """Consume ``quantity`` from the oldest lots first.

    Args:
        inventory: Mutated in place; emptied lots are pruned.
        quantity: Amount being disposed of.

    Returns:
        The consumed portions, oldest first.

    Raises:
        InsufficientBalanceError: ``quantity`` exceeds what the inventory holds.
    """
    available = inventory.total_quantity()
    if quantity > available:
        raise InsufficientBalanceError(inventory.asset, quantity, available)

    consumed: list[LotConsumption] = []
    remaining = quantity

    for lot in inventory.lots:
        if remaining <= DUST_THRESHOLD:
            break

        if lot.quantity <= remaining:
            consumed.append(LotConsumption.from_lot(lot))
            remaining -= lot.quantity
            lot.quantity = Decimal(0)
        else:
            # Split: the lot keeps what is left
            consumed.append(LotConsumption.from_lot(lot, quantity=remaining))
            lot.quantity -= remaining
            remaining = Decimal(0)

    inventory.lots = deque(lot for lot in inventory.lots if not lot.is_empty())
    return consumed


def total_cost(consumed: list[LotConsumption]) -> Decimal:
    return sum((c.cost_basis for c in consumed), Decimal(0))
