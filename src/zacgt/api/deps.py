from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from zacgt.accounting.ledger_engine import LedgerEngine
from zacgt.container import Container


@inject
async def get_ledger_engine(
    engine: LedgerEngine = Depends(Provide[Container.ledger_engine]),
) -> LedgerEngine:
    """A fresh engine per request; inventories are never shared between calls."""
    return engine


EngineDep = Annotated[LedgerEngine, Depends(get_ledger_engine)]
