from dependency_injector import containers, providers

from zacgt.accounting.ledger_engine import LedgerEngine
from zacgt.config import Settings


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["zacgt.api.deps"])

    settings = providers.Singleton(Settings)

    # New engine per injection; engines carry per-run inventory state
    ledger_engine = providers.Factory(LedgerEngine)
