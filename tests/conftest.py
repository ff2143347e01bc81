import pytest

HEADER = "Date\tType\tSellAsset\tSellQuantity\tBuyAsset\tBuyQuantity\tUnitPrice"


def ledger(*rows: str) -> str:
    """Tab separated ledger text with the standard header row."""
    return "\n".join([HEADER, *rows])


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def btc_to_eth_ledger() -> str:
    """Two BTC buys, then part of the BTC traded for ETH in the next tax year."""
    return ledger(
        "2024-11-01\tBUY\tZAR\t8000\tBTC\t0.1\t80000",
        "2024-11-02\tBUY\tZAR\t18000\tBTC\t0.2\t90000",
        "2025-05-05\tTRADE\tBTC\t0.133333333\tETH\t10\t2000",
    )
