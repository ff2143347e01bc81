from zacgt.domain.enums import FiatCurrency, TransactionKind


class TestEnumsAreStringMixin:
    """All enums use (str, Enum) so they serialize to strings in JSON."""

    def test_transaction_kind_is_str(self):
        assert isinstance(TransactionKind.BUY, str)
        assert TransactionKind.TRADE == "TRADE"

    def test_transaction_kind_members(self):
        assert [k.value for k in TransactionKind] == ["BUY", "SELL", "TRADE"]

    def test_fiat_is_zar(self):
        assert FiatCurrency.ZAR == "ZAR"
