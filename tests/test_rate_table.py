import math

import pytest

from mmk_converter.services.rates.table import RateTable


def test_base_entry_forced_to_one():
    table = RateTable({"MMK": 3.5, "USD": 0.00048}, "MMK")
    assert table["MMK"] == 1.0
    assert table.rate("MMK") == 1.0


def test_base_added_when_missing():
    table = RateTable({"USD": 0.00048}, "mmk")
    assert table.base == "MMK"
    assert table["MMK"] == 1.0


def test_initial_table_is_unloaded():
    table = RateTable.initial("MMK", ["MMK", "USD", "CNY"])
    assert table.as_dict() == {"MMK": 1.0, "USD": 0.0, "CNY": 0.0}
    assert table.rate("USD") is None
    assert not table.is_loaded()


def test_rate_lookup_is_optional():
    table = RateTable({"USD": 0.00048, "JPY": 0}, "MMK")
    assert table.rate("usd") == 0.00048
    assert table.rate("JPY") is None
    assert table.rate("EUR") is None
    assert table.is_loaded()


@pytest.mark.parametrize("bad", [-1.0, math.inf, math.nan])
def test_rejects_invalid_rates(bad):
    with pytest.raises(ValueError):
        RateTable({"USD": bad}, "MMK")


def test_as_dict_is_a_copy():
    table = RateTable({"USD": 0.00048}, "MMK")
    copy = table.as_dict()
    copy["USD"] = 99.0
    assert table["USD"] == 0.00048


def test_mapping_protocol():
    table = RateTable({"USD": 0.00048, "CNY": 0.0034}, "MMK")
    assert set(table) == {"USD", "CNY", "MMK"}
    assert len(table) == 3
    assert table == {"USD": 0.00048, "CNY": 0.0034, "MMK": 1.0}
