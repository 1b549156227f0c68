from datetime import datetime, timezone

import pytest

from mmk_converter.services.money import (
    format_amount,
    format_rate,
    format_timestamp,
    format_unit_rate,
)


def test_amount_and_rate_places():
    assert format_amount(208333.3333) == "208333.33"
    assert format_rate(0.00048) == "0.000480"


def test_unavailable_values():
    assert format_amount(None) == "N/A"
    assert format_unit_rate(None, "USD", "MMK", "MMK") == "N/A"


@pytest.mark.parametrize(
    "source, target, expected",
    [
        ("MMK", "USD", "2083.333333"),
        ("USD", "MMK", "2083.33"),
        ("USD", "CNY", "2083.333333"),
        ("MMK", "MMK", "2083.333333"),
    ],
)
def test_unit_rate_precision_depends_on_direction(source, target, expected):
    assert format_unit_rate(2083.3333333, source, target, "MMK") == expected


def test_timestamp_display():
    ts = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)
    assert format_timestamp(ts) == "Oct 19, 2026, 02:30 PM"
    assert format_timestamp(None) is None
