"""Money / display formatting helpers.

Centralized so the JSON API and the converter page render numbers with
identical fixed-point rules.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional

UNAVAILABLE = "N/A"

AMOUNT_PLACES = 2
RATE_PLACES = 6
# quotes into the base currency, e.g. "1 USD = 2083.33 MMK"
BASE_QUOTE_PLACES = 2


def format_fixed(value: Optional[float], places: int) -> str:
    if value is None:
        return UNAVAILABLE
    return f"{value:.{places}f}"


def format_amount(value: Optional[float]) -> str:
    return format_fixed(value, AMOUNT_PLACES)


def format_rate(value: Optional[float]) -> str:
    return format_fixed(value, RATE_PLACES)


def format_unit_rate(value: Optional[float], source: str, target: str, base: str) -> str:
    """Display a "1 source = value target" rate.

    Quotes into the base currency use amount precision; every other
    direction keeps rate precision.
    """
    if target == base and source != base:
        return format_fixed(value, BASE_QUOTE_PLACES)
    return format_fixed(value, RATE_PLACES)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%b %d, %Y, %I:%M %p")
