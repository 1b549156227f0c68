"""Currency reference data and API models."""

from .constants import (
    CURRENCIES,
    CURRENCY_CODES,
    Currency,
)  # re-export
from .rates import (
    ConversionOut,
    CurrencyOut,
    RateCard,
    RateTableOut,
    RefreshErrorOut,
    RefreshStatusOut,
)

__all__ = [
    "CURRENCIES",
    "CURRENCY_CODES",
    "Currency",
    "ConversionOut",
    "CurrencyOut",
    "RateCard",
    "RateTableOut",
    "RefreshErrorOut",
    "RefreshStatusOut",
]
