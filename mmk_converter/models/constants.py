"""Static currency reference data.

The list order is the display order of the converter page. The configured base
currency (MMK by default) comes first and is never shown as a rate card.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    flag: str


CURRENCIES: Tuple[Currency, ...] = (
    Currency("MMK", "Myanmar Kyat", "\U0001F1F2\U0001F1F2"),
    Currency("CNY", "Chinese Yuan", "\U0001F1E8\U0001F1F3"),
    Currency("JPY", "Japanese Yen", "\U0001F1EF\U0001F1F5"),
    Currency("USD", "US Dollar", "\U0001F1FA\U0001F1F8"),
    Currency("EUR", "Euro", "\U0001F1EA\U0001F1FA"),
    Currency("GBP", "British Pound", "\U0001F1EC\U0001F1E7"),
    Currency("THB", "Thai Baht", "\U0001F1F9\U0001F1ED"),
    Currency("SGD", "Singapore Dollar", "\U0001F1F8\U0001F1EC"),
    Currency("KRW", "South Korean Won", "\U0001F1F0\U0001F1F7"),
)

CURRENCY_CODES: List[str] = [c.code for c in CURRENCIES]

def quote_currencies(base: str) -> List[Currency]:
    """Reference currencies other than the base, in display order."""
    return [c for c in CURRENCIES if c.code != base]
