from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

"""Pairwise conversion over a base-anchored rate table.

Every conversion pivots through the base currency B, with R[c] = units of c
per 1 unit of B:
    - source == B:  amount * R[target]
    - target == B:  amount / R[source]
    - otherwise:    (amount / R[source]) * R[target]
The unit rate ("1 source = X target") is the same derivation with amount = 1.

Nothing here raises on missing data. A needed rate that is not loaded yields
a result with ``converted``/``unit_rate`` set to None and a ``reason``.
"""

DIVISION_BY_UNAVAILABLE_RATE = "DivisionByUnavailableRate"
UNAVAILABLE_TARGET_RATE = "UnavailableTargetRate"


class SupportsRateLookup(Protocol):
    @property
    def base(self) -> str: ...

    def rate(self, code: str) -> Optional[float]: ...


@dataclass(frozen=True)
class ConversionRequest:
    amount: float
    source: str
    target: str

    @classmethod
    def build(cls, amount: Any, source: str, target: str) -> "ConversionRequest":
        return cls(parse_amount(amount), source.strip().upper(), target.strip().upper())

    def swapped(self) -> "ConversionRequest":
        return ConversionRequest(self.amount, self.target, self.source)


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    source: str
    target: str
    converted: Optional[float]
    unit_rate: Optional[float]
    reason: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.converted is not None


def parse_amount(raw: Any) -> float:
    """Coerce user input into a non-negative finite amount; anything else is 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _derive(
    rates: SupportsRateLookup, amount: float, source: str, target: str
) -> Tuple[Optional[float], Optional[str]]:
    base = rates.base
    if source == base:
        target_rate = rates.rate(target)
        if target_rate is None:
            return None, UNAVAILABLE_TARGET_RATE
        return amount * target_rate, None
    source_rate = rates.rate(source)
    if source_rate is None:
        return None, DIVISION_BY_UNAVAILABLE_RATE
    if target == base:
        return amount / source_rate, None
    target_rate = rates.rate(target)
    if target_rate is None:
        return None, UNAVAILABLE_TARGET_RATE
    return (amount / source_rate) * target_rate, None


def convert(
    rates: SupportsRateLookup, amount: Any, source: str, target: str
) -> ConversionResult:
    return convert_request(rates, ConversionRequest.build(amount, source, target))


def convert_request(
    rates: SupportsRateLookup, request: ConversionRequest
) -> ConversionResult:
    converted, reason = _derive(rates, request.amount, request.source, request.target)
    unit_rate, _ = _derive(rates, 1.0, request.source, request.target)
    return ConversionResult(
        amount=request.amount,
        source=request.source,
        target=request.target,
        converted=converted,
        unit_rate=unit_rate,
        reason=reason,
    )
