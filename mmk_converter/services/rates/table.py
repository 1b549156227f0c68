from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Optional

"""Immutable base-anchored rate table.

A table maps currency code -> units of that currency per 1 unit of the base
currency. The base entry is always exactly 1. A stored 0 means "not loaded
yet"; lookups through ``rate()`` turn both that sentinel and absent codes into
``None`` so callers must branch on availability instead of dividing by zero.
"""


class RateTable(Mapping):
    __slots__ = ("_base", "_rates")

    def __init__(self, rates: Mapping[str, float], base: str):
        base = base.upper()
        cleaned: Dict[str, float] = {}
        for code, value in rates.items():
            value = float(value)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"invalid rate for {code}: {value!r}")
            cleaned[code.upper()] = value
        cleaned[base] = 1.0
        self._base = base
        self._rates = cleaned

    @classmethod
    def initial(cls, base: str, codes: Iterable[str]) -> "RateTable":
        """Unloaded table: every known code at the 0 sentinel except the base."""
        return cls({code: 0.0 for code in codes}, base)

    @property
    def base(self) -> str:
        return self._base

    def rate(self, code: str) -> Optional[float]:
        value = self._rates.get(code.upper())
        if not value:
            return None
        return value

    def is_loaded(self) -> bool:
        return any(v > 0 for c, v in self._rates.items() if c != self._base)

    def as_dict(self) -> Dict[str, float]:
        return dict(self._rates)

    def __getitem__(self, code: str) -> float:
        return self._rates[code.upper()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"RateTable(base={self._base!r}, size={len(self._rates)})"
