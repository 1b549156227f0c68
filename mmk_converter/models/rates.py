from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CurrencyOut(BaseModel):
    code: str
    name: str
    flag: str


class RateCard(BaseModel):
    code: str
    name: str
    flag: str
    rate: Optional[float] = Field(None, description="Units of currency per 1 base unit")
    display: str


class RefreshErrorOut(BaseModel):
    kind: str
    message: str


class RefreshStatusOut(BaseModel):
    status: str
    last_updated_at: Optional[datetime] = None
    last_updated_display: Optional[str] = None
    stale: bool
    error: Optional[RefreshErrorOut] = None


class RateTableOut(RefreshStatusOut):
    base_currency: str
    rates: Dict[str, float]
    cards: List[RateCard]


class ConversionOut(BaseModel):
    amount: float
    source: str
    target: str
    converted: Optional[float] = None
    unit_rate: Optional[float] = None
    available: bool
    reason: Optional[str] = None
    converted_display: str
    unit_rate_display: str
    status: str
