"""Shape rate state and conversion results for presentation.

Used by both the JSON routers and the HTML page so numbers are formatted the
same way everywhere.
"""

from __future__ import annotations
from typing import Any, Dict, List

from mmk_converter.models.constants import quote_currencies
from mmk_converter.services.money import (
    format_amount,
    format_rate,
    format_timestamp,
    format_unit_rate,
)
from mmk_converter.services.rates.conversion import ConversionResult
from mmk_converter.services.rates.manager import RateState


def status_view(state: RateState) -> Dict[str, Any]:
    error = None
    if state.error_kind:
        error = {"kind": state.error_kind, "message": state.error_message or ""}
    return {
        "status": state.status.value,
        "last_updated_at": state.last_updated_at,
        "last_updated_display": format_timestamp(state.last_updated_at),
        "stale": state.stale,
        "error": error,
    }


def rate_cards(state: RateState) -> List[Dict[str, Any]]:
    cards = []
    for cur in quote_currencies(state.table.base):
        rate = state.table.rate(cur.code)
        cards.append(
            {
                "code": cur.code,
                "name": cur.name,
                "flag": cur.flag,
                "rate": rate,
                "display": format_rate(rate),
            }
        )
    return cards


def table_view(state: RateState) -> Dict[str, Any]:
    out = status_view(state)
    out.update(
        {
            "base_currency": state.table.base,
            "rates": state.table.as_dict(),
            "cards": rate_cards(state),
        }
    )
    return out


def conversion_view(result: ConversionResult, state: RateState) -> Dict[str, Any]:
    return {
        "amount": result.amount,
        "source": result.source,
        "target": result.target,
        "converted": result.converted,
        "unit_rate": result.unit_rate,
        "available": result.available,
        "reason": result.reason,
        "converted_display": format_amount(result.converted),
        "unit_rate_display": format_unit_rate(
            result.unit_rate, result.source, result.target, state.table.base
        ),
        "status": state.status.value,
    }
