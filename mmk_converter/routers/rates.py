from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from mmk_converter.models.constants import CURRENCIES
from mmk_converter.models.rates import CurrencyOut, RateTableOut, RefreshStatusOut
from mmk_converter.services.rate_views import status_view, table_view
from mmk_converter.services.rates.manager import RateTableManager, get_rate_manager

"""Rates router.

Endpoints:
    - GET  /rates          -> current table (possibly stale) + refresh status
    - GET  /rates/status   -> refresh status only
    - POST /rates/refresh  -> fetch a fresh table from the provider
    - GET  /currencies     -> static currency reference list

A failed refresh is still a 200: the error travels in the body and the
previous table keeps serving.
"""

router = APIRouter(tags=["rates"])


@router.get("/rates", response_model=RateTableOut, summary="Current rate table")
async def get_rates(manager: RateTableManager = Depends(get_rate_manager)):
    return table_view(manager.snapshot())


@router.get(
    "/rates/status", response_model=RefreshStatusOut, summary="Rate refresh status"
)
async def get_status(manager: RateTableManager = Depends(get_rate_manager)):
    return status_view(manager.snapshot())


@router.post(
    "/rates/refresh", response_model=RateTableOut, summary="Refresh rates from provider"
)
async def refresh_rates(manager: RateTableManager = Depends(get_rate_manager)):
    state = await manager.refresh()
    return table_view(state)


@router.get(
    "/currencies", response_model=List[CurrencyOut], summary="Supported currencies"
)
async def list_currencies():
    return [{"code": c.code, "name": c.name, "flag": c.flag} for c in CURRENCIES]
