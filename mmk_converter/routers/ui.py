from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from mmk_converter.core.config import Settings, get_app_settings
from mmk_converter.models.constants import CURRENCIES, CURRENCY_CODES
from mmk_converter.services.rate_views import conversion_view, rate_cards, status_view
from mmk_converter.services.rates.conversion import ConversionRequest, convert_request
from mmk_converter.services.rates.manager import (
    RateTableManager,
    RefreshStatus,
    get_rate_manager,
)

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

DEFAULT_AMOUNT = "1000"
# default source is the configured base currency
DEFAULT_TARGET = "CNY"


def _pick(code: Optional[str], fallback: str) -> str:
    code = (code or "").strip().upper()
    return code if code in CURRENCY_CODES else fallback


def _ui_url(request: Request, amount: str, source: str, target: str) -> str:
    url = request.url_for("ui_home").include_query_params(
        amount=amount, source=source, target=target
    )
    return str(url)


@router.get("/ui", response_class=HTMLResponse, name="ui_home")
async def ui_home(
    request: Request,
    amount: str = Query(DEFAULT_AMOUNT),
    source: Optional[str] = Query(None),
    target: str = Query(DEFAULT_TARGET),
    settings: Settings = Depends(get_app_settings),
    manager: RateTableManager = Depends(get_rate_manager),
):
    source = _pick(source, settings.base_currency)
    target = _pick(target, DEFAULT_TARGET)
    state = manager.snapshot()
    result = convert_request(state.table, ConversionRequest.build(amount, source, target))

    context: Dict[str, Any] = {
        "app_name": settings.app_name,
        "version": settings.version,
        "amount": amount,
        "source": source,
        "target": target,
        "currencies": CURRENCIES,
        "conversion": conversion_view(result, state),
        "cards": rate_cards(state),
        # First load still pending: nothing has ever been fetched
        "initial_load": state.status is RefreshStatus.LOADING
        and not state.table.is_loaded(),
        "loading": state.status is RefreshStatus.LOADING,
    }
    context.update(status_view(state))
    return templates.TemplateResponse(request, "converter.html", context)


@router.get("/ui/swap", name="ui_swap")
async def ui_swap(
    request: Request,
    amount: str = Query(DEFAULT_AMOUNT),
    source: Optional[str] = Query(None),
    target: str = Query(DEFAULT_TARGET),
    settings: Settings = Depends(get_app_settings),
):
    """Swap the pair. Pure relabelling: the rate table is not touched."""
    swapped = ConversionRequest(
        0.0, _pick(source, settings.base_currency), _pick(target, DEFAULT_TARGET)
    ).swapped()
    return RedirectResponse(
        _ui_url(request, amount, swapped.source, swapped.target), status_code=303
    )


@router.post("/ui/refresh", name="ui_refresh")
async def ui_refresh(
    request: Request,
    amount: str = Query(DEFAULT_AMOUNT),
    source: Optional[str] = Query(None),
    target: str = Query(DEFAULT_TARGET),
    settings: Settings = Depends(get_app_settings),
    manager: RateTableManager = Depends(get_rate_manager),
):
    await manager.refresh()
    return RedirectResponse(
        _ui_url(request, amount, _pick(source, settings.base_currency), _pick(target, DEFAULT_TARGET)),
        status_code=303,
    )
