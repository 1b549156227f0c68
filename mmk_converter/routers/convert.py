from fastapi import APIRouter, Depends, Query

from mmk_converter.models.rates import ConversionOut
from mmk_converter.services.rate_views import conversion_view
from mmk_converter.services.rates.conversion import convert
from mmk_converter.services.rates.manager import RateTableManager, get_rate_manager

router = APIRouter(tags=["convert"])

CODE_PATTERN = r"^[A-Za-z]{3}$"


@router.get("/convert", response_model=ConversionOut, summary="Convert an amount")
async def convert_amount(
    amount: str = Query("0", description="Amount in source currency; invalid input counts as 0"),
    source: str = Query(..., pattern=CODE_PATTERN, description="Source currency code"),
    target: str = Query(..., pattern=CODE_PATTERN, description="Target currency code"),
    manager: RateTableManager = Depends(get_rate_manager),
):
    # Reads the current snapshot even while a refresh is in flight
    state = manager.snapshot()
    result = convert(state.table, amount, source, target)
    return conversion_view(result, state)
