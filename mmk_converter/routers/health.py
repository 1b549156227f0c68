from fastapi import APIRouter, Depends

from mmk_converter.core.config import Settings, get_app_settings
from mmk_converter.services.rates.manager import RateTableManager, get_rate_manager

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_app_settings),
    manager: RateTableManager = Depends(get_rate_manager),
):
    return {
        "status": "ok",
        "version": settings.version,
        "rates": manager.status.value,
    }
