"""
Holiday routes.

/api/sync-feriados is hit by the scheduler and keeps its flat
{success, message} / {error} contract.
"""

import hmac
from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
import structlog

from config import settings
from models.holiday import HolidayListResponse, HolidaySyncResponse
from services.holiday_sync_service import get_holiday_sync_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Holidays"])


def cron_authorized(request: Request) -> bool:
    """True when no CRON_SECRET is set or the Bearer token matches it."""
    if not settings.cron_secret:
        return True
    header = request.headers.get("Authorization", "")
    expected = f"Bearer {settings.cron_secret}"
    return hmac.compare_digest(header.encode(), expected.encode())


@router.get("/sync-feriados", response_model=HolidaySyncResponse)
async def sync_feriados(request: Request):
    """
    Sync the current year's holidays into feriados_ar.

    Returns:
        200 {success: true, message: "Synced N holidays for YYYY"}
        500 {error: "..."} on missing config, API or database failure
    """
    if not cron_authorized(request):
        logger.warning("holiday_sync_unauthorized")
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        result = get_holiday_sync_service().sync()
        return HolidaySyncResponse(success=True, message=result.message)

    except AppError as e:
        logger.error("holiday_sync_failed", code=e.code, error=e.message)
        return JSONResponse(status_code=500, content={"error": e.message})
    except Exception as e:
        logger.error("holiday_sync_failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/holidays", response_model=HolidayListResponse)
async def list_holidays(
    year: Optional[int] = Query(None, ge=1900, le=2200, description="Year (defaults to current)")
):
    """Get the holidays stored for a year, ordered by date."""
    year = year or date.today().year
    try:
        holidays = get_holiday_sync_service().list_holidays(year)
    except AppError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    return HolidayListResponse(year=year, data=holidays, total=len(holidays))
