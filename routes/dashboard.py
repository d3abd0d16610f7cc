"""
Dashboard API routes.

Plan vs real production: Curva S, daily bars and KPI cards, filtered by
line / SKU / date range and rolled up by day, week or month.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse
import structlog

from models.auth import SessionInfo
from models.dashboard import DashboardView
from models.production import DashboardFilters, FilterOptions
from routes.auth import require_user
from services.aggregation_service import parse_granularity
from services.dashboard_service import get_dashboard_controller
from services.export_service import get_export_service, export_filename
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def build_filters(
    linea: Optional[str],
    sku: Optional[str],
    fecha_desde: Optional[date],
    fecha_hasta: Optional[date],
    granularity: Optional[str],
) -> DashboardFilters:
    """
    Build filters from query params.

    Raises:
        InvalidGranularityError: If granularity is not day/week/month
        InvalidDateRangeError: If fecha_desde > fecha_hasta
    """
    return DashboardFilters(
        linea=linea,
        sku=sku,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        granularity=parse_granularity(granularity),
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=DashboardView)
async def get_dashboard(
    linea: Optional[str] = Query(None, description="Production line (exact)"),
    sku: Optional[str] = Query(None, description="SKU substring, case-insensitive"),
    fecha_desde: Optional[date] = Query(None, description="First day (inclusive)"),
    fecha_hasta: Optional[date] = Query(None, description="Last day (inclusive)"),
    granularity: Optional[str] = Query("day", description="day, week or month"),
    session: SessionInfo = Depends(require_user),
):
    """
    Get the dashboard for a filter state.

    Returns the aggregated series, KPI cards for the latest matching
    record, and Chart.js configs for the curve and bar charts.
    """
    try:
        filters = build_filters(linea, sku, fecha_desde, fecha_hasta, granularity)
        controller = get_dashboard_controller(filters)
        controller.load()
        return controller.render()

    except Exception as e:
        return handle_error(e)


@router.get("/filters", response_model=FilterOptions)
async def get_filter_options(session: SessionInfo = Depends(require_user)):
    """
    Get the values for the filter dropdowns.

    Distinct lines and SKUs in the view, plus its date span.
    """
    try:
        controller = get_dashboard_controller()
        controller.load()
        return controller.filter_options()

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_dashboard(
    linea: Optional[str] = Query(None),
    sku: Optional[str] = Query(None),
    fecha_desde: Optional[date] = Query(None),
    fecha_hasta: Optional[date] = Query(None),
    granularity: Optional[str] = Query("day"),
    session: SessionInfo = Depends(require_user),
):
    """
    Download the filtered rows and their rollup as an Excel workbook.
    """
    try:
        filters = build_filters(linea, sku, fecha_desde, fecha_hasta, granularity)
        controller = get_dashboard_controller(filters)
        controller.load()

        view = controller.render()
        output = get_export_service().generate_dashboard_excel(
            controller.filtered_rows(),
            view.series,
            filters,
        )

        filename = export_filename(filters)
        return StreamingResponse(
            output,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    except Exception as e:
        return handle_error(e)
