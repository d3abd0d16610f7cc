"""
Business logic services.

Each service handles one domain area.
"""

from services.aggregation_service import aggregate_rows, aggregate_periods, parse_granularity
from services.kpi_service import calculate_kpis, is_behind_schedule
from services.chart_service import build_charts
from services.dashboard_service import (
    DashboardController,
    get_dashboard_controller,
    filter_rows,
    available_filters,
)
from services.holiday_sync_service import HolidaySyncService, get_holiday_sync_service
from services.auth_service import AuthService, get_auth_service
from services.export_service import ExportService, get_export_service

__all__ = [
    "aggregate_rows",
    "aggregate_periods",
    "parse_granularity",
    "calculate_kpis",
    "is_behind_schedule",
    "build_charts",
    "DashboardController",
    "get_dashboard_controller",
    "filter_rows",
    "available_filters",
    "HolidaySyncService",
    "get_holiday_sync_service",
    "AuthService",
    "get_auth_service",
    "ExportService",
    "get_export_service",
]
