"""
Pydantic models for request/response validation.
"""

from models.base import BaseSchema
from models.production import (
    Granularity,
    ProductionRecord,
    AggregatedPeriod,
    AggregatedSeries,
    DashboardFilters,
    FilterOptions,
)
from models.kpi import KPISnapshot
from models.dashboard import DashboardCharts, DashboardView
from models.holiday import (
    HolidayRecord,
    HolidaySyncResult,
    HolidaySyncResponse,
    HolidayListResponse,
)
from models.auth import SignInRequest, SessionUser, SessionInfo, AuthResult

__all__ = [
    "BaseSchema",
    # Production
    "Granularity",
    "ProductionRecord",
    "AggregatedPeriod",
    "AggregatedSeries",
    "DashboardFilters",
    "FilterOptions",
    # KPIs / dashboard
    "KPISnapshot",
    "DashboardCharts",
    "DashboardView",
    # Holidays
    "HolidayRecord",
    "HolidaySyncResult",
    "HolidaySyncResponse",
    "HolidayListResponse",
    # Auth
    "SignInRequest",
    "SessionUser",
    "SessionInfo",
    "AuthResult",
]
