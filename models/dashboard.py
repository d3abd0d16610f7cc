"""
Dashboard response schemas.
"""

from pydantic import Field
from typing import Any, Optional

from models.base import BaseSchema
from models.production import AggregatedSeries, DashboardFilters
from models.kpi import KPISnapshot


class DashboardCharts(BaseSchema):
    """Declarative Chart.js configs; the client updates charts in place."""

    curve: dict[str, Any]
    bar: dict[str, Any]


class DashboardView(BaseSchema):
    """Everything the dashboard page needs for one filter state."""

    filters: DashboardFilters
    row_count: int = Field(..., description="Rows left after filtering")
    series: AggregatedSeries
    kpis: Optional[KPISnapshot] = None
    charts: DashboardCharts
