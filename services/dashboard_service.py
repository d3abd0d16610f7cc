"""
Dashboard controller.

Owns the filter state and the last fetched dataset, and turns them into
a DashboardView (series, KPIs, chart configs). One controller per page
session; nothing here is module-global.
"""

from typing import Optional, Sequence
import structlog

from config import settings, get_supabase_client
from models.production import (
    DashboardFilters,
    FilterOptions,
    ProductionRecord,
)
from models.dashboard import DashboardView
from services.aggregation_service import aggregate_rows
from services.chart_service import build_charts
from services.kpi_service import calculate_kpis, latest_record
from exceptions import DatabaseError
from utils.text_utils import contains_ignoring_case

logger = structlog.get_logger(__name__)

VIEW_COLUMNS = (
    "fecha, linea, id_sku, plan_dia, real_dia, plan_acumulado, "
    "real_acumulado, dias_atraso, ritmo_promedio"
)


def filter_rows(
    rows: Sequence[ProductionRecord],
    filters: DashboardFilters
) -> list[ProductionRecord]:
    """
    Apply the UI filters to a dataset, keeping its order.

    - linea: exact match
    - sku: case-insensitive substring of id_sku
    - fecha_desde / fecha_hasta: inclusive bounds

    Args:
        rows: Dataset ordered by fecha
        filters: Current filter state

    Returns:
        Matching rows
    """
    result = []
    for row in rows:
        if filters.linea is not None and row.linea != filters.linea:
            continue
        if filters.sku and not contains_ignoring_case(row.id_sku, filters.sku):
            continue
        if filters.fecha_desde and row.fecha < filters.fecha_desde:
            continue
        if filters.fecha_hasta and row.fecha > filters.fecha_hasta:
            continue
        result.append(row)
    return result


def available_filters(rows: Sequence[ProductionRecord]) -> FilterOptions:
    """Distinct lines and SKUs (sorted) plus the date span of a dataset."""
    if not rows:
        return FilterOptions()

    return FilterOptions(
        lineas=sorted({row.linea for row in rows if row.linea}),
        skus=sorted({row.id_sku for row in rows if row.id_sku}),
        fecha_min=min(row.fecha for row in rows),
        fecha_max=max(row.fecha for row in rows),
    )


class DashboardController:
    """
    Dashboard state and orchestration.

    Holds:
        filters: Current DashboardFilters
        rows: Last dataset fetched from the view (None until load())

    Flow: load() → apply_filters() → render()
    """

    def __init__(self, filters: Optional[DashboardFilters] = None):
        self.db = get_supabase_client()
        self.view = settings.dashboard_view
        self.filters = filters or DashboardFilters()
        self.rows: Optional[list[ProductionRecord]] = None

    # ===================
    # DATA
    # ===================

    def load(self) -> list[ProductionRecord]:
        """
        Fetch the whole view ordered by fecha ascending.

        Returns:
            Parsed rows (also kept on the controller)

        Raises:
            DatabaseError: If the query fails
        """
        logger.info("loading_dashboard_data", view=self.view)

        try:
            response = (
                self.db.table(self.view)
                .select(VIEW_COLUMNS)
                .order("fecha", desc=False)
                .execute()
            )
        except Exception as e:
            logger.error("dashboard_load_failed", view=self.view, error=str(e))
            raise DatabaseError("select", str(e), details={"view": self.view})

        self.rows = [ProductionRecord(**row) for row in (response.data or [])]
        logger.info("dashboard_data_loaded", rows=len(self.rows))
        return self.rows

    def _dataset(self) -> list[ProductionRecord]:
        if self.rows is None:
            self.load()
        return self.rows

    # ===================
    # FILTER STATE
    # ===================

    def apply_filters(self, filters: DashboardFilters) -> "DashboardController":
        """Replace the filter state. Returns self for chaining."""
        logger.debug("dashboard_filters_applied", **filters.model_dump(mode="json"))
        self.filters = filters
        return self

    def filtered_rows(self) -> list[ProductionRecord]:
        return filter_rows(self._dataset(), self.filters)

    def filter_options(self) -> FilterOptions:
        return available_filters(self._dataset())

    # ===================
    # RENDER
    # ===================

    def render(self) -> DashboardView:
        """
        Build the view for the current filters.

        KPIs describe the latest filtered record and are None when no
        row matches.
        """
        rows = self.filtered_rows()
        series = aggregate_rows(rows, self.filters.granularity)

        return DashboardView(
            filters=self.filters,
            row_count=len(rows),
            series=series,
            kpis=calculate_kpis(latest_record(rows)),
            charts=build_charts(series),
        )


def get_dashboard_controller(filters: Optional[DashboardFilters] = None) -> DashboardController:
    """Create a controller for one request/page session."""
    return DashboardController(filters)
