"""
Export service — Excel workbook of the data currently shown on the dashboard.

Sheets:
- DATOS: the filtered rows of v_dashboard_main
- RESUMEN: the rollup per period for the selected granularity
"""

from datetime import date
from io import BytesIO
from typing import Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, PatternFill
import structlog

from models.production import AggregatedSeries, DashboardFilters, ProductionRecord

logger = structlog.get_logger(__name__)

DATA_COLUMNS = [
    ("Fecha", "fecha", 12),
    ("Línea", "linea", 12),
    ("SKU", "id_sku", 20),
    ("Plan día", "plan_dia", 12),
    ("Real día", "real_dia", 12),
    ("Plan acumulado", "plan_acumulado", 16),
    ("Real acumulado", "real_acumulado", 16),
    ("Días atraso", "dias_atraso", 12),
    ("Ritmo promedio", "ritmo_promedio", 16),
]

SUMMARY_HEADERS = ["Periodo", "Plan", "Real", "Plan acumulado", "Real acumulado"]

GRANULARITY_NAMES = {
    "day": "Diaria",
    "week": "Semanal",
    "month": "Mensual",
}

NUMBER_FORMAT = "#,##0.##"


def export_filename(filters: DashboardFilters, today: Optional[date] = None) -> str:
    """produccion_<granularity>_<yyyymmdd>.xlsx"""
    today = today or date.today()
    return f"produccion_{filters.granularity.value}_{today.strftime('%Y%m%d')}.xlsx"


class ExportService:
    """Service for generating dashboard export files."""

    def generate_dashboard_excel(
        self,
        rows: Sequence[ProductionRecord],
        series: AggregatedSeries,
        filters: DashboardFilters,
    ) -> BytesIO:
        """
        Generate the dashboard workbook.

        Args:
            rows: Filtered rows, ordered by date
            series: Aggregated series for the same rows
            filters: Filters in effect (written to the summary header)

        Returns:
            BytesIO containing the Excel file
        """
        logger.info(
            "generating_dashboard_excel",
            rows=len(rows),
            periods=len(series.labels),
            granularity=filters.granularity.value,
        )

        wb = Workbook()

        # Styles
        bold_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        thin_border = Border(bottom=Side(style="thin", color="000000"))
        header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

        # DATOS
        ws = wb.active
        ws.title = "DATOS"

        for col, (header, _, width) in enumerate(DATA_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = bold_font
            cell.border = thin_border
            cell.fill = header_fill
            ws.column_dimensions[cell.column_letter].width = width

        for row_idx, record in enumerate(rows, start=2):
            for col, (_, field, _) in enumerate(DATA_COLUMNS, start=1):
                value = getattr(record, field)
                cell = ws.cell(row=row_idx, column=col, value=value)
                if field == "fecha":
                    cell.number_format = "DD/MM/YYYY"
                elif isinstance(value, (int, float)):
                    cell.number_format = NUMBER_FORMAT

        ws.freeze_panes = "A2"

        # RESUMEN
        summary = wb.create_sheet("RESUMEN")
        summary["A1"] = "Producción Plan vs Real"
        summary["A1"].font = title_font

        summary["A3"] = "Agrupación:"
        summary["B3"] = GRANULARITY_NAMES[filters.granularity.value]
        summary["A4"] = "Línea:"
        summary["B4"] = filters.linea or "Todas"
        summary["A5"] = "SKU:"
        summary["B5"] = filters.sku or "Todos"
        summary["A6"] = "Desde:"
        summary["B6"] = filters.fecha_desde.strftime("%d/%m/%Y") if filters.fecha_desde else "-"
        summary["A7"] = "Hasta:"
        summary["B7"] = filters.fecha_hasta.strftime("%d/%m/%Y") if filters.fecha_hasta else "-"
        for cell in ("A3", "A4", "A5", "A6", "A7"):
            summary[cell].font = bold_font

        header_row = 9
        for col, header in enumerate(SUMMARY_HEADERS, start=1):
            cell = summary.cell(row=header_row, column=col, value=header)
            cell.font = bold_font
            cell.border = thin_border
            cell.fill = header_fill
            summary.column_dimensions[cell.column_letter].width = 16

        values = zip(series.labels, series.daily_plan, series.daily_real, series.plan, series.real)
        for row_idx, period in enumerate(values, start=header_row + 1):
            for col, value in enumerate(period, start=1):
                cell = summary.cell(row=row_idx, column=col, value=value)
                if col > 1:
                    cell.number_format = NUMBER_FORMAT

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output


# Singleton instance
_export_service: Optional[ExportService] = None


def get_export_service() -> ExportService:
    """Get or create ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service
