"""
Chart.js configurations for the dashboard.

Configs are plain dicts built from an AggregatedSeries. The page keeps one
Chart instance per canvas and swaps in new data on every filter change.
"""

from copy import deepcopy
from typing import Any

from models.production import AggregatedSeries
from models.dashboard import DashboardCharts

# Palette
NEON_CYAN = "#06b6d4"
NEON_VIOLET = "#8b5cf6"
NEON_LIME = "#84cc16"
AXIS_TEXT = "#a1a1aa"
GRID_LINE = "rgba(255, 255, 255, 0.05)"

COMMON_OPTIONS: dict[str, Any] = {
    "responsive": True,
    "maintainAspectRatio": False,
    "plugins": {
        "legend": {"labels": {"color": AXIS_TEXT}},
    },
    "scales": {
        "y": {
            "grid": {"color": GRID_LINE},
            "ticks": {"color": AXIS_TEXT},
        },
        "x": {
            "grid": {"display": False},
            "ticks": {"color": AXIS_TEXT},
        },
    },
}


def _options(**overrides) -> dict[str, Any]:
    options = deepcopy(COMMON_OPTIONS)
    options.update(overrides)
    return options


def build_curve_chart(series: AggregatedSeries) -> dict[str, Any]:
    """Curva S: cumulative plan vs cumulative real as filled lines."""
    return {
        "type": "line",
        "data": {
            "labels": list(series.labels),
            "datasets": [
                {
                    "label": "Plan Acumulado",
                    "data": list(series.plan),
                    "borderColor": NEON_CYAN,
                    "backgroundColor": "rgba(6, 182, 212, 0.1)",
                    "borderWidth": 2,
                    "fill": True,
                    "tension": 0.4,
                    "pointRadius": 0,
                },
                {
                    "label": "Real Acumulado",
                    "data": list(series.real),
                    "borderColor": NEON_VIOLET,
                    "backgroundColor": "rgba(139, 92, 246, 0.1)",
                    "borderWidth": 2,
                    "fill": True,
                    "tension": 0.4,
                    "pointRadius": 3,
                },
            ],
        },
        "options": _options(interaction={"mode": "index", "intersect": False}),
    }


def build_bar_chart(series: AggregatedSeries) -> dict[str, Any]:
    """Actual production per period."""
    return {
        "type": "bar",
        "data": {
            "labels": list(series.labels),
            "datasets": [
                {
                    "label": "Prod. Real",
                    "data": list(series.daily_real),
                    "backgroundColor": NEON_LIME,
                    "borderRadius": 4,
                },
            ],
        },
        "options": _options(),
    }


def build_charts(series: AggregatedSeries) -> DashboardCharts:
    return DashboardCharts(
        curve=build_curve_chart(series),
        bar=build_bar_chart(series),
    )
