"""
KPI calculations for the dashboard cards.

Works on the latest record of the (filtered) dataset:
- Plan vs real cumulative quantities and their percent delta
- Delay in days, classified against a tolerance
- Average pace
- Estimated completion date (today + delay days)
"""

import math
from datetime import date, timedelta
from typing import Optional, Sequence

import structlog

from config import settings
from models.kpi import KPISnapshot
from models.production import ProductionRecord
from utils.formatting import format_date, format_fixed, format_number

logger = structlog.get_logger(__name__)

DELTA_UP = "▲"
DELTA_DOWN = "▼"


def calculate_delta_pct(plan: float, real: float) -> float:
    """
    Percent difference of real against plan.

    Returns 0 when plan is not positive.
    """
    if plan > 0:
        return (real - plan) / plan * 100
    return 0.0


def format_delta(delta_pct: float) -> str:
    """'▲ 1.2% vs Plan' for delta >= 0, '▼ 3.4% vs Plan' otherwise."""
    sign = DELTA_UP if delta_pct >= 0 else DELTA_DOWN
    return f"{sign} {format_fixed(abs(delta_pct), 1)}% vs Plan"


def is_behind_schedule(delay_days: float, tolerance: Optional[float] = None) -> bool:
    """
    Production is behind when the delay exceeds the tolerance (0.5 days by default).

    0.4 → False, 0.5 → False, 0.6 → True.
    """
    if tolerance is None:
        tolerance = settings.delay_tolerance_days
    return delay_days > tolerance


def estimate_end_date(delay_days: float, today: Optional[date] = None) -> date:
    """
    Projected completion: today shifted by the delay.

    Fractional days are floored (1.9 → 1, -2.4 → -3).
    """
    today = today or date.today()
    return today + timedelta(days=math.floor(delay_days))


def latest_record(rows: Sequence[ProductionRecord]) -> Optional[ProductionRecord]:
    """Last row of a date-ordered dataset, None when empty."""
    return rows[-1] if rows else None


def calculate_kpis(
    record: Optional[ProductionRecord],
    today: Optional[date] = None
) -> Optional[KPISnapshot]:
    """
    Build the KPI card values for one record.

    Args:
        record: Latest record of the filtered dataset
        today: Reference day for the end-date projection (defaults to today)

    Returns:
        KPISnapshot, or None when there is no record
    """
    if record is None:
        return None

    plan = record.plan_acumulado
    real = record.real_acumulado
    delay = record.dias_atraso

    delta = calculate_delta_pct(plan, real)
    behind = is_behind_schedule(delay)
    end_date = estimate_end_date(delay, today)

    logger.debug(
        "kpis_calculated",
        fecha=record.fecha.isoformat(),
        delta_pct=round(delta, 2),
        delay_days=delay,
        is_behind=behind
    )

    return KPISnapshot(
        fecha=record.fecha,
        plan=plan,
        plan_display=format_number(plan),
        real=real,
        real_display=format_number(real),
        delta_pct=delta,
        delta_display=format_delta(delta),
        delta_positive=delta >= 0,
        delay_days=delay,
        delay_display=format_fixed(abs(delay), 1),
        is_behind=behind,
        ritmo=record.ritmo_promedio,
        ritmo_display=format_number(record.ritmo_promedio),
        estimated_end_date=end_date,
        estimated_end_display=format_date(end_date),
    )
