"""
Period aggregation for the dashboard charts.

Rolls daily rows of v_dashboard_main up to day, week or month periods:
1. Incremental quantities (plan_dia, real_dia) are summed per period
2. Cumulative quantities take the value of the last row seen in the period

Summing cumulative values is wrong: a month's "plan acumulado" is the
plan accumulated at its last day, not the sum of every day's running total.
"""

import math
from datetime import date
from typing import Iterable, Union

import structlog

from models.production import (
    AggregatedPeriod,
    AggregatedSeries,
    Granularity,
    ProductionRecord,
)
from exceptions import InvalidGranularityError
from utils.formatting import format_day_month, month_abbreviation

logger = structlog.get_logger(__name__)


def parse_granularity(value: Union[str, Granularity, None]) -> Granularity:
    """
    Parse a granularity from user input.

    None defaults to day; matching is case-insensitive.

    Raises:
        InvalidGranularityError: If value is not day, week or month
    """
    if value is None:
        return Granularity.DAY
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).strip().lower())
    except ValueError:
        raise InvalidGranularityError(str(value))


def week_number(day: date) -> int:
    """
    Week of the year, weeks starting on Sunday.

    ceil((days since Jan 1 + weekday of Jan 1 + 1) / 7), with Sunday = 0.
    Jan 1 is always in week 1.
    """
    jan_first = date(day.year, 1, 1)
    past_days = (day - jan_first).days
    jan_first_weekday = (jan_first.weekday() + 1) % 7  # Python's Monday=0 → Sunday=0
    return math.ceil((past_days + jan_first_weekday + 1) / 7)


def period_key(day: date, granularity: Granularity) -> tuple:
    """Grouping key for a day. Includes the year so periods never merge across years."""
    if granularity == Granularity.WEEK:
        return (day.year, week_number(day))
    if granularity == Granularity.MONTH:
        return (day.year, day.month)
    return (day.year, day.month, day.day)


def period_label(day: date, granularity: Granularity, with_year: bool = False) -> str:
    """
    Display label for the period containing a day.

    day → '05/01', week → 'Sem 1', month → 'ene'.
    with_year appends the year, used when the data spans several years.
    """
    if granularity == Granularity.WEEK:
        label = f"Sem {week_number(day)}"
    elif granularity == Granularity.MONTH:
        label = month_abbreviation(day)
    else:
        label = format_day_month(day)

    if with_year:
        return f"{label}/{day.year}" if granularity == Granularity.DAY else f"{label} {day.year}"
    return label


def aggregate_periods(
    rows: Iterable[ProductionRecord],
    granularity: Union[str, Granularity] = Granularity.DAY
) -> list[AggregatedPeriod]:
    """
    Roll rows up into periods, in first-seen order.

    Rows must already be sorted by fecha ascending; this is not checked.
    The cumulative fields of each period are overwritten by every row, so
    out-of-order input yields whatever row came last.

    Args:
        rows: Production records ordered by date
        granularity: day, week or month

    Returns:
        One AggregatedPeriod per distinct period
    """
    granularity = parse_granularity(granularity)
    rows = list(rows)
    if not rows:
        return []

    with_year = len({row.fecha.year for row in rows}) > 1

    totals: dict[tuple, dict] = {}
    for row in rows:
        key = period_key(row.fecha, granularity)
        bucket = totals.get(key)
        if bucket is None:
            bucket = {
                "label": period_label(row.fecha, granularity, with_year=with_year),
                "plan_incremental": 0.0,
                "real_incremental": 0.0,
                "plan_acumulado": 0.0,
                "real_acumulado": 0.0,
            }
            totals[key] = bucket

        bucket["plan_incremental"] += row.plan_dia
        bucket["real_incremental"] += row.real_dia
        bucket["plan_acumulado"] = row.plan_acumulado
        bucket["real_acumulado"] = row.real_acumulado

    # dicts keep insertion order, i.e. first-seen period order
    return [AggregatedPeriod(**bucket) for bucket in totals.values()]


def aggregate_rows(
    rows: Iterable[ProductionRecord],
    granularity: Union[str, Granularity] = Granularity.DAY
) -> AggregatedSeries:
    """
    Aggregate rows and return the parallel arrays the charts consume.

    Args:
        rows: Production records ordered by date
        granularity: day, week or month

    Returns:
        AggregatedSeries with labels, cumulative plan/real and
        incremental plan/real per period
    """
    granularity = parse_granularity(granularity)
    periods = aggregate_periods(rows, granularity)

    logger.debug(
        "rows_aggregated",
        granularity=granularity.value,
        periods=len(periods)
    )

    return AggregatedSeries.from_periods(periods, granularity)
