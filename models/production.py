"""
Production schemas: rows of the dashboard view and their rollups.

Column names follow the v_dashboard_main view contract.
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional
from enum import Enum
from datetime import date

from models.base import BaseSchema
from exceptions import InvalidDateRangeError


class Granularity(str, Enum):
    """Time bucket used to roll up daily rows."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class ProductionRecord(BaseSchema):
    """
    One row of v_dashboard_main.

    One row per (date, SKU) or per date, depending on how the view
    is joined. Null quantities are read as 0.
    """

    fecha: date = Field(..., description="Production day")
    linea: Optional[str] = Field(None, description="Production line identifier")
    id_sku: Optional[str] = Field(None, description="SKU identifier")
    plan_dia: float = Field(default=0, description="Planned quantity for the day")
    real_dia: float = Field(default=0, description="Actual quantity for the day")
    plan_acumulado: float = Field(default=0, description="Cumulative planned quantity")
    real_acumulado: float = Field(default=0, description="Cumulative actual quantity")
    dias_atraso: float = Field(default=0, description="Delay in days (positive = behind)")
    ritmo_promedio: float = Field(default=0, description="Average daily pace")

    @field_validator(
        "plan_dia", "real_dia", "plan_acumulado", "real_acumulado",
        "dias_atraso", "ritmo_promedio",
        mode="before"
    )
    @classmethod
    def null_as_zero(cls, value):
        return 0 if value is None else value

    @field_validator("linea", "id_sku", mode="before")
    @classmethod
    def coerce_identifier(cls, value):
        # Views sometimes expose numeric ids
        return None if value is None else str(value)


class AggregatedPeriod(BaseSchema):
    """
    Rollup of the rows falling in one period.

    Incremental fields are sums; cumulative fields are the values of the
    last chronological row in the period.
    """

    label: str
    plan_incremental: float = 0
    real_incremental: float = 0
    plan_acumulado: float = 0
    real_acumulado: float = 0


class AggregatedSeries(BaseSchema):
    """Parallel arrays ready to feed the charts, in first-seen period order."""

    granularity: Granularity = Granularity.DAY
    labels: list[str] = Field(default_factory=list)
    plan: list[float] = Field(default_factory=list, description="Cumulative plan per period")
    real: list[float] = Field(default_factory=list, description="Cumulative actual per period")
    daily_plan: list[float] = Field(default_factory=list, description="Incremental plan per period")
    daily_real: list[float] = Field(default_factory=list, description="Incremental actual per period")

    @classmethod
    def from_periods(
        cls,
        periods: list[AggregatedPeriod],
        granularity: Granularity
    ) -> "AggregatedSeries":
        return cls(
            granularity=granularity,
            labels=[p.label for p in periods],
            plan=[p.plan_acumulado for p in periods],
            real=[p.real_acumulado for p in periods],
            daily_plan=[p.plan_incremental for p in periods],
            daily_real=[p.real_incremental for p in periods],
        )

    @property
    def is_empty(self) -> bool:
        return not self.labels


class DashboardFilters(BaseSchema):
    """
    Filter state selected in the dashboard UI.

    linea matches exactly; sku matches as a case-insensitive substring.
    """

    linea: Optional[str] = Field(None, description="Production line (exact match)")
    sku: Optional[str] = Field(None, description="SKU substring, case-insensitive")
    fecha_desde: Optional[date] = Field(None, description="First day included")
    fecha_hasta: Optional[date] = Field(None, description="Last day included")
    granularity: Granularity = Field(default=Granularity.DAY)

    @field_validator("linea", "sku", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_range(self):
        if self.fecha_desde and self.fecha_hasta and self.fecha_desde > self.fecha_hasta:
            raise InvalidDateRangeError(
                self.fecha_desde.isoformat(),
                self.fecha_hasta.isoformat()
            )
        return self


class FilterOptions(BaseSchema):
    """Values offered by the filter dropdowns."""

    lineas: list[str] = Field(default_factory=list)
    skus: list[str] = Field(default_factory=list)
    fecha_min: Optional[date] = None
    fecha_max: Optional[date] = None
