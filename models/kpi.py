"""
KPI card schemas.
"""

from pydantic import Field
from datetime import date

from models.base import BaseSchema


class KPISnapshot(BaseSchema):
    """
    Values shown on the KPI cards for the latest (filtered) record.

    Raw numbers are kept next to their es-AR formatted text so the
    client only has to place them.
    """

    fecha: date = Field(..., description="Date of the record the KPIs describe")

    plan: float
    plan_display: str
    real: float
    real_display: str

    delta_pct: float = Field(..., description="(real - plan) / plan * 100, 0 when plan is 0")
    delta_display: str = Field(..., description="e.g. '▲ 1.2% vs Plan'")
    delta_positive: bool

    delay_days: float = Field(..., description="Delay from the view (positive = behind)")
    delay_display: str = Field(..., description="Absolute delay, one decimal")
    is_behind: bool = Field(..., description="Delay above the tolerance")

    ritmo: float
    ritmo_display: str

    estimated_end_date: date
    estimated_end_display: str = Field(..., description="dd/mm/yyyy")
