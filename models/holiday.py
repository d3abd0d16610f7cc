"""
Holiday schemas for the feriados_ar table and the sync job.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema


class HolidayRecord(BaseSchema):
    """
    Row of feriados_ar.

    fecha is the natural key; re-syncing a year replaces rows in place.
    """

    fecha: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Holiday date as YYYY-MM-DD"
    )
    descripcion: Optional[str] = Field(None, description="Holiday name (API 'motivo')")
    tipo: Optional[str] = Field(None, description="Holiday type (inamovible, trasladable, puente...)")


class HolidaySyncResult(BaseSchema):
    """Outcome of one sync run."""

    year: int
    count: int

    @property
    def message(self) -> str:
        return f"Synced {self.count} holidays for {self.year}"


class HolidaySyncResponse(BaseSchema):
    """Body returned by the scheduled sync endpoint on success."""

    success: bool = True
    message: str


class HolidayListResponse(BaseSchema):
    """Holidays stored for one year."""

    year: int
    data: list[HolidayRecord]
    total: int
