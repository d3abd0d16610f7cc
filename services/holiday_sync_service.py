"""
Holiday sync service.

Fetches the year's holidays, maps them to feriados_ar rows and upserts
them keyed by fecha. Re-running a sync replaces rows in place. There is
no retry: a failed run is simply run again by the next schedule.
"""

from datetime import date
from typing import Optional
import structlog

from config import get_admin_client, get_supabase_client
from integrations.holiday_api import fetch_holidays
from models.holiday import HolidayRecord, HolidaySyncResult
from exceptions import DatabaseError, ValidationError

logger = structlog.get_logger(__name__)

TABLE = "feriados_ar"
CONFLICT_KEY = "fecha"


def holiday_date(year: int, month: int, day: int) -> str:
    """
    Build the YYYY-MM-DD key for a holiday.

    {mes: 1, dia: 5} in 2024 → '2024-01-05'.
    """
    return f"{year}-{int(month):02d}-{int(day):02d}"


def to_record(item: dict, year: int) -> HolidayRecord:
    """
    Map one API item to a feriados_ar row.

    Raises:
        ValidationError: If the item lacks mes/dia
    """
    try:
        fecha = holiday_date(year, item["mes"], item["dia"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(
            code="INVALID_HOLIDAY",
            message="Holiday item is missing a valid mes/dia",
            details={"item": item, "error": str(e)}
        )

    return HolidayRecord(
        fecha=fecha,
        descripcion=item.get("motivo"),
        tipo=item.get("tipo"),
    )


class HolidaySyncService:
    """
    Holiday calendar sync.

    Writes go through the service-role client; reads use the public client.
    """

    def __init__(self):
        self.table = TABLE

    # ===================
    # SYNC
    # ===================

    def sync(self, year: Optional[int] = None) -> HolidaySyncResult:
        """
        Sync one year of holidays into feriados_ar.

        Args:
            year: Calendar year (defaults to the current year)

        Returns:
            HolidaySyncResult with the number of rows upserted

        Raises:
            ConfigurationError: If the service-role credentials are missing
            HolidayFetchError: If the holiday API fails
            DatabaseError: If the upsert fails
        """
        year = year or date.today().year
        logger.info("holiday_sync_started", year=year)

        db = get_admin_client()

        items = fetch_holidays(year)
        records = [to_record(item, year) for item in items]

        if records:
            try:
                db.table(self.table).upsert(
                    [record.model_dump() for record in records],
                    on_conflict=CONFLICT_KEY
                ).execute()
            except Exception as e:
                logger.error("holiday_upsert_failed", year=year, error=str(e))
                raise DatabaseError("upsert", str(e), details={"table": self.table})

        result = HolidaySyncResult(year=year, count=len(records))
        logger.info("holiday_sync_completed", year=year, count=result.count)
        return result

    # ===================
    # READ OPERATIONS
    # ===================

    def list_holidays(self, year: Optional[int] = None) -> list[HolidayRecord]:
        """
        Get holidays stored for a year, ordered by date.

        Args:
            year: Calendar year (defaults to the current year)

        Returns:
            List of HolidayRecord
        """
        year = year or date.today().year
        logger.debug("listing_holidays", year=year)

        db = get_supabase_client()
        try:
            response = (
                db.table(self.table)
                .select("fecha, descripcion, tipo")
                .gte("fecha", f"{year}-01-01")
                .lte("fecha", f"{year}-12-31")
                .order("fecha")
                .execute()
            )
        except Exception as e:
            logger.error("holiday_list_failed", year=year, error=str(e))
            raise DatabaseError("select", str(e), details={"table": self.table})

        return [HolidayRecord(**row) for row in response.data]


# Singleton instance
_holiday_sync_service: Optional[HolidaySyncService] = None


def get_holiday_sync_service() -> HolidaySyncService:
    """Get or create HolidaySyncService instance."""
    global _holiday_sync_service
    if _holiday_sync_service is None:
        _holiday_sync_service = HolidaySyncService()
    return _holiday_sync_service
