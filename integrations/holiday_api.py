"""
Client for the public Argentine holiday API (nolaborables.com.ar).

GET {base_url}/{year} returns a JSON list like:
    [{"motivo": "Año Nuevo", "tipo": "inamovible", "dia": 1, "mes": 1, "id": "año-nuevo"}, ...]
"""

from typing import Optional
import requests
import structlog

from config import settings
from exceptions import HolidayFetchError

logger = structlog.get_logger(__name__)


def build_url(year: int, base_url: Optional[str] = None) -> str:
    base_url = (base_url or settings.holiday_api_url).rstrip("/")
    return f"{base_url}/{year}"


def fetch_holidays(year: int, timeout: Optional[int] = None) -> list[dict]:
    """
    Fetch the raw holiday list for a year.

    Args:
        year: Calendar year
        timeout: Seconds to wait (defaults to settings.holiday_api_timeout)

    Returns:
        List of holiday dicts as returned by the API

    Raises:
        HolidayFetchError: On network failure, non-2xx status or a body
            that is not a JSON list
    """
    url = build_url(year)
    timeout = timeout or settings.holiday_api_timeout

    try:
        logger.info("fetching_holidays", year=year, url=url)
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("holiday_request_failed", year=year, error=str(e))
        raise HolidayFetchError(year, reason=str(e)) from e

    if not response.ok:
        logger.error(
            "holiday_api_error",
            year=year,
            status_code=response.status_code
        )
        raise HolidayFetchError(year, status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        logger.error("holiday_api_invalid_json", year=year, error=str(e))
        raise HolidayFetchError(year, status_code=response.status_code, reason="invalid JSON") from e

    if not isinstance(payload, list):
        raise HolidayFetchError(year, status_code=response.status_code, reason="expected a list")

    logger.info("holidays_fetched", year=year, count=len(payload))
    return payload
