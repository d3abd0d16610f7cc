"""
Unit tests for the holiday sync.

Run: pytest tests/unit/test_holiday_sync_service.py -v
"""

import pytest
import requests
from unittest.mock import patch, MagicMock

from services.holiday_sync_service import (
    HolidaySyncService,
    holiday_date,
    to_record,
)
from integrations.holiday_api import build_url, fetch_holidays
from exceptions import (
    ConfigurationError,
    DatabaseError,
    HolidayFetchError,
    ValidationError,
)

API_PAYLOAD = [
    {"motivo": "Año Nuevo", "tipo": "inamovible", "dia": 1, "mes": 1, "id": "año-nuevo"},
    {"motivo": "Carnaval", "tipo": "inamovible", "dia": 12, "mes": 2, "id": "carnaval"},
    {"motivo": "Día de la Independencia", "tipo": "inamovible", "dia": 9, "mes": 7, "id": "independencia"},
]


def api_response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload if payload is not None else []
    return response


# ===================
# MAPPING
# ===================

class TestHolidayMapping:
    """API item → feriados_ar row."""

    def test_holiday_date_pads_month_and_day(self):
        assert holiday_date(2024, 1, 5) == "2024-01-05"

    def test_holiday_date_two_digit_values(self):
        assert holiday_date(2024, 12, 25) == "2024-12-25"

    def test_to_record_maps_fields(self):
        record = to_record({"mes": 1, "dia": 5, "motivo": "Feriado puente", "tipo": "puente"}, 2024)

        assert record.fecha == "2024-01-05"
        assert record.descripcion == "Feriado puente"
        assert record.tipo == "puente"

    def test_to_record_missing_day_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            to_record({"mes": 1, "motivo": "x"}, 2024)

        assert exc_info.value.code == "INVALID_HOLIDAY"


# ===================
# API CLIENT
# ===================

class TestFetchHolidays:
    """Tests for integrations.holiday_api.fetch_holidays()"""

    def test_build_url_appends_year(self):
        assert build_url(2024, "https://example.com/feriados/") == "https://example.com/feriados/2024"

    @patch("integrations.holiday_api.requests.get")
    def test_returns_payload(self, mock_get):
        mock_get.return_value = api_response(200, API_PAYLOAD)

        result = fetch_holidays(2024)

        assert result == API_PAYLOAD
        assert mock_get.call_args[0][0].endswith("/2024")

    @patch("integrations.holiday_api.requests.get")
    def test_non_success_status_raises(self, mock_get):
        mock_get.return_value = api_response(502)

        with pytest.raises(HolidayFetchError) as exc_info:
            fetch_holidays(2024)

        assert exc_info.value.message == "Failed to fetch external API"
        assert exc_info.value.details["status_code"] == 502

    @patch("integrations.holiday_api.requests.get")
    def test_network_error_raises(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("boom")

        with pytest.raises(HolidayFetchError):
            fetch_holidays(2024)

    @patch("integrations.holiday_api.requests.get")
    def test_non_list_body_raises(self, mock_get):
        mock_get.return_value = api_response(200, {"error": "nope"})

        with pytest.raises(HolidayFetchError):
            fetch_holidays(2024)


# ===================
# SYNC
# ===================

class TestHolidaySync:
    """Tests for HolidaySyncService.sync()"""

    @patch("integrations.holiday_api.requests.get")
    def test_sync_upserts_keyed_by_fecha(self, mock_get, mock_db, mock_supabase):
        mock_get.return_value = api_response(200, API_PAYLOAD)

        result = HolidaySyncService().sync(2024)

        assert result.year == 2024
        assert result.count == 3
        assert result.message == "Synced 3 holidays for 2024"

        upserts = mock_supabase.table("feriados_ar").upserts
        assert len(upserts) == 1
        assert upserts[0]["on_conflict"] == "fecha"
        assert upserts[0]["data"][0] == {
            "fecha": "2024-01-01",
            "descripcion": "Año Nuevo",
            "tipo": "inamovible",
        }
        assert [row["fecha"] for row in upserts[0]["data"]] == ["2024-01-01", "2024-02-12", "2024-07-09"]

    @patch("integrations.holiday_api.requests.get")
    def test_sync_defaults_to_current_year(self, mock_get, mock_db):
        from datetime import date
        mock_get.return_value = api_response(200, [])

        result = HolidaySyncService().sync()

        assert result.year == date.today().year
        assert result.count == 0
        assert mock_get.call_args[0][0].endswith(f"/{date.today().year}")

    @patch("integrations.holiday_api.requests.get")
    def test_sync_empty_year_skips_upsert(self, mock_get, mock_db, mock_supabase):
        mock_get.return_value = api_response(200, [])

        HolidaySyncService().sync(2024)

        assert mock_supabase.table("feriados_ar").upserts == []

    @patch("integrations.holiday_api.requests.get")
    def test_sync_fetch_failure_propagates(self, mock_get, mock_db, mock_supabase):
        mock_get.return_value = api_response(500)

        with pytest.raises(HolidayFetchError):
            HolidaySyncService().sync(2024)

        assert mock_supabase.table("feriados_ar").upserts == []

    @patch("integrations.holiday_api.requests.get")
    def test_sync_database_failure_raises(self, mock_get, mock_db, mock_supabase):
        mock_get.return_value = api_response(200, API_PAYLOAD)
        mock_supabase.set_table_error("feriados_ar", Exception("duplicate key"))

        with pytest.raises(DatabaseError) as exc_info:
            HolidaySyncService().sync(2024)

        assert "duplicate key" in exc_info.value.message

    def test_sync_without_service_key_raises_configuration_error(self):
        with patch(
            "services.holiday_sync_service.get_admin_client",
            side_effect=ConfigurationError("Missing database configuration", ["SUPABASE_SERVICE_KEY"]),
        ):
            with pytest.raises(ConfigurationError):
                HolidaySyncService().sync(2024)


class TestListHolidays:
    """Tests for HolidaySyncService.list_holidays()"""

    def test_list_holidays(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("feriados_ar", [
            {"fecha": "2024-01-01", "descripcion": "Año Nuevo", "tipo": "inamovible"},
            {"fecha": "2024-02-12", "descripcion": "Carnaval", "tipo": "inamovible"},
        ])

        holidays = HolidaySyncService().list_holidays(2024)

        assert [h.fecha for h in holidays] == ["2024-01-01", "2024-02-12"]
        assert mock_supabase.table("feriados_ar").orders[0][0] == "fecha"


class TestSyncScript:
    """Tests for scripts/sync_holidays.py"""

    @pytest.fixture
    def script(self):
        import importlib.util
        from pathlib import Path

        path = Path(__file__).resolve().parents[2] / "scripts" / "sync_holidays.py"
        module_spec = importlib.util.spec_from_file_location("sync_holidays_script", path)
        module = importlib.util.module_from_spec(module_spec)
        module_spec.loader.exec_module(module)
        return module

    @patch("integrations.holiday_api.requests.get")
    def test_script_success(self, mock_get, mock_db, script, capsys):
        mock_get.return_value = api_response(200, API_PAYLOAD)

        assert script.main(["--year", "2024"]) == 0
        assert "Synced 3 holidays for 2024" in capsys.readouterr().out

    @patch("integrations.holiday_api.requests.get")
    def test_script_failure_exit_code(self, mock_get, mock_db, script, capsys):
        mock_get.return_value = api_response(503)

        assert script.main(["--year", "2024"]) == 1
        assert "Failed to fetch external API" in capsys.readouterr().out
