"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are read on import; point them at a fake project
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

import pytest
from unittest.mock import MagicMock, patch
from types import SimpleNamespace
from typing import Generator


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, table: "MockSupabaseTable", data: list = None, count: int = None):
        self._table = table
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return self

    def upsert(self, data, on_conflict: str = None, **kwargs):
        if isinstance(data, dict):
            data = [data]
        self._table.upserts.append({"data": data, "on_conflict": on_conflict})
        self._data = data
        return self

    def eq(self, column, value):
        return self

    def gte(self, column, value):
        return self

    def lte(self, column, value):
        return self

    def order(self, column, **kwargs):
        self._table.orders.append((column, kwargs))
        return self

    def limit(self, count):
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._table.error:
            raise self._table.error
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses and recorded writes."""

    def __init__(self, data: list = None, count: int = None, error: Exception = None):
        self._data = data or []
        self._count = count
        self.error = error
        self.upserts: list[dict] = []
        self.orders: list[tuple] = []

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self, [dict(row) for row in self._data], self._count)

    def upsert(self, data, **kwargs):
        return MockSupabaseQuery(self).upsert(data, **kwargs)


class MockSupabaseClient:
    """Mock Supabase client (tables + auth)."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}
        self.auth = MagicMock()
        # Unknown tokens are rejected unless a test signs in
        self.auth.get_user.side_effect = Exception("invalid JWT")

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = MockSupabaseTable(data, count)

    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise."""
        self._tables.setdefault(table_name, MockSupabaseTable()).error = error

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table (same instance across calls, so writes can be inspected)."""
        return self._tables.setdefault(name, MockSupabaseTable())


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("v_dashboard_main", [
                {"fecha": "2024-01-02", "plan_dia": 100, ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database clients with the mock.

    The public, service-role and per-sign-in clients all resolve to the same mock.
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.dashboard_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.holiday_sync_service.get_supabase_client", return_value=mock_supabase):
                with patch("services.holiday_sync_service.get_admin_client", return_value=mock_supabase):
                    with patch("services.auth_service.get_supabase_client", return_value=mock_supabase):
                        with patch("services.auth_service.create_auth_client", return_value=mock_supabase):
                            yield mock_supabase


@pytest.fixture
def sample_view_rows() -> list:
    """Four days of v_dashboard_main for one line/SKU, January 2024."""
    return [
        {"fecha": "2024-01-02", "linea": "L1", "id_sku": "SKU-Alfa-01", "plan_dia": 100, "real_dia": 90,
         "plan_acumulado": 100, "real_acumulado": 90, "dias_atraso": 0.1, "ritmo_promedio": 90},
        {"fecha": "2024-01-03", "linea": "L1", "id_sku": "SKU-Alfa-01", "plan_dia": 100, "real_dia": 80,
         "plan_acumulado": 200, "real_acumulado": 170, "dias_atraso": 0.3, "ritmo_promedio": 85},
        {"fecha": "2024-01-04", "linea": "L2", "id_sku": "SKU-Beta-02", "plan_dia": 100, "real_dia": 100,
         "plan_acumulado": 300, "real_acumulado": 270, "dias_atraso": 0.3, "ritmo_promedio": 90},
        {"fecha": "2024-01-05", "linea": "L2", "id_sku": "SKU-Beta-02", "plan_dia": 100, "real_dia": 70,
         "plan_acumulado": 400, "real_acumulado": 340, "dias_atraso": 0.6, "ritmo_promedio": 85},
    ]


@pytest.fixture
def signed_in(mock_supabase):
    """Make the mocked auth provider accept any access token."""
    mock_supabase.auth.get_user.side_effect = None
    mock_supabase.auth.get_user.return_value = SimpleNamespace(
        user=SimpleNamespace(id="user-1", email="planta@example.com")
    )
    return mock_supabase


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database and a fresh auth service.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("v_dashboard_main", [...])
            response = test_client_with_mock_db.get("/api/dashboard")
    """
    from fastapi.testclient import TestClient
    from main import app
    import services.auth_service as auth_service

    auth_service._auth_service = None
    yield TestClient(app)
    auth_service._auth_service = None
