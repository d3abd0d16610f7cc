"""
Unit tests for the Supabase Auth pass-through.

Run: pytest tests/unit/test_auth_service.py -v
"""

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from supabase import create_client

from config import settings
from config.database import create_auth_client
from exceptions import ConfigurationError
from services.auth_service import AuthService

SUPABASE_URL = "https://test-project.supabase.co"
ANON_KEY = "anon.key.sig"


def auth_response(user_id: str = "user-1", email: str = "planta@example.com", token: str = "jwt-123"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        session=SimpleNamespace(access_token=token, expires_in=3600),
    )


class TestSignIn:
    """Tests for AuthService.sign_in()"""

    def test_sign_in_success(self, mock_db, mock_supabase):
        mock_supabase.auth.sign_in_with_password.return_value = auth_response()

        result = AuthService().sign_in("planta@example.com", "secret")

        assert result.ok
        assert result.data.user.email == "planta@example.com"
        assert result.data.access_token == "jwt-123"
        mock_supabase.auth.sign_in_with_password.assert_called_once_with({
            "email": "planta@example.com",
            "password": "secret",
        })

    def test_sign_in_rejected(self, mock_db, mock_supabase):
        mock_supabase.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

        result = AuthService().sign_in("planta@example.com", "wrong")

        assert not result.ok
        assert result.data is None
        assert result.error == "Invalid login credentials"

    def test_sign_in_without_session(self, mock_db, mock_supabase):
        mock_supabase.auth.sign_in_with_password.return_value = SimpleNamespace(user=None, session=None)

        result = AuthService().sign_in("planta@example.com", "secret")

        assert result.error == "No session returned"


class TestGetSession:
    """Tests for AuthService.get_session()"""

    def test_missing_token(self, mock_db):
        result = AuthService().get_session(None)

        assert result.error == "No active session"

    def test_valid_token(self, mock_db, signed_in):
        result = AuthService().get_session("jwt-123")

        assert result.ok
        assert result.data.user.id == "user-1"
        signed_in.auth.get_user.assert_called_once_with("jwt-123")

    def test_rejected_token(self, mock_db):
        result = AuthService().get_session("expired")

        assert not result.ok
        assert result.error == "invalid JWT"


class TestSignOut:
    """Tests for AuthService.sign_out()"""

    def test_sign_out_revokes_token(self, mock_db, mock_supabase):
        result = AuthService().sign_out("jwt-123")

        assert result.ok
        mock_supabase.auth.admin.sign_out.assert_called_once_with("jwt-123")

    def test_sign_out_without_token_is_noop(self, mock_db, mock_supabase):
        result = AuthService().sign_out(None)

        assert result.ok
        mock_supabase.auth.admin.sign_out.assert_not_called()

    def test_sign_out_failure_reported(self, mock_db, mock_supabase):
        mock_supabase.auth.admin.sign_out.side_effect = Exception("network down")

        result = AuthService().sign_out("jwt-123")

        assert result.error == "network down"


class TestSignInClientIsolation:
    """Sign-in must not leave a user session on the shared data client."""

    @pytest.fixture
    def data_client(self):
        return create_client(SUPABASE_URL, ANON_KEY)

    def test_data_client_keeps_anon_authorization(self, data_client):
        before = data_client.options.headers["Authorization"]
        auth_client = MagicMock()
        auth_client.auth.sign_in_with_password.return_value = auth_response(token="USER_A_JWT")

        with patch("services.auth_service.get_supabase_client", return_value=data_client), \
                patch("services.auth_service.create_auth_client", return_value=auth_client):
            result = AuthService().sign_in("a@example.com", "secret")

        assert result.ok
        assert result.data.access_token == "USER_A_JWT"
        assert before == f"Bearer {ANON_KEY}"
        assert data_client.options.headers["Authorization"] == before

    def test_each_sign_in_gets_its_own_client(self, mock_db, mock_supabase):
        clients = [MagicMock(), MagicMock()]
        for client in clients:
            client.auth.sign_in_with_password.return_value = auth_response()

        with patch("services.auth_service.create_auth_client", side_effect=clients) as factory:
            service = AuthService()
            service.sign_in("a@example.com", "secret")
            service.sign_in("b@example.com", "secret")

        assert factory.call_count == 2
        for client in clients:
            client.auth.sign_in_with_password.assert_called_once()
        mock_supabase.auth.sign_in_with_password.assert_not_called()

    def test_auth_client_is_uncached_and_stateless(self):
        with patch.object(settings, "supabase_url", SUPABASE_URL), \
                patch.object(settings, "supabase_key", ANON_KEY):
            first = create_auth_client()
            second = create_auth_client()

        assert first is not second
        assert first.options.persist_session is False
        assert first.options.auto_refresh_token is False
        assert first.options.headers["Authorization"] == f"Bearer {ANON_KEY}"

    def test_missing_key_raises_configuration_error(self):
        with patch("services.auth_service.get_supabase_client", return_value=MagicMock()), \
                patch.object(settings, "supabase_key", None):
            with pytest.raises(ConfigurationError):
                AuthService().sign_in("a@example.com", "secret")
