"""
Auth service — pass-through to Supabase Auth.

Every call returns an AuthResult {data, error} pair, mirroring the
provider's own contract; token refresh and rate limiting stay with
the provider.
"""

from typing import Optional
import structlog

from config import create_auth_client, get_supabase_client
from models.auth import AuthResult, SessionInfo, SessionUser

logger = structlog.get_logger(__name__)


def _to_session_user(user) -> SessionUser:
    return SessionUser(id=str(user.id), email=getattr(user, "email", None))


class AuthService:
    """
    Email/password sign-in, session lookup and sign-out.

    self.db is the shared anon client and only verifies or revokes
    tokens. Sign-in runs on a client of its own so the shared one never
    holds a user session.
    """

    def __init__(self):
        self.db = get_supabase_client()

    def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Sign in with email and password.

        Returns:
            AuthResult with a SessionInfo (including the access token) or an error
        """
        logger.info("auth_sign_in_attempt", email=email)

        client = create_auth_client()
        try:
            response = client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.warning("auth_sign_in_failed", email=email, error=str(e))
            return AuthResult.failure(str(e))

        session = getattr(response, "session", None)
        if session is None or response.user is None:
            logger.warning("auth_sign_in_no_session", email=email)
            return AuthResult.failure("No session returned")

        logger.info("auth_signed_in", user_id=str(response.user.id))
        return AuthResult.success(SessionInfo(
            user=_to_session_user(response.user),
            access_token=session.access_token,
            expires_in=getattr(session, "expires_in", None),
        ))

    def get_session(self, access_token: Optional[str]) -> AuthResult:
        """
        Resolve an access token to its user.

        Returns:
            AuthResult with a SessionInfo, or an error when the token is
            missing, expired or revoked
        """
        if not access_token:
            return AuthResult.failure("No active session")

        try:
            response = self.db.auth.get_user(access_token)
        except Exception as e:
            logger.debug("auth_session_invalid", error=str(e))
            return AuthResult.failure(str(e))

        user = getattr(response, "user", None) if response else None
        if user is None:
            return AuthResult.failure("No active session")

        return AuthResult.success(SessionInfo(
            user=_to_session_user(user),
            access_token=access_token,
        ))

    def sign_out(self, access_token: Optional[str]) -> AuthResult:
        """Revoke the session behind an access token."""
        if not access_token:
            return AuthResult.success(None)

        try:
            self.db.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.warning("auth_sign_out_failed", error=str(e))
            return AuthResult.failure(str(e))

        logger.info("auth_signed_out")
        return AuthResult.success(None)


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get or create AuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
