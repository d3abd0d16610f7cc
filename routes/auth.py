"""
Auth API routes and the session guard.

The session is the Supabase access token, kept in an http-only cookie.
Pages call require_session() and redirect to /login; API routes depend
on require_user and answer 401.
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse
import structlog

from config import settings
from models.auth import SessionInfo, SignInRequest
from services.auth_service import get_auth_service
from exceptions import AppError, AuthenticationError, InvalidCredentialsError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

LOGIN_PATH = "/login"


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# SESSION GUARD
# ===================

def get_access_token(request: Request) -> Optional[str]:
    """Token from the session cookie, or from an 'Authorization: Bearer' header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_current_session(request: Request) -> Optional[SessionInfo]:
    """Active session for the request, None when absent or rejected."""
    result = get_auth_service().get_session(get_access_token(request))
    return result.data if result.ok else None


def require_session(request: Request) -> Optional[RedirectResponse]:
    """
    Gate for HTML pages.

    Returns RedirectResponse to the login page if not authenticated, None if OK.
    The login page itself is never gated.
    """
    if request.url.path == LOGIN_PATH:
        return None
    if get_current_session(request) is None:
        return RedirectResponse(url=LOGIN_PATH, status_code=302)
    return None


async def require_user(request: Request) -> SessionInfo:
    """
    FastAPI dependency for API routes.

    Raises:
        AuthenticationError: If there is no valid session
    """
    session = get_current_session(request)
    if session is None:
        raise AuthenticationError()
    return session


# ===================
# ROUTES
# ===================

@router.post("/login", response_model=SessionInfo)
async def login(body: SignInRequest):
    """
    Sign in with email and password.

    Sets the session cookie on success.
    """
    try:
        result = get_auth_service().sign_in(body.email, body.password)
        if not result.ok:
            raise InvalidCredentialsError(result.error)

        session: SessionInfo = result.data
        response = JSONResponse(content=session.model_dump(mode="json"))
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session.access_token,
            max_age=session.expires_in or settings.session_max_age,
            httponly=True,
            samesite="lax",
            secure=settings.cookie_secure,
        )
        return response

    except Exception as e:
        return handle_error(e)


@router.post("/logout")
async def logout(request: Request):
    """
    Sign out and clear the session cookie.

    The cookie is cleared even if the provider rejects the sign-out.
    """
    result = get_auth_service().sign_out(get_access_token(request))

    response = JSONResponse(content={"success": result.ok, "error": result.error})
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/session", response_model=SessionInfo)
async def current_session(request: Request):
    """Get the user behind the current session."""
    session = get_current_session(request)
    if session is None:
        return handle_error(AuthenticationError())
    return session
