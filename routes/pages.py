"""
Page routes serving the HTML templates.

Every page except /login goes through require_session().
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from routes.auth import LOGIN_PATH, get_current_session, require_session

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter(tags=["Pages"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def login_page(request: Request):
    """Show the sign-in form, or go to the dashboard if already signed in."""
    if get_current_session(request) is not None:
        return RedirectResponse(url="/", status_code=302)

    return templates.TemplateResponse(request, "login.html", {})


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(request: Request):
    """Serve the dashboard page (protected)."""
    redirect = require_session(request)
    if redirect:
        return redirect

    return templates.TemplateResponse(request, "dashboard.html", {})
