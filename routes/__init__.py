"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.auth import router as auth_router
from routes.dashboard import router as dashboard_router
from routes.holidays import router as holidays_router
from routes.pages import router as pages_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "holidays_router",
    "pages_router",
]
