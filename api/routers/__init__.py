"""API routers (preferred import path)."""

from .teams import router as teams_router
from .problems import router as problems_router
from .submissions import router as submissions_router
from .leaderboard import router as leaderboard_router
from .admin import router as admin_router
from .system import router as system_router

__all__ = [
    "teams_router",
    "problems_router",
    "submissions_router",
    "leaderboard_router",
    "admin_router",
    "system_router",
]
