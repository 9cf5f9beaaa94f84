"""
API routes package.
"""

from .admin import router as admin_router
from .health import router as health_router
from .jobs import router as jobs_router
from .notifications import router as notifications_router
from .proposals import router as proposals_router
from .reviews import router as reviews_router

__all__ = [
    "admin_router",
    "health_router",
    "jobs_router",
    "notifications_router",
    "proposals_router",
    "reviews_router",
]
