"""API routers."""

from .cron import router as cron_router
from .health import router as health_router
from .intake import router as intake_router
from .sessions import router as sessions_router

__all__ = [
    "cron_router",
    "health_router",
    "intake_router",
    "sessions_router",
]
