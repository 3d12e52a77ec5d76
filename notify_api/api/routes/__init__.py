"""API route modules."""

from notify_api.api.routes.health import router as health_router
from notify_api.api.routes.notifications import router as notifications_router

__all__ = ["health_router", "notifications_router"]
