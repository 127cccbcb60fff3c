"""API route modules."""

from stockflow.api.routes.health import router as health_router
from stockflow.api.routes.movements import router as movements_router
from stockflow.api.routes.notifications import router as notifications_router
from stockflow.api.routes.products import router as products_router
from stockflow.api.routes.realtime import router as realtime_router

__all__ = [
    "health_router",
    "products_router",
    "movements_router",
    "notifications_router",
    "realtime_router",
]
