from .routes import build_broadcast_router, notifications_router
from .service import BroadcastService, NotificationService

__all__ = [
    "build_broadcast_router",
    "notifications_router",
    "BroadcastService",
    "NotificationService",
]
