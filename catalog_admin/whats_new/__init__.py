from .routes import whats_new_router
from .service import WhatsNewService

__all__ = ["whats_new_router", "WhatsNewService"]
