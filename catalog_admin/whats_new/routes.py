from catalog_admin.notifications.routes import build_broadcast_router
from catalog_admin.rbac import Resource
from .service import WhatsNewService

whats_new_router = build_broadcast_router(WhatsNewService, Resource.WHATS_NEW)
