from catalog_admin.notifications.service import BroadcastService


class WhatsNewService(BroadcastService):
    """Release notes and announcements shown on the app's what's-new screen."""

    collection_name = "whats_new"
    kind = "whats_new"
