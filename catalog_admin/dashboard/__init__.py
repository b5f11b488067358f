from .routes import dashboard_router
from .service import DashboardService

__all__ = ["dashboard_router", "DashboardService"]
