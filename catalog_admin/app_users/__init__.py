from .routes import app_users_router
from .service import AppUserService

__all__ = ["app_users_router", "AppUserService"]
