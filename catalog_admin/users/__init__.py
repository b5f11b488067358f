from .routes import users_router, get_actor
from .service import UserService

__all__ = ["users_router", "get_actor", "UserService"]
