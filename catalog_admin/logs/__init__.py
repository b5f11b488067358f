from .routes import logs_router
from .service import LogService

__all__ = ["logs_router", "LogService"]
