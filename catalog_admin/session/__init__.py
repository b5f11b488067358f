from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.config import settings
from .directory import MongoAuthenticator, MongoUserDirectory
from .manager import ReconcileOutcome, SessionManager
from .models import Session, SessionState
from .navigator import LocationNavigator
from .notifier import Toast, ToastCenter, ToastKind
from .poller import ResumePoller
from .store import SESSION_KEY, FileSessionStore, MemorySessionStore


def create_session_manager(
    db: AsyncIOMotorDatabase,
    notifier: ToastCenter | None = None,
    navigator: LocationNavigator | None = None,
) -> SessionManager:
    """Session manager wired to MongoDB and the configured session file."""
    return SessionManager(
        directory=MongoUserDirectory(db),
        authenticator=MongoAuthenticator(db),
        store=FileSessionStore(settings.session_file),
        notifier=notifier or ToastCenter(),
        navigator=navigator or LocationNavigator(),
        logout_delay=settings.session_logout_delay_seconds,
    )


def create_resume_poller(manager: SessionManager) -> ResumePoller:
    """Poller that re-checks the session every `session_poll_interval_seconds`."""
    return ResumePoller(manager, settings.session_poll_interval_seconds)


__all__ = [
    "create_session_manager",
    "create_resume_poller",
    "MongoAuthenticator",
    "MongoUserDirectory",
    "ReconcileOutcome",
    "SessionManager",
    "Session",
    "SessionState",
    "LocationNavigator",
    "Toast",
    "ToastCenter",
    "ToastKind",
    "ResumePoller",
    "SESSION_KEY",
    "FileSessionStore",
    "MemorySessionStore",
]
