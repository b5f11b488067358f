"""Collaborators the session manager depends on."""

from typing import Protocol

from .models import Session


class UserDirectory(Protocol):
    """Read access to the authoritative staff records."""

    async def find_by_email(self, email: str) -> Session | None: ...


class Authenticator(Protocol):
    async def authenticate(self, email: str, password: str) -> Session:
        """Raises AuthenticationError on bad credentials."""
        ...

    async def sign_out(self, session: Session | None) -> None: ...


class SessionStore(Protocol):
    """Persistent key/value slot holding the serialized session."""

    def load(self) -> Session | None: ...

    def save(self, session: Session) -> None: ...

    def clear(self) -> None: ...


class Notifier(Protocol):
    """Fire-and-forget user-visible messages."""

    def show_toast(self, message: str, kind: str, duration_ms: int | None = None): ...


class Navigator(Protocol):
    def redirect(self, path: str) -> None: ...
