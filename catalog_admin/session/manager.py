"""
Session manager — owns the dashboard's session and keeps it in step with the
authoritative staff record.

States:
    unauthenticated → authenticated_fresh → authenticated_stale_check_pending
        → authenticated_fresh | terminating → unauthenticated

A reconciliation pass fetches the record by email and compares role and
status with the held copy. Differences are written to the store; a disabled
account is shown an error toast and logged out after `logout_delay` seconds.
Read failures are logged and leave the session alone. Only one pass runs at a
time, and none starts while a logout is in flight.
"""

import asyncio
from enum import Enum

from catalog_admin.utils import Logger
from .models import Session, SessionState
from .notifier import ToastKind
from .ports import Authenticator, Navigator, Notifier, SessionStore, UserDirectory

logger = Logger("session")

LOGIN_PATH = "/login"
ROLE_CHANGED_TOAST_MS = 7000
DISABLED_TOAST_MS = 3000
DISABLED_MESSAGE = "Your account has been disabled. You will be logged out."


class ReconcileOutcome(str, Enum):
    SKIPPED = "skipped"
    FAILED = "failed"
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    ROLE_CHANGED = "role_changed"
    TERMINATED = "terminated"


class SessionManager:
    def __init__(
        self,
        directory: UserDirectory,
        authenticator: Authenticator,
        store: SessionStore,
        notifier: Notifier,
        navigator: Navigator,
        logout_delay: float = 3.0,
        login_path: str = LOGIN_PATH,
    ):
        self.directory = directory
        self.authenticator = authenticator
        self.store = store
        self.notifier = notifier
        self.navigator = navigator
        self.logout_delay = logout_delay
        self.login_path = login_path

        self._state = SessionState.UNAUTHENTICATED
        self._session: Session | None = None
        self._logging_out = False
        self._termination: asyncio.Task | None = None
        # Bumped by each login so an older logout leaves the new session alone.
        self._generation = 0

    # ── Read-only views ──────────────────────────────────────────
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def termination(self) -> asyncio.Task | None:
        """The scheduled forced logout, if a disabled account was detected."""
        return self._termination

    @property
    def is_authenticated(self) -> bool:
        return self._state is not SessionState.UNAUTHENTICATED

    # ── Lifecycle ────────────────────────────────────────────────
    def restore(self) -> Session | None:
        """Resume a session persisted by an earlier run."""
        session = self.store.load()
        if session is None:
            return None
        if session.is_disabled:
            self.store.clear()
            return None
        self._session = session
        self._state = SessionState.FRESH
        logger.info(f"Restored session for {session.email}")
        return session

    async def login(self, email: str, password: str) -> Session:
        """
        Verify credentials and persist the resulting session. Credential
        and store errors propagate to the caller unchanged.

        A login during a pending forced logout replaces the old session; the
        superseded logout no longer clears the store or redirects.
        """
        session = await self.authenticator.authenticate(email, password)
        self.store.save(session)
        self._generation += 1
        self._cancel_termination()
        self._session = session
        self._logging_out = False
        self._state = SessionState.FRESH
        logger.info(f"Logged in {session.email} as {session.role}")
        return session

    async def logout(self) -> None:
        if self._logging_out or self._state is SessionState.UNAUTHENTICATED:
            return

        self._logging_out = True
        self._state = SessionState.TERMINATING
        session = self._session
        generation = self._generation
        try:
            await self.authenticator.sign_out(session)
        except Exception:
            logger.exception("Logout error")
        finally:
            if generation == self._generation:
                self._finish_logout(session)
            else:
                logger.info(
                    f"Logout of {session.email if session else 'unknown user'} "
                    "superseded by a new login"
                )

    def _finish_logout(self, session: Session | None) -> None:
        try:
            self.store.clear()
        except Exception:
            logger.exception("Could not clear the stored session")
        self._session = None
        self._state = SessionState.UNAUTHENTICATED
        self._logging_out = False
        logger.info(f"Logged out {session.email if session else 'unknown user'}")
        self.navigator.redirect(self.login_path)

    # ── Reconciliation ───────────────────────────────────────────
    async def on_resume(self) -> ReconcileOutcome:
        """Entry point for focus, visibility or timer events."""
        return await self.reconcile()

    async def reconcile(self) -> ReconcileOutcome:
        if (
            self._state is not SessionState.FRESH
            or self._logging_out
            or self._session is None
        ):
            return ReconcileOutcome.SKIPPED

        held = self._session
        self._state = SessionState.CHECK_PENDING
        try:
            latest = await self.directory.find_by_email(held.email)
        except Exception:
            logger.exception(f"Error refreshing user data for {held.email}")
            self._settle()
            return ReconcileOutcome.FAILED

        if self._state is not SessionState.CHECK_PENDING:
            # Logged out while the fetch was in flight.
            return ReconcileOutcome.SKIPPED

        try:
            return self._apply(held, latest)
        except Exception:
            logger.exception(f"Error applying refreshed user data for {held.email}")
            self._settle()
            return ReconcileOutcome.FAILED

    def _apply(self, held: Session, latest: Session | None) -> ReconcileOutcome:
        if latest is None:
            logger.error(f"No user record for {held.email}")
            self._settle()
            return ReconcileOutcome.FAILED

        if latest.role == held.role and latest.status == held.status:
            self._settle()
            return ReconcileOutcome.UNCHANGED

        try:
            self.store.save(latest)
        except Exception:
            logger.exception(f"Could not persist refreshed session for {held.email}")
            if not latest.is_disabled:
                # Held copy stays as is, so the next pass retries.
                self._settle()
                return ReconcileOutcome.FAILED

        self._session = latest
        logger.info(
            f"Session for {held.email} reconciled: "
            f"role {held.role} -> {latest.role}, status {held.status} -> {latest.status}"
        )

        if latest.is_disabled:
            self._state = SessionState.TERMINATING
            self._termination = asyncio.create_task(self._terminate_after_delay())
            self.notifier.show_toast(DISABLED_MESSAGE, ToastKind.ERROR, DISABLED_TOAST_MS)
            return ReconcileOutcome.TERMINATED

        self._settle()
        if latest.role != held.role:
            self.notifier.show_toast(
                f"Your role has been updated to: {latest.role.upper()}",
                ToastKind.INFO,
                ROLE_CHANGED_TOAST_MS,
            )
            return ReconcileOutcome.ROLE_CHANGED
        return ReconcileOutcome.UPDATED

    def _settle(self) -> None:
        if self._state is SessionState.CHECK_PENDING:
            self._state = SessionState.FRESH

    async def _terminate_after_delay(self) -> None:
        await asyncio.sleep(self.logout_delay)
        await self.logout()

    def _cancel_termination(self) -> None:
        if self._termination is not None and not self._termination.done():
            self._termination.cancel()
        self._termination = None
