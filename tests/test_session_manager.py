import asyncio

import pytest

from catalog_admin.session import (
    SESSION_KEY,
    LocationNavigator,
    MemorySessionStore,
    ReconcileOutcome,
    Session,
    SessionManager,
    SessionState,
    ToastCenter,
    ToastKind,
)
from catalog_admin.session.manager import DISABLED_MESSAGE
from catalog_admin.utils.exceptions import AuthenticationError


class FakeDirectory:
    """Serves a mutable record and counts lookups; `gate` holds fetches open."""

    def __init__(self, record: Session | None):
        self.record = record
        self.calls = 0
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def find_by_email(self, email: str) -> Session | None:
        self.calls += 1
        await asyncio.sleep(0)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.record


class FakeAuthenticator:
    def __init__(self, session: Session):
        self.session = session
        self.password = "secret123"
        self.sign_outs = 0
        self.sign_out_error: Exception | None = None
        self.sign_out_gate: asyncio.Event | None = None

    async def authenticate(self, email: str, password: str) -> Session:
        if email != self.session.email or password != self.password:
            raise AuthenticationError()
        return self.session

    async def sign_out(self, session):
        self.sign_outs += 1
        if self.sign_out_gate is not None:
            await self.sign_out_gate.wait()
        if self.sign_out_error is not None:
            raise self.sign_out_error


class FailingSaveStore(MemorySessionStore):
    def __init__(self):
        super().__init__()
        self.fail_saves = False

    def save(self, session):
        if self.fail_saves:
            raise OSError("disk full")
        super().save(session)


def _session(role="user", status="active"):
    return Session(uid="u1", email="staff@example.com", role=role, status=status, name="Staff")


def _manager(directory, store=None, logout_delay=0.0):
    return SessionManager(
        directory=directory,
        authenticator=FakeAuthenticator(_session()),
        store=store or MemorySessionStore(),
        notifier=ToastCenter(),
        navigator=LocationNavigator("/dashboard"),
        logout_delay=logout_delay,
    )


async def _logged_in(directory, **kwargs) -> SessionManager:
    manager = _manager(directory, **kwargs)
    await manager.login("staff@example.com", "secret123")
    return manager


@pytest.mark.asyncio
async def test_login_persists_session_and_marks_fresh():
    manager = await _logged_in(FakeDirectory(_session()))

    assert manager.state is SessionState.FRESH
    assert manager.is_authenticated
    assert manager.store.load() == _session()
    assert SESSION_KEY in manager.store.items


@pytest.mark.asyncio
async def test_login_with_bad_credentials_propagates():
    manager = _manager(FakeDirectory(_session()))

    with pytest.raises(AuthenticationError):
        await manager.login("staff@example.com", "wrong")

    assert manager.state is SessionState.UNAUTHENTICATED
    assert manager.store.load() is None


@pytest.mark.asyncio
async def test_reconcile_is_skipped_without_a_session():
    directory = FakeDirectory(_session())
    manager = _manager(directory)

    assert await manager.on_resume() is ReconcileOutcome.SKIPPED
    assert directory.calls == 0


@pytest.mark.asyncio
async def test_unchanged_record_leaves_session_alone():
    directory = FakeDirectory(_session())
    manager = await _logged_in(directory)

    assert await manager.on_resume() is ReconcileOutcome.UNCHANGED
    assert manager.state is SessionState.FRESH
    assert manager.notifier.history == []


@pytest.mark.asyncio
async def test_second_trigger_while_in_flight_does_not_fetch_again():
    directory = FakeDirectory(_session(role="admin"))
    manager = await _logged_in(directory)
    directory.gate = asyncio.Event()

    first = asyncio.create_task(manager.on_resume())
    await asyncio.sleep(0)
    assert manager.state is SessionState.CHECK_PENDING

    assert await manager.on_resume() is ReconcileOutcome.SKIPPED
    directory.gate.set()

    assert await first is ReconcileOutcome.ROLE_CHANGED
    assert directory.calls == 1


@pytest.mark.asyncio
async def test_role_change_converges_with_one_notification():
    directory = FakeDirectory(_session(role="admin"))
    manager = await _logged_in(directory)

    outcomes = await asyncio.gather(manager.on_resume(), manager.on_resume())

    assert sorted(o.value for o in outcomes) == ["role_changed", "skipped"]
    assert manager.session == directory.record
    assert manager.store.load() == directory.record
    assert manager.state is SessionState.FRESH

    toasts = manager.notifier.history
    assert len(toasts) == 1
    assert toasts[0].message == "Your role has been updated to: ADMIN"
    assert toasts[0].kind is ToastKind.INFO
    assert toasts[0].duration_ms == 7000

    # Already converged: nothing more to report.
    assert await manager.on_resume() is ReconcileOutcome.UNCHANGED
    assert len(manager.notifier.history) == 1


@pytest.mark.asyncio
async def test_other_field_changes_are_not_reconciled():
    directory = FakeDirectory(_session().model_copy(update={"name": "Renamed"}))
    manager = await _logged_in(directory)

    assert await manager.on_resume() is ReconcileOutcome.UNCHANGED
    assert manager.session.name == "Staff"


@pytest.mark.asyncio
async def test_disabled_account_is_logged_out_once():
    directory = FakeDirectory(_session(status="disabled"))
    manager = await _logged_in(directory)

    outcomes = await asyncio.gather(manager.on_resume(), manager.on_resume())
    assert sorted(o.value for o in outcomes) == ["skipped", "terminated"]

    await manager.termination

    assert manager.state is SessionState.UNAUTHENTICATED
    assert manager.session is None
    assert manager.store.load() is None
    assert SESSION_KEY not in manager.store.items
    assert manager.navigator.history == ["/login"]
    assert manager.authenticator.sign_outs == 1

    toasts = manager.notifier.history
    assert [(t.message, t.kind, t.duration_ms) for t in toasts] == [
        (DISABLED_MESSAGE, ToastKind.ERROR, 3000)
    ]

    assert await manager.on_resume() is ReconcileOutcome.SKIPPED
    assert directory.calls == 1


@pytest.mark.asyncio
async def test_disabled_with_role_change_shows_only_disabled_toast():
    directory = FakeDirectory(_session(role="admin", status="disabled"))
    manager = await _logged_in(directory)

    assert await manager.on_resume() is ReconcileOutcome.TERMINATED
    await manager.termination

    assert [t.kind for t in manager.notifier.history] == [ToastKind.ERROR]


@pytest.mark.asyncio
async def test_no_reconcile_during_logout_delay():
    directory = FakeDirectory(_session(status="disabled"))
    manager = await _logged_in(directory, logout_delay=0.05)

    assert await manager.on_resume() is ReconcileOutcome.TERMINATED
    assert manager.state is SessionState.TERMINATING
    # Session stays held and persisted until the delay runs out.
    assert manager.store.load().is_disabled

    assert await manager.on_resume() is ReconcileOutcome.SKIPPED
    await manager.termination

    assert directory.calls == 1
    assert manager.navigator.history == ["/login"]


@pytest.mark.asyncio
async def test_manual_logout_during_delay_redirects_once():
    directory = FakeDirectory(_session(status="disabled"))
    manager = await _logged_in(directory, logout_delay=0.05)

    await manager.on_resume()
    await manager.logout()
    await manager.termination

    assert manager.navigator.history == ["/login"]
    assert manager.authenticator.sign_outs == 1


@pytest.mark.asyncio
async def test_read_failure_leaves_session_untouched():
    directory = FakeDirectory(_session(role="admin"))
    manager = await _logged_in(directory)
    directory.error = ConnectionError("network down")

    assert await manager.on_resume() is ReconcileOutcome.FAILED
    assert manager.state is SessionState.FRESH
    assert manager.session == _session()
    assert manager.store.load() == _session()
    assert manager.notifier.history == []
    assert manager.navigator.history == []

    # Next trigger retries and succeeds.
    directory.error = None
    assert await manager.on_resume() is ReconcileOutcome.ROLE_CHANGED


@pytest.mark.asyncio
async def test_store_failure_keeps_reconciliation_running():
    directory = FakeDirectory(_session(role="admin"))
    store = FailingSaveStore()
    manager = await _logged_in(directory, store=store)
    store.fail_saves = True

    assert await manager.on_resume() is ReconcileOutcome.FAILED
    assert manager.state is SessionState.FRESH
    assert manager.session == _session()
    assert manager.notifier.history == []

    store.fail_saves = False
    assert await manager.on_resume() is ReconcileOutcome.ROLE_CHANGED
    assert store.load() == _session(role="admin")
    assert directory.calls == 2


@pytest.mark.asyncio
async def test_disabled_account_is_logged_out_when_store_fails():
    directory = FakeDirectory(_session(status="disabled"))
    store = FailingSaveStore()
    manager = await _logged_in(directory, store=store)
    store.fail_saves = True

    assert await manager.on_resume() is ReconcileOutcome.TERMINATED
    await manager.termination

    assert manager.state is SessionState.UNAUTHENTICATED
    assert store.load() is None
    assert manager.navigator.history == ["/login"]


@pytest.mark.asyncio
async def test_login_during_forced_logout_keeps_new_session():
    directory = FakeDirectory(_session(status="disabled"))
    manager = await _logged_in(directory)
    manager.authenticator.sign_out_gate = asyncio.Event()

    assert await manager.on_resume() is ReconcileOutcome.TERMINATED
    termination = manager.termination
    while manager.authenticator.sign_outs == 0:
        await asyncio.sleep(0)

    await manager.login("staff@example.com", "secret123")
    with pytest.raises(asyncio.CancelledError):
        await termination

    assert manager.state is SessionState.FRESH
    assert manager.session == _session()
    assert manager.store.load() == _session()
    assert manager.navigator.history == []

    directory.record = _session()
    assert await manager.on_resume() is ReconcileOutcome.UNCHANGED


@pytest.mark.asyncio
async def test_missing_record_is_treated_as_failure():
    directory = FakeDirectory(None)
    manager = await _logged_in(directory)

    assert await manager.on_resume() is ReconcileOutcome.FAILED
    assert manager.state is SessionState.FRESH
    assert manager.session == _session()


@pytest.mark.asyncio
async def test_status_only_change_is_saved_quietly():
    directory = FakeDirectory(_session())
    manager = await _logged_in(directory)
    manager.store.save(_session(status="disabled"))
    manager._session = _session(status="disabled")

    assert await manager.on_resume() is ReconcileOutcome.UPDATED
    assert manager.store.load() == _session()
    assert manager.notifier.history == []


@pytest.mark.asyncio
async def test_logout_clears_store_even_when_sign_out_fails():
    manager = await _logged_in(FakeDirectory(_session()))
    manager.authenticator.sign_out_error = RuntimeError("provider unavailable")

    await manager.logout()

    assert manager.state is SessionState.UNAUTHENTICATED
    assert manager.store.load() is None
    assert manager.navigator.history == ["/login"]

    await manager.logout()
    assert manager.navigator.history == ["/login"]


@pytest.mark.asyncio
async def test_logout_result_discards_late_fetch():
    directory = FakeDirectory(_session(role="admin"))
    manager = await _logged_in(directory)
    directory.gate = asyncio.Event()

    pending = asyncio.create_task(manager.on_resume())
    await asyncio.sleep(0)
    await manager.logout()
    directory.gate.set()

    assert await pending is ReconcileOutcome.SKIPPED
    assert manager.store.load() is None
    assert manager.notifier.history == []


def test_restore_resumes_persisted_session():
    store = MemorySessionStore()
    store.save(_session(role="admin"))
    manager = _manager(FakeDirectory(None), store=store)

    assert manager.restore() == _session(role="admin")
    assert manager.state is SessionState.FRESH


def test_restore_discards_disabled_session():
    store = MemorySessionStore()
    store.save(_session(status="disabled"))
    manager = _manager(FakeDirectory(None), store=store)

    assert manager.restore() is None
    assert manager.state is SessionState.UNAUTHENTICATED
    assert store.load() is None


def test_restore_with_empty_store():
    manager = _manager(FakeDirectory(None))
    assert manager.restore() is None
    assert not manager.is_authenticated
