"""Timer-driven resume hook for hosts without focus or visibility events."""

import asyncio
import contextlib

from catalog_admin.utils import Logger
from .manager import SessionManager
from .models import SessionState

logger = Logger("session.poller")


class ResumePoller:
    def __init__(self, manager: SessionManager, interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.manager = manager
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if self.manager.state is SessionState.UNAUTHENTICATED:
                continue
            try:
                outcome = await self.manager.on_resume()
            except Exception:
                logger.exception("Resume check failed")
                continue
            logger.debug(f"Resume check: {outcome.value}")
