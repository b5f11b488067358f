"""In-process toast surface for session messages."""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from catalog_admin.utils import Logger

logger = Logger("session.toast")

DEFAULT_DURATION_MS = 5000
HISTORY_LIMIT = 100


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Toast:
    message: str
    kind: ToastKind
    duration_ms: int
    shown_at: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])

    @property
    def expires_at(self) -> float:
        return self.shown_at + self.duration_ms / 1000


class ToastCenter:
    """
    Keeps the toasts currently on screen. Each disappears once its duration
    has elapsed; `history` keeps the last `history_limit` toasts shown.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        history_limit: int = HISTORY_LIMIT,
    ):
        if history_limit <= 0:
            raise ValueError("history_limit must be positive")
        self._clock = clock
        self.history_limit = history_limit
        self._active: list[Toast] = []
        self.history: list[Toast] = []

    def show_toast(
        self,
        message: str,
        kind: ToastKind | str = ToastKind.INFO,
        duration_ms: int | None = None,
    ) -> Toast:
        toast = Toast(
            message=message,
            kind=ToastKind(kind),
            duration_ms=duration_ms or DEFAULT_DURATION_MS,
            shown_at=self._clock(),
        )
        self._prune()
        self._active.append(toast)
        self.history.append(toast)
        del self.history[:-self.history_limit]
        if toast.kind is ToastKind.ERROR:
            logger.warning(f"[toast] {message}")
        else:
            logger.info(f"[toast] {message}")
        return toast

    @property
    def active(self) -> list[Toast]:
        self._prune()
        return list(self._active)

    def _prune(self) -> None:
        now = self._clock()
        self._active = [t for t in self._active if t.expires_at > now]

    def dismiss(self, toast_id: str) -> None:
        self._active = [t for t in self._active if t.id != toast_id]
