from typing import Callable


class LocationNavigator:
    """Tracks the current dashboard location and tells listeners about redirects."""

    def __init__(self, location: str = "/"):
        self.location = location
        self.history: list[str] = []
        self._listeners: list[Callable[[str], None]] = []

    def on_redirect(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def redirect(self, path: str) -> None:
        self.history.append(path)
        self.location = path
        for listener in self._listeners:
            listener(path)
