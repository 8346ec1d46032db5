"""NoticeChannel: user-facing feedback messages + callback registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Any


@dataclass(frozen=True)
class Notice:
    """One feedback message. ``level`` is 'info', 'warning' or 'error'."""

    level: str
    summary: str
    detail: str = ""


NoticeCallback = Callable[[Notice], Any]


class NoticeChannel:
    """Holds published notices and notifies registered callbacks."""

    def __init__(self, max_history: int = 50) -> None:
        self._history: list[Notice] = []
        self._callbacks: list[NoticeCallback] = []
        self._max_history = max_history

    @property
    def history(self) -> list[Notice]:
        return list(self._history)

    @property
    def latest(self) -> Notice | None:
        return self._history[-1] if self._history else None

    def publish(self, notice: Notice) -> None:
        """Record the notice and notify all callbacks."""
        self._history.append(notice)
        if len(self._history) > self._max_history:
            del self._history[0]
        for cb in self._callbacks:
            cb(notice)

    def info(self, summary: str, detail: str = "") -> None:
        self.publish(Notice("info", summary, detail))

    def warning(self, summary: str, detail: str = "") -> None:
        self.publish(Notice("warning", summary, detail))

    def error(self, summary: str, detail: str = "") -> None:
        self.publish(Notice("error", summary, detail))

    def subscribe(self, callback: NoticeCallback) -> None:
        """Register a callback: fn(notice)."""
        self._callbacks.append(callback)

    def __repr__(self) -> str:
        return f"NoticeChannel(notices={len(self._history)})"
