"""Terminal progress reporting for long-running batches."""
from __future__ import annotations

from typing import List, Optional

from utils.logging import get_logger

logger = get_logger(__name__)


class ProgressReporter:
    """Spinner-like progress sink backed by the project logger.

    ``text`` always holds the latest message so callers (and tests) can read
    the final counter of a batch. ``history`` keeps only the last
    ``history_limit`` messages.
    """

    def __init__(self, name: str = "ght", history_limit: int = 1000) -> None:
        self._logger = get_logger(f"{name}.progress")
        self.text: str = ""
        self.active = False
        self.history: List[str] = []
        self.history_limit = history_limit

    def _emit(self, level: str, message: Optional[str]) -> None:
        if message:
            self.text = message
            self.history.append(message)
            del self.history[:-self.history_limit]
            getattr(self._logger, level)(message)

    def start(self, message: Optional[str] = None) -> None:
        self.active = True
        self._emit("info", message)

    def update(self, message: str) -> None:
        self._emit("info", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def succeed(self, message: Optional[str] = None) -> None:
        self.active = False
        self._emit("info", message)

    def warn(self, message: str) -> None:
        self._emit("warning", message)

    def fail(self, message: str) -> None:
        self.active = False
        self._emit("error", message)

    def stop(self) -> None:
        self.active = False
