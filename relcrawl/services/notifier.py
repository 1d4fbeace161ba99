from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

logger = logging.getLogger("relcrawl")


class Notifier(Protocol):
    """One-way signals to whatever presents the export to a person."""

    def log(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def progress(self, count: int) -> None: ...


class LoggingNotifier:
    """Notifier that writes every signal to the `relcrawl` logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logger

    def log(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def success(self, message: str) -> None:
        self._logger.info("✅ %s", message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def progress(self, count: int) -> None:
        self._logger.info("Currently %s users", count)


class ExportTracker(LoggingNotifier):
    """LoggingNotifier that also remembers the latest state for status queries.

    Thread-safe: the crawl runs on a worker thread while the API reads.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        super().__init__(log)
        self._lock = threading.Lock()
        self._count = 0
        self._last_message: Optional[str] = None
        self._last_level: Optional[str] = None
        self._last_artifact: Optional[str] = None
        self._updated_at: Optional[datetime] = None

    def _remember(self, level: str, message: str) -> None:
        with self._lock:
            self._last_level = level
            self._last_message = message
            self._updated_at = datetime.now(timezone.utc)

    def log(self, message: str) -> None:
        super().log(message)
        self._remember("info", message)

    def warning(self, message: str) -> None:
        super().warning(message)
        self._remember("warning", message)

    def success(self, message: str) -> None:
        super().success(message)
        self._remember("success", message)

    def error(self, message: str) -> None:
        super().error(message)
        self._remember("error", message)

    def progress(self, count: int) -> None:
        super().progress(count)
        with self._lock:
            self._count = count
            self._updated_at = datetime.now(timezone.utc)

    def record_artifact(self, path: Optional[str]) -> None:
        with self._lock:
            self._last_artifact = path

    def snapshot(self) -> Dict:
        with self._lock:
            return {
                "count": self._count,
                "last_level": self._last_level,
                "last_message": self._last_message,
                "last_artifact": self._last_artifact,
                "updated_at": self._updated_at.isoformat() if self._updated_at else None,
            }
