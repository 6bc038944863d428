"""
Bounded, observable log of failures seen by the client.

Callers that show an error badge or a failure list subscribe here instead of
hooking global error handlers.
"""

import logging
import threading
from collections import deque
from datetime import date, datetime, timezone
from typing import Any, Callable
from uuid import UUID, uuid4
from pydantic import BaseModel, Field
from debtsys.models.enums import LogLevel

SENSITIVE_FIELDS = {"password", "token", "access_token", "refresh_token", "authorization"}


class ErrorLogEntry(BaseModel):
    entry_id: UUID = Field(default_factory=uuid4)
    level: LogLevel = LogLevel.error
    message: str
    source: str | None = None   # logger name or operation, e.g. "debtsys.api.client"
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


Subscriber = Callable[[ErrorLogEntry], None]


def _normalize_details(details: dict | None) -> dict:
    normalized = {}
    for k, v in (details or {}).items():
        if k.lower() in SENSITIVE_FIELDS:
            normalized[k] = "***REDACTED***"
        elif isinstance(v, UUID):
            normalized[k] = str(v)
        elif isinstance(v, (datetime, date)):
            normalized[k] = v.isoformat()
        else:
            normalized[k] = v
    return normalized


class ErrorLog:
    def __init__(self, capacity: int = 100) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: deque[ErrorLogEntry] = deque(maxlen=capacity)
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def record(
        self,
        message: str,
        level: LogLevel | str = LogLevel.error,
        source: str | None = None,
        details: dict | None = None,
    ) -> ErrorLogEntry:
        entry = ErrorLogEntry(
            level=LogLevel(level),
            message=message,
            source=source,
            details=_normalize_details(details),
        )
        with self._lock:
            self._entries.append(entry)   # oldest entry drops out at capacity
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(entry)
        return entry

    def entries(self, level: LogLevel | str | None = None) -> list[ErrorLogEntry]:
        """Newest first, optionally filtered by level."""
        with self._lock:
            items = list(self._entries)
        if level is not None:
            level = LogLevel(level)
            items = [e for e in items if e.level == level]
        return list(reversed(items))

    def count(self, level: LogLevel | str | None = None) -> int:
        return len(self.entries(level))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for every new entry; returns the unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe


class ErrorLogHandler(logging.Handler):
    """Feeds WARNING and above into an ErrorLog."""

    def __init__(self, error_log: ErrorLog, level: int = logging.WARNING) -> None:
        super().__init__(level)
        self.error_log = error_log

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if record.levelno >= logging.ERROR:
                level = LogLevel.error
            elif record.levelno >= logging.WARNING:
                level = LogLevel.warning
            else:
                level = LogLevel.info
            details = {"exception": self.format(record)} if record.exc_info else {}
            self.error_log.record(record.getMessage(), level=level, source=record.name, details=details)
        except Exception:
            self.handleError(record)
