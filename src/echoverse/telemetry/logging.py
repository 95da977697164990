"""Structured event sinks and the bounded activity log mirrored to players."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class Telemetry(Protocol):
    """Reports operational events from the engine and its capabilities."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Telemetry sink that forwards events to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("echoverse.telemetry")

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.info(event_name, extra=payload)


@dataclass(frozen=True, slots=True)
class ActivityEntry:
    timestamp: datetime
    message: str

    def render(self) -> str:
        return f"{self.timestamp.astimezone().strftime('%H:%M:%S')}: {self.message}"


class ActivityLog:
    """Keeps the most recent timestamped messages, oldest first."""

    def __init__(self, max_entries: int = 10) -> None:
        self._entries: deque[ActivityEntry] = deque(maxlen=max_entries)

    def add(self, message: str, *, timestamp: datetime | None = None) -> ActivityEntry:
        entry = ActivityEntry(timestamp=timestamp or datetime.now(timezone.utc), message=message)
        self._entries.append(entry)
        return entry

    def entries(self) -> list[ActivityEntry]:
        return list(self._entries)

    def lines(self) -> list[str]:
        return [entry.render() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
