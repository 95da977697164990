"""Narration queue that speaks one line at a time."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable

from echoverse.errors import CapabilityUnavailableError

from .interfaces import SpeechSink


@dataclass(slots=True)
class VoiceOutputConfig:
    """Configurable controls for narration speech."""

    enabled: bool = True
    max_chars: int = 500


@dataclass(slots=True)
class _QueuedNarration:
    text: str
    repeat: bool = False


class NarrationCoordinator:
    """Plays narration through a speech sink without overlap or interruption.

    Requests made while a line is playing wait in FIFO order. A repeat request
    is dropped when newer narration is already waiting, so stale content is
    never spoken after something newer is pending. Sink failures switch the
    coordinator to silent mode and are reported through ``on_unavailable``.
    """

    def __init__(
        self,
        sink: SpeechSink | None,
        config: VoiceOutputConfig | None = None,
        *,
        on_unavailable: Callable[[CapabilityUnavailableError], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sink = sink
        self._config = config or VoiceOutputConfig()
        self._on_unavailable = on_unavailable
        self._logger = logger or logging.getLogger("echoverse.narration")

        self._queue: deque[_QueuedNarration] = deque()
        self._current: _QueuedNarration | None = None
        self._generation = 0
        self._pumping = False

    @property
    def available(self) -> bool:
        return self._sink is not None

    def speak(self, text: str, *, repeat: bool = False) -> bool:
        """Queue narration; return ``False`` when it was dropped."""
        if not self._config.enabled or self._sink is None:
            return False

        normalized = " ".join(text.split())
        if not normalized:
            return False

        if repeat and self._queue:
            self._logger.debug("narration_repeat_dropped", extra={"pending": len(self._queue)})
            return False

        self._queue.append(_QueuedNarration(text=normalized[: self._config.max_chars], repeat=repeat))
        self._pump()
        return True

    def is_speaking(self) -> bool:
        return self._current is not None

    def pending(self) -> list[str]:
        return [item.text for item in self._queue]

    def clear(self) -> None:
        """Drop queued narration; the line currently playing finishes normally."""
        self._queue.clear()

    def _pump(self) -> None:
        if self._pumping:
            return
        self._pumping = True
        try:
            while self._current is None and self._queue and self._sink is not None:
                item = self._queue.popleft()
                if item.repeat and self._queue:
                    self._logger.debug("narration_repeat_dropped", extra={"pending": len(self._queue)})
                    continue

                self._current = item
                self._generation += 1
                token = self._generation
                try:
                    self._sink.speak(item.text, lambda: self._finished(token))
                except CapabilityUnavailableError as exc:
                    self._disable(exc)
                except Exception as exc:  # noqa: BLE001 - any sink failure means speech is gone.
                    self._disable(CapabilityUnavailableError("speech", str(exc)))
        finally:
            self._pumping = False

    def _finished(self, token: int) -> None:
        if token != self._generation or self._current is None:
            return
        self._current = None
        self._pump()

    def _disable(self, error: CapabilityUnavailableError) -> None:
        self._logger.warning("speech_unavailable", extra={"reason": error.reason})
        self._sink = None
        self._current = None
        self._queue.clear()
        if self._on_unavailable is not None:
            self._on_unavailable(error)
