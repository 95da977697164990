"""Listening session control over an external recognition capability."""

from __future__ import annotations

import logging
from typing import Callable

from echoverse.errors import CapabilityUnavailableError

from .interfaces import RecognitionSource


class ListeningController:
    """Starts and stops recognition sessions and forwards recognized text.

    The controller never touches the microphone itself; it only drives the
    injected ``RecognitionSource``. ``stop_listening`` is safe to call at any
    time. Any recognition failure ends the session and is reported through
    ``on_unavailable`` so play can continue from the keyboard.
    """

    def __init__(
        self,
        source: RecognitionSource | None,
        *,
        on_text: Callable[[str], None],
        on_listening_changed: Callable[[bool], None] | None = None,
        on_unavailable: Callable[[CapabilityUnavailableError], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._source = source
        self._on_text = on_text
        self._on_listening_changed = on_listening_changed
        self._on_unavailable = on_unavailable
        self._logger = logger or logging.getLogger("echoverse.listening")
        self._listening = False

    @property
    def is_listening(self) -> bool:
        return self._listening

    def start_listening(self) -> bool:
        """Start a session; return whether the controller is now listening."""
        if self._listening:
            return True
        if self._source is None:
            self._report(CapabilityUnavailableError("recognition", "no recognition backend is configured"))
            return False

        try:
            self._source.start(self._handle_text, self._handle_error)
        except CapabilityUnavailableError as exc:
            self._report(exc)
            return False
        except (RuntimeError, OSError) as exc:
            self._report(CapabilityUnavailableError("recognition", str(exc)))
            return False

        self._set_listening(True)
        return True

    def stop_listening(self) -> None:
        if not self._listening:
            return
        try:
            if self._source is not None:
                self._source.stop()
        except (RuntimeError, OSError):
            self._logger.warning("recognition_stop_failed", exc_info=True)
        self._set_listening(False)

    def toggle_listening(self) -> bool:
        if self._listening:
            self.stop_listening()
            return False
        return self.start_listening()

    def _handle_text(self, text: str) -> None:
        if not self._listening:
            self._logger.debug("utterance_after_stop_ignored")
            return
        transcript = text.strip()
        if not transcript:
            return
        self._logger.info("utterance_recognized", extra={"transcript": transcript})
        self._on_text(transcript)

    def _handle_error(self, error: Exception) -> None:
        if not isinstance(error, CapabilityUnavailableError):
            error = CapabilityUnavailableError("recognition", str(error))
        self._report(error)
        self.stop_listening()

    def _set_listening(self, listening: bool) -> None:
        self._listening = listening
        self._logger.info("listening_changed", extra={"listening": listening})
        if self._on_listening_changed is not None:
            self._on_listening_changed(listening)

    def _report(self, error: CapabilityUnavailableError) -> None:
        self._logger.warning("recognition_unavailable", extra={"reason": error.reason})
        if self._on_unavailable is not None:
            self._on_unavailable(error)
