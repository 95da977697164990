"""Text-to-speech backend powered by ``pyttsx3``."""

from __future__ import annotations

from typing import Callable

from echoverse.errors import CapabilityUnavailableError

from .interfaces import SpeechSink


class Pyttsx3SpeechSink(SpeechSink):
    """Speaker playback using a local pyttsx3 engine instance.

    Playback blocks until the line is spoken, then signals completion.
    """

    def __init__(self, *, voice_id: str | None = None, rate: int | None = None, volume: float | None = None) -> None:
        try:
            import pyttsx3
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Speech output backend unavailable. Install extras with: pip install 'echoverse[voice]'"
            ) from exc

        self._engine = pyttsx3.init()
        if voice_id:
            self._engine.setProperty("voice", voice_id)
        if rate is not None:
            self._engine.setProperty("rate", rate)
        if volume is not None:
            clamped = max(0.0, min(1.0, volume))
            self._engine.setProperty("volume", clamped)

    def speak(self, text: str, on_done: Callable[[], None]) -> None:
        text = text.strip()
        if text:
            try:
                self._engine.say(text)
                self._engine.runAndWait()
            except RuntimeError as exc:
                raise CapabilityUnavailableError("speech", str(exc)) from exc
        on_done()
