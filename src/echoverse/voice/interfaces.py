"""Contracts for the external speech synthesis and recognition capabilities."""

from typing import Callable, Protocol


class SpeechSink(Protocol):
    """Plays narration text as audio."""

    def speak(self, text: str, on_done: Callable[[], None]) -> None:
        """Start playing ``text`` and call ``on_done`` once playback completes.

        Implementations may call ``on_done`` before returning. Failures raise
        ``CapabilityUnavailableError``.
        """


class RecognitionSource(Protocol):
    """Delivers recognized utterances from a live recognition session."""

    def start(self, on_text: Callable[[str], None], on_error: Callable[[Exception], None]) -> None:
        """Begin a session; call ``on_text`` per utterance and ``on_error`` on failure."""

    def stop(self) -> None:
        """End the current session."""
