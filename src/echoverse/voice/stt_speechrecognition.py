"""Speech-to-text backend powered by ``speech_recognition``."""

from __future__ import annotations

from typing import Any, Callable

from echoverse.errors import CapabilityUnavailableError

from .interfaces import RecognitionSource


class SpeechRecognitionSource(RecognitionSource):
    """Background microphone listening with Google Web Speech transcription.

    ``on_text`` and ``on_error`` are called from the speech_recognition
    listener thread; callers that need single-threaded handling must hand the
    values over to their own loop.
    """

    def __init__(
        self,
        *,
        language: str = "en-US",
        phrase_time_limit: float = 5.0,
        sample_rate: int = 16_000,
        chunk_size: int = 1024,
        adjust_noise_seconds: float = 0.2,
    ) -> None:
        try:
            import speech_recognition as sr
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Speech recognition backend unavailable. Install extras with: pip install 'echoverse[voice]'"
            ) from exc
        self._sr = sr
        self._recognizer = sr.Recognizer()
        try:
            self._microphone = sr.Microphone(sample_rate=sample_rate, chunk_size=chunk_size)
        except (AttributeError, OSError) as exc:
            raise RuntimeError(
                "Microphone backend unavailable. Install extras with: pip install 'echoverse[voice]'"
            ) from exc
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)
        self._stopper: Callable[..., None] | None = None

    def start(self, on_text: Callable[[str], None], on_error: Callable[[Exception], None]) -> None:
        if self._stopper is not None:
            return

        def _callback(recognizer: Any, audio: Any) -> None:
            try:
                transcript = recognizer.recognize_google(audio, language=self._language)
            except self._sr.UnknownValueError:
                return
            except self._sr.RequestError as exc:
                on_error(
                    CapabilityUnavailableError(
                        "recognition",
                        f"speech recognition service request failed ({exc}); check internet access",
                    )
                )
                return
            on_text(transcript)

        try:
            if self._adjust_noise_seconds > 0:
                with self._microphone as source:
                    self._recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
            self._stopper = self._recognizer.listen_in_background(
                self._microphone,
                _callback,
                phrase_time_limit=self._phrase_time_limit,
            )
        except OSError as exc:
            raise CapabilityUnavailableError("recognition", f"microphone could not be opened: {exc}") from exc

    def stop(self) -> None:
        if self._stopper is None:
            return
        stopper, self._stopper = self._stopper, None
        stopper(wait_for_stop=False)
