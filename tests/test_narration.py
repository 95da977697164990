from __future__ import annotations

from typing import Callable

from echoverse.errors import CapabilityUnavailableError
from echoverse.voice.output import NarrationCoordinator, VoiceOutputConfig


class ManualSink:
    """Holds playback open until the test finishes it."""

    def __init__(self) -> None:
        self.started: list[str] = []
        self._callbacks: list[Callable[[], None]] = []

    def speak(self, text: str, on_done: Callable[[], None]) -> None:
        self.started.append(text)
        self._callbacks.append(on_done)

    def finish(self) -> None:
        self._callbacks.pop(0)()


class ImmediateSink:
    def __init__(self) -> None:
        self.spoken: list[str] = []

    def speak(self, text: str, on_done: Callable[[], None]) -> None:
        self.spoken.append(text)
        on_done()


class FailingSink:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def speak(self, text: str, on_done: Callable[[], None]) -> None:
        raise self.error


def test_narration_plays_one_item_at_a_time() -> None:
    sink = ManualSink()
    coordinator = NarrationCoordinator(sink)

    coordinator.speak("first")
    coordinator.speak("second")

    assert sink.started == ["first"]
    assert coordinator.is_speaking() is True
    assert coordinator.pending() == ["second"]

    sink.finish()
    assert sink.started == ["first", "second"]
    assert coordinator.pending() == []

    sink.finish()
    assert coordinator.is_speaking() is False


def test_synchronous_sink_drains_queue_in_order() -> None:
    sink = ImmediateSink()
    coordinator = NarrationCoordinator(sink)

    coordinator.speak("one")
    coordinator.speak("two")

    assert sink.spoken == ["one", "two"]
    assert coordinator.is_speaking() is False


def test_repeat_dropped_when_newer_narration_is_waiting() -> None:
    sink = ManualSink()
    coordinator = NarrationCoordinator(sink)
    coordinator.speak("first")
    coordinator.speak("second")

    accepted = coordinator.speak("first", repeat=True)

    assert accepted is False
    assert coordinator.pending() == ["second"]


def test_queued_repeat_skipped_when_newer_narration_follows() -> None:
    sink = ManualSink()
    coordinator = NarrationCoordinator(sink)
    coordinator.speak("first")

    assert coordinator.speak("first", repeat=True) is True
    coordinator.speak("newer")
    sink.finish()

    assert sink.started == ["first", "newer"]


def test_repeat_plays_when_nothing_newer_is_pending() -> None:
    sink = ManualSink()
    coordinator = NarrationCoordinator(sink)
    coordinator.speak("first")
    coordinator.speak("first", repeat=True)

    sink.finish()

    assert sink.started == ["first", "first"]


def test_text_is_normalized_and_truncated() -> None:
    sink = ImmediateSink()
    coordinator = NarrationCoordinator(sink, VoiceOutputConfig(max_chars=10))

    coordinator.speak("  You   move\nleft and onward  ")

    assert sink.spoken == ["You move l"]
    assert coordinator.speak("   ") is False


def test_disabled_output_speaks_nothing() -> None:
    sink = ImmediateSink()
    coordinator = NarrationCoordinator(sink, VoiceOutputConfig(enabled=False))

    assert coordinator.speak("hello") is False
    assert sink.spoken == []


def test_sink_failure_reports_unavailable_and_goes_silent() -> None:
    reported: list[CapabilityUnavailableError] = []
    coordinator = NarrationCoordinator(
        FailingSink(CapabilityUnavailableError("speech", "no audio device")),
        on_unavailable=reported.append,
    )

    coordinator.speak("hello")

    assert [error.capability for error in reported] == ["speech"]
    assert coordinator.available is False
    assert coordinator.is_speaking() is False
    assert coordinator.speak("again") is False
    assert len(reported) == 1


def test_runtime_errors_from_sink_are_wrapped() -> None:
    reported: list[CapabilityUnavailableError] = []
    coordinator = NarrationCoordinator(FailingSink(RuntimeError("run loop already started")), on_unavailable=reported.append)

    coordinator.speak("hello")

    assert reported[0].reason == "run loop already started"


def test_clear_drops_pending_but_not_current() -> None:
    sink = ManualSink()
    coordinator = NarrationCoordinator(sink)
    coordinator.speak("first")
    coordinator.speak("second")

    coordinator.clear()
    sink.finish()

    assert sink.started == ["first"]
    assert coordinator.is_speaking() is False


def test_no_sink_means_silent_mode() -> None:
    coordinator = NarrationCoordinator(None)

    assert coordinator.available is False
    assert coordinator.speak("hello") is False


def test_os_errors_from_sink_also_go_silent() -> None:
    reported: list[CapabilityUnavailableError] = []
    coordinator = NarrationCoordinator(FailingSink(OSError("audio device unplugged")), on_unavailable=reported.append)

    assert coordinator.speak("hello") is True

    assert [(error.capability, error.reason) for error in reported] == [("speech", "audio device unplugged")]
    assert coordinator.available is False
    assert coordinator.speak("again") is False
