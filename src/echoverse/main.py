"""CLI startup entrypoint for EchoVerse."""

from __future__ import annotations

import logging
import queue
from functools import partial
from typing import Callable

import typer
from rich import print
from rich.logging import RichHandler

from echoverse.config import settings
from echoverse.engine import LEVELS, rules_for
from echoverse.keyboard import action_for_key
from echoverse.models import GameMode, GameStatus, Transition
from echoverse.session import GameSession
from echoverse.telemetry import LoggingTelemetry
from echoverse.voice.interfaces import RecognitionSource, SpeechSink

app = typer.Typer(help="EchoVerse voice-controlled audio adventure")

_QUIT_WORDS = {"quit", "exit"}


class _MainLoopRecognitionSource:
    """Hands recognition callbacks from the listener thread to the main loop's inbox."""

    def __init__(self, inner: RecognitionSource, inbox: queue.Queue[Callable[[], None]]) -> None:
        self._inner = inner
        self._inbox = inbox

    def start(self, on_text: Callable[[str], None], on_error: Callable[[Exception], None]) -> None:
        self._inner.start(
            lambda text: self._inbox.put(partial(on_text, text)),
            lambda exc: self._inbox.put(partial(on_error, exc)),
        )

    def stop(self) -> None:
        self._inner.stop()


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _parse_mode(mode: str | None) -> GameMode | None:
    if mode is None:
        return None
    try:
        return GameMode(mode.lower())
    except ValueError:
        raise typer.BadParameter("Mode must be 'practice' or 'adventure'") from None


def _build_speech_sink() -> SpeechSink | None:
    try:
        from echoverse.voice.tts_pyttsx3 import Pyttsx3SpeechSink

        return Pyttsx3SpeechSink(rate=settings.tts_rate, volume=settings.tts_volume)
    except (RuntimeError, ImportError, OSError) as exc:
        print({"warning": str(exc), "fallback": "narration is printed only"})
        return None


def _build_recognition_source() -> RecognitionSource | None:
    try:
        from echoverse.voice.stt_speechrecognition import SpeechRecognitionSource

        return SpeechRecognitionSource(
            language=settings.recognition_language,
            phrase_time_limit=settings.phrase_time_limit,
        )
    except (RuntimeError, ImportError) as exc:
        print({"warning": str(exc), "fallback": "keyboard-only play"})
        return None


def _print_transition(transition: Transition) -> None:
    snapshot = transition.snapshot
    print(f"[bold cyan]{transition.narration}[/bold cyan]")
    if snapshot.status != GameStatus.IDLE:
        print(
            f"[dim]status={snapshot.status.value} score={snapshot.score} "
            f"lives={snapshot.lives} level={snapshot.level}[/dim]"
        )


def _text_loop(session: GameSession) -> None:
    print({"controls": "Type commands like 'go left', or shortcuts s/m/r/v/p/h/l and arrow words; 'quit' exits."})
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.lower() in _QUIT_WORDS:
            break
        if " " not in line and action_for_key(line) is not None:
            session.handle_key(line)
        else:
            session.handle_utterance(line)


@app.command()
def info() -> None:
    """Show runtime configuration."""
    print(settings.model_dump())


@app.command()
def levels(mode: str = typer.Option(None, help="practice or adventure; default lists both")) -> None:
    """List the fixed level catalogue."""
    selected = _parse_mode(mode)
    for game_mode, catalogue in LEVELS.items():
        if selected is not None and game_mode != selected:
            continue
        rules = rules_for(game_mode)
        for level in catalogue:
            env = level.environment
            print(
                {
                    "mode": game_mode.value,
                    "level": level.number,
                    "name": env.name,
                    "grid": f"{env.grid_size.x}x{env.grid_size.z}",
                    "objectives": len(level.objectives),
                    "hazards": len(level.hazards),
                    "hazards_live": rules.hazards_live,
                }
            )


@app.command()
def play(
    mode: str = typer.Option(None, help="practice or adventure"),
    speak: bool = typer.Option(False, "--speak/--no-speak", help="Speak narration with pyttsx3"),
) -> None:
    """Play with typed commands and keyboard shortcuts."""
    _configure_logging()
    session = GameSession(
        speech_sink=_build_speech_sink() if speak else None,
        mode=_parse_mode(mode),
        telemetry=LoggingTelemetry(),
    )
    session.engine.subscribe(_print_transition)
    print(f"[bold cyan]{session.welcome()}[/bold cyan]")
    try:
        _text_loop(session)
    finally:
        session.close()
    print({"final_state": session.snapshot.status.value, "score": session.snapshot.score})


@app.command()
def voice(
    mode: str = typer.Option(None, help="practice or adventure"),
    speak: bool = typer.Option(True, "--speak/--no-speak", help="Speak narration with pyttsx3"),
) -> None:
    """Play by voice; falls back to typed commands when recognition is unavailable."""
    _configure_logging()
    inbox: queue.Queue[Callable[[], None]] = queue.Queue()
    source = _build_recognition_source()
    session = GameSession(
        speech_sink=_build_speech_sink() if speak else None,
        recognition_source=_MainLoopRecognitionSource(source, inbox) if source else None,
        mode=_parse_mode(mode),
        telemetry=LoggingTelemetry(),
    )
    session.engine.subscribe(_print_transition)
    print(f"[bold cyan]{session.welcome()}[/bold cyan]")

    try:
        if session.listening.start_listening():
            print({"voice": "listening", "hint": "Say 'start game' to begin; press Ctrl+C to quit."})
            while session.listening.is_listening:
                try:
                    callback = inbox.get(timeout=0.2)
                except queue.Empty:
                    continue
                callback()
        print({"voice": "inactive", "fallback": "keyboard-only play"})
        _text_loop(session)
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
    print({"final_state": session.snapshot.status.value, "score": session.snapshot.score})


if __name__ == "__main__":
    app()
