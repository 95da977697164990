"""Session wiring between inputs, the game engine, narration and the activity log."""

from __future__ import annotations

import logging

from echoverse.actions import Action, ActionType
from echoverse.config import Settings
from echoverse.config import settings as default_settings
from echoverse.engine import GameEngine
from echoverse.errors import CapabilityUnavailableError
from echoverse.keyboard import action_for_key
from echoverse.models import GameMode, GameSnapshot, GameStatus, Transition
from echoverse.telemetry import ActivityLog, Telemetry
from echoverse.voice.input import ListeningController
from echoverse.voice.intents import CommandInterpreter
from echoverse.voice.interfaces import RecognitionSource, SpeechSink
from echoverse.voice.output import NarrationCoordinator, VoiceOutputConfig

WELCOME_TEXT = (
    "Welcome to EchoVerse, an immersive audio adventure. "
    "Press S or say start game to begin your journey."
)


class GameSession:
    """Funnels voice and keyboard input into one engine and mirrors its narration.

    Recognized speech goes through the command interpreter; keyboard shortcuts
    map straight to actions. Every engine transition is spoken through the
    narration coordinator and recorded in the activity log.
    """

    def __init__(
        self,
        *,
        speech_sink: SpeechSink | None = None,
        recognition_source: RecognitionSource | None = None,
        mode: GameMode | None = None,
        config: Settings | None = None,
        interpreter: CommandInterpreter | None = None,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        cfg = config or default_settings
        self._logger = logger or logging.getLogger("echoverse.session")
        self.activity = ActivityLog(max_entries=cfg.activity_log_size)
        self.interpreter = interpreter or CommandInterpreter()
        self.narration = NarrationCoordinator(
            speech_sink,
            VoiceOutputConfig(enabled=cfg.voice_enabled, max_chars=cfg.narration_max_chars),
            on_unavailable=self._capability_unavailable,
        )
        self.engine = GameEngine(
            mode=mode or GameMode(cfg.default_mode),
            narrator=self.narration,
            starting_lives=cfg.starting_lives,
            score_per_objective=cfg.score_per_objective,
            sensing_range=cfg.sensing_range,
            telemetry=telemetry,
        )
        self.engine.subscribe(self._record)
        self.listening = ListeningController(
            recognition_source,
            on_text=self.handle_utterance,
            on_listening_changed=self.engine.set_listening,
            on_unavailable=self._capability_unavailable,
        )

    @property
    def snapshot(self) -> GameSnapshot:
        return self.engine.state

    def welcome(self) -> str:
        self.narration.speak(WELCOME_TEXT)
        self.activity.add(WELCOME_TEXT)
        return WELCOME_TEXT

    def handle_utterance(self, text: str) -> Transition | None:
        self.activity.add(f"Voice command: {text}")
        return self.handle_action(self.interpreter.interpret(text))

    def handle_key(self, key: str) -> Transition | None:
        action = action_for_key(key, paused=self.engine.status == GameStatus.PAUSED)
        if action is None:
            self._logger.debug("key_unbound", extra={"key": key})
            return None
        return self.handle_action(action)

    def handle_action(self, action: Action) -> Transition | None:
        if action.type == ActionType.TOGGLE_LISTENING:
            self.listening.toggle_listening()
            return None
        return self.engine.dispatch(action)

    def close(self) -> None:
        self.listening.stop_listening()
        self.narration.clear()

    def _record(self, transition: Transition) -> None:
        self.activity.add(transition.narration)

    def _capability_unavailable(self, error: CapabilityUnavailableError) -> None:
        self.engine.report_capability_unavailable(error.capability, error.reason)
