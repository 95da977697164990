"""Game state machine: validates actions against mode and status and drives the world model."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from echoverse.actions import Action, ActionType
from echoverse.engine import levels
from echoverse.engine.world import WorldModel
from echoverse.errors import EchoVerseError
from echoverse.models import Direction, GameMode, GameSnapshot, GameStatus, Position, Transition
from echoverse.telemetry import Telemetry

HELP_TEXT = (
    "Available commands: go left, go right, go forward, go back, look around, "
    "start game, pause game, resume game, help, and repeat."
)
UNRECOGNIZED_TEXT = "I didn't understand that. Say help to hear the list of commands."
BLOCKED_TEXT = "You can't go further that way."

TransitionListener = Callable[[Transition], None]


class Narrator(Protocol):
    def speak(self, text: str, *, repeat: bool = False) -> None: ...


def _plural(count: int, word: str, plural: str | None = None) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {plural or word + 's'}"


def _describe_offset(origin: Position, target: Position) -> str:
    dx = target.x - origin.x
    dz = target.z - origin.z
    parts = []
    if dz < 0:
        parts.append("ahead")
    elif dz > 0:
        parts.append("behind you")
    if dx < 0:
        parts.append("to your left")
    elif dx > 0:
        parts.append("to your right")
    return " and ".join(parts) or "right here"


class GameEngine:
    """Owns game state and the active world; every change is published as a ``Transition``.

    Invalid requests (starting twice, moving while paused, toggling mode
    mid-run) are logged and ignored, so late or duplicated UI events cannot
    corrupt state.
    """

    def __init__(
        self,
        *,
        mode: GameMode = GameMode.PRACTICE,
        narrator: Narrator | None = None,
        starting_lives: int = 3,
        score_per_objective: int = 1,
        sensing_range: int = 1,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._narrator = narrator
        self._starting_lives = starting_lives
        self._score_per_objective = score_per_objective
        self._sensing_range = sensing_range
        self._telemetry = telemetry
        self._logger = logger or logging.getLogger("echoverse.engine")
        self._listeners: list[TransitionListener] = []

        self._mode = mode
        self._status = GameStatus.IDLE
        self._score = 0
        self._lives = 0
        self._level = 0
        self._last_narration: str | None = None
        self._victory = False
        self._is_listening = False
        self._world: WorldModel | None = None

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def state(self) -> GameSnapshot:
        return self._snapshot()

    def attach_narrator(self, narrator: Narrator | None) -> None:
        self._narrator = narrator

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a transition listener and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: Action) -> Transition | None:
        """Route any action: lifecycle actions to their operation, the rest to ``process_command``."""
        if action.type == ActionType.START_GAME:
            return self.start_game()
        if action.type == ActionType.PAUSE:
            return self.pause_game()
        if action.type == ActionType.RESUME:
            return self.resume_game()
        if action.type == ActionType.TOGGLE_MODE:
            return self.toggle_mode()
        if action.type == ActionType.RESET_GAME:
            return self.reset_game()
        if action.type == ActionType.TOGGLE_LISTENING:
            return self._reject(action, "listening is controlled by the session")
        if action.type in (ActionType.HELP, ActionType.REPEAT_LAST_NARRATION, ActionType.UNRECOGNIZED):
            return self._respond(action)
        return self.process_command(action)

    def start_game(self, mode: GameMode | None = None) -> Transition | None:
        if self._status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return self._reject(Action(type=ActionType.START_GAME), f"cannot start while {self._status.value}")

        if mode is not None:
            self._mode = mode
        self._score = 0
        self._lives = self._starting_lives
        self._victory = False
        self._load_level(1)
        self._status = GameStatus.PLAYING
        return self._emit(
            f"Game started in {self._mode.value} mode. {self._level_intro()}",
            f"Started {self._mode.value} game at level 1",
        )

    def process_command(self, action: Action) -> Transition | None:
        if self._status != GameStatus.PLAYING or self._world is None:
            return self._reject(action, f"game is {self._status.value}")

        if action.is_lifecycle:
            return self._reject(action, "lifecycle actions go through dispatch")
        if action.type == ActionType.MOVE and action.direction is not None:
            return self._move(action.direction)
        if action.type == ActionType.INSPECT:
            return self._inspect()
        if action.type in (ActionType.HELP, ActionType.REPEAT_LAST_NARRATION, ActionType.UNRECOGNIZED):
            return self._respond(action)
        return self._reject(action, "not a level command")

    def reset_game(self) -> Transition:
        self._status = GameStatus.IDLE
        self._world = None
        self._score = 0
        self._lives = 0
        self._level = 0
        self._victory = False
        return self._emit("Game reset. Say start game to begin.", "Game reset to idle")

    def toggle_mode(self) -> Transition | None:
        if self._status != GameStatus.IDLE:
            return self._reject(Action(type=ActionType.TOGGLE_MODE), f"mode is fixed while {self._status.value}")

        self._mode = GameMode.ADVENTURE if self._mode == GameMode.PRACTICE else GameMode.PRACTICE
        return self._emit(f"Switched to {self._mode.value} mode.", f"Mode set to {self._mode.value}")

    def pause_game(self) -> Transition | None:
        if self._status != GameStatus.PLAYING:
            return self._reject(Action(type=ActionType.PAUSE), f"cannot pause while {self._status.value}")

        self._status = GameStatus.PAUSED
        return self._emit("Game paused. Say resume game to continue.", "Game paused")

    def resume_game(self) -> Transition | None:
        if self._status != GameStatus.PAUSED:
            return self._reject(Action(type=ActionType.RESUME), f"cannot resume while {self._status.value}")

        self._status = GameStatus.PLAYING
        return self._emit(f"Game resumed. You are in {self._world_name()}.", "Game resumed")

    def set_listening(self, listening: bool) -> Transition | None:
        if listening == self._is_listening:
            return None
        self._is_listening = listening
        narration = "Listening for commands." if listening else "Voice commands inactive."
        return self._emit(narration, f"Listening {'started' if listening else 'stopped'}", remember=False)

    def report_capability_unavailable(self, capability: str, reason: str) -> Transition:
        self._logger.warning("capability_unavailable", extra={"capability": capability, "reason": reason})
        if capability == "recognition":
            narration = "Voice commands are unavailable. Keyboard controls still work."
        else:
            narration = "Spoken narration is unavailable. Messages will appear in the activity log."
        return self._emit(narration, f"{capability} unavailable: {reason}", remember=False)

    def _move(self, direction: Direction) -> Transition:
        world = self._require_world()
        origin = world.player_position
        target = world.move(direction)
        if target is None:
            return self._emit(BLOCKED_TEXT, f"Blocked moving {direction.value} at ({origin.x}, {origin.z})")

        rules = levels.rules_for(self._mode)
        narration = [f"You move {direction.value}."]
        log = [f"Moved {direction.value} to ({target.x}, {target.z})"]

        for hazard in world.trigger_hazards():
            if rules.hazards_live:
                lost = min(hazard.severity, self._lives)
                self._lives -= lost
                narration.append(
                    f"Ouch! You ran into {hazard.description} and lost {_plural(lost, 'life', 'lives')}."
                    f" {_plural(self._lives, 'life', 'lives')} remaining."
                )
                log.append(f"hazard '{hazard.description}' cost {lost}")
            else:
                narration.append(f"Careful, {hazard.description} is here. In practice mode it costs no lives.")
                log.append(f"hazard '{hazard.description}' ignored in practice")

        objectives = world.objectives
        for index in world.satisfy_objectives(rules.objective_reach):
            self._score += self._score_per_objective
            narration.append(f"You found {objectives[index].description}! Your score is {self._score}.")
            log.append(f"objective {index} satisfied")

        if self._lives == 0:
            self._end_run(victory=False)
            narration.append(f"You have no lives left. Game over. Your final score is {self._score}.")
            log.append("game over")
        elif world.all_objectives_satisfied():
            if levels.has_level(self._mode, self._level + 1):
                finished = self._level
                self._load_level(self._level + 1)
                narration.append(f"Level {finished} complete! {self._level_intro()}")
                log.append(f"advanced to level {self._level}")
            else:
                self._end_run(victory=True)
                narration.append(f"You cleared every level. Victory! Your final score is {self._score}.")
                log.append("victory")

        return self._emit(" ".join(narration), "; ".join(log))

    def _inspect(self) -> Transition:
        world = self._require_world()
        position = world.player_position
        env = world.environment
        parts = [f"You are in {env.name}. {env.description}"]

        objectives, hazards = world.nearby(self._sensing_range)
        for objective in objectives:
            parts.append(f"You sense {objective.description} {_describe_offset(position, objective.position)}.")
        for hazard in hazards:
            parts.append(f"Watch out, {hazard.description} is {_describe_offset(position, hazard.position)}.")
        if not objectives and not hazards:
            parts.append("Nothing stands out nearby.")

        remaining = len(world.remaining_objectives())
        parts.append(f"{_plural(remaining, 'objective')} left on this level.")
        return self._emit(" ".join(parts), f"Inspected surroundings at ({position.x}, {position.z})")

    def _respond(self, action: Action) -> Transition:
        if action.type == ActionType.HELP:
            return self._emit(HELP_TEXT, "Help requested")
        if action.type == ActionType.REPEAT_LAST_NARRATION:
            text = self._last_narration or "There is nothing to repeat yet."
            return self._emit(text, "Repeated last narration", remember=False, repeat=True)

        self._logger.info("command_unrecognized", extra={"utterance": action.text})
        return self._emit(UNRECOGNIZED_TEXT, f"Unrecognized command: {action.text or ''}".rstrip())

    def _load_level(self, number: int) -> None:
        self._world = WorldModel.from_level(levels.get_level(self._mode, number))
        self._level = number

    def _level_intro(self) -> str:
        world = self._require_world()
        env = world.environment
        count = len(world.objectives)
        return f"Level {self._level}: {env.name}. {env.description} Find {_plural(count, 'objective')}."

    def _require_world(self) -> WorldModel:
        if self._world is None:
            raise EchoVerseError(f"no level is loaded while {self._status.value}")
        return self._world

    def _world_name(self) -> str:
        return self._world.environment.name if self._world else "nowhere"

    def _end_run(self, *, victory: bool) -> None:
        self._status = GameStatus.GAME_OVER
        self._victory = victory
        self._world = None

    def _reject(self, action: Action, reason: str) -> None:
        self._logger.info("command_rejected", extra={"action": action.type.value, "reason": reason})
        return None

    def _snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            status=self._status,
            mode=self._mode,
            score=self._score,
            lives=self._lives,
            level=self._level,
            last_narration=self._last_narration,
            victory=self._victory,
            is_listening=self._is_listening,
            world=self._world.snapshot() if self._world else None,
        )

    def _emit(self, narration: str, log: str, *, remember: bool = True, repeat: bool = False) -> Transition:
        if remember:
            self._last_narration = narration
        transition = Transition(snapshot=self._snapshot(), narration=narration, log=log)

        self._logger.info(
            "transition",
            extra={
                "status": self._status.value,
                "mode": self._mode.value,
                "score": self._score,
                "lives": self._lives,
                "level": self._level,
                "log_line": log,
            },
        )
        if self._telemetry is not None:
            self._telemetry.emit("transition", {"status": self._status.value, "log_line": log})

        # Listeners first: a failing narrator reports through a nested emit.
        for listener in list(self._listeners):
            try:
                listener(transition)
            except Exception:  # noqa: BLE001 - a broken subscriber must not stop the engine.
                self._logger.exception("transition_listener_failed")
        if self._narrator is not None:
            self._narrator.speak(narration, repeat=repeat)
        return transition
