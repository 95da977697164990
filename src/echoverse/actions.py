"""Closed set of game actions produced by the interpreter and keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from echoverse.models import Direction


class ActionType(str, Enum):
    MOVE = "move"
    START_GAME = "start_game"
    INSPECT = "inspect"
    HELP = "help"
    REPEAT_LAST_NARRATION = "repeat_last_narration"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_MODE = "toggle_mode"
    RESET_GAME = "reset_game"
    TOGGLE_LISTENING = "toggle_listening"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True, slots=True)
class Action:
    type: ActionType
    direction: Direction | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        if (self.type == ActionType.MOVE) != (self.direction is not None):
            raise ValueError("Only move actions carry a direction, and every move needs one")

    @classmethod
    def move(cls, direction: Direction) -> Action:
        return cls(type=ActionType.MOVE, direction=direction)

    @classmethod
    def unrecognized(cls, text: str = "") -> Action:
        return cls(type=ActionType.UNRECOGNIZED, text=text)

    @property
    def is_lifecycle(self) -> bool:
        """Whether this action changes run lifecycle rather than acting inside a level."""
        return self.type in _LIFECYCLE_TYPES


_LIFECYCLE_TYPES = frozenset(
    {
        ActionType.START_GAME,
        ActionType.PAUSE,
        ActionType.RESUME,
        ActionType.TOGGLE_MODE,
        ActionType.RESET_GAME,
    }
)
