from __future__ import annotations

from typing import Callable

import pytest

from echoverse.actions import Action
from echoverse.engine import GameEngine
from echoverse.models import Direction, Transition

MOVES = {
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
    "F": Direction.FORWARD,
    "B": Direction.BACK,
}


class RecordingNarrator:
    def __init__(self) -> None:
        self.lines: list[tuple[str, bool]] = []

    def speak(self, text: str, *, repeat: bool = False) -> None:
        self.lines.append((text, repeat))


@pytest.fixture
def narrator() -> RecordingNarrator:
    return RecordingNarrator()


@pytest.fixture
def engine(narrator: RecordingNarrator) -> GameEngine:
    return GameEngine(narrator=narrator)


@pytest.fixture
def walk() -> Callable[[GameEngine, str], list[Transition | None]]:
    def _walk(game: GameEngine, path: str) -> list[Transition | None]:
        return [game.process_command(Action.move(MOVES[step])) for step in path if step != " "]

    return _walk
