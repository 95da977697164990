from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class GameMode(str, Enum):
    PRACTICE = "practice"
    ADVENTURE = "adventure"


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    FORWARD = "forward"
    BACK = "back"


@dataclass(frozen=True, slots=True)
class Position:
    x: int
    z: int

    def step(self, direction: Direction) -> Position:
        dx, dz = _DIRECTION_DELTAS[direction]
        return Position(self.x + dx, self.z + dz)

    def distance_to(self, other: Position) -> int:
        """Manhattan distance; moves are axis-aligned so this is the step count."""
        return abs(self.x - other.x) + abs(self.z - other.z)


_DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.FORWARD: (0, -1),
    Direction.BACK: (0, 1),
}


@dataclass(frozen=True, slots=True)
class GridSize:
    x: int
    z: int

    def __post_init__(self) -> None:
        if self.x <= 0 or self.z <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.x}x{self.z}")

    def contains(self, position: Position) -> bool:
        return abs(position.x) <= self.x // 2 and abs(position.z) <= self.z // 2


@dataclass(frozen=True, slots=True)
class Environment:
    """Immutable level descriptor."""

    name: str
    grid_size: GridSize
    description: str


@dataclass(frozen=True, slots=True)
class Objective:
    position: Position
    description: str
    satisfied: bool = False


@dataclass(frozen=True, slots=True)
class Hazard:
    position: Position
    description: str
    severity: int = 1
    persistent: bool = False


@dataclass(frozen=True, slots=True)
class WorldSnapshot:
    environment: Environment
    player_position: Position
    objectives: tuple[Objective, ...]
    hazards: tuple[Hazard, ...]


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only view of engine state handed to presentation and logging consumers."""

    status: GameStatus
    mode: GameMode
    score: int
    lives: int
    level: int
    last_narration: str | None = None
    victory: bool = False
    is_listening: bool = False
    world: WorldSnapshot | None = None


@dataclass(frozen=True, slots=True)
class Transition:
    """The snapshot, narration and log line emitted for one engine state change."""

    snapshot: GameSnapshot
    narration: str
    log: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
