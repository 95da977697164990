"""Fixed level catalogue and per-mode rules."""

from __future__ import annotations

from dataclasses import dataclass

from echoverse.errors import UnknownLevelError
from echoverse.models import Environment, GameMode, GridSize, Hazard, Objective, Position


@dataclass(frozen=True, slots=True)
class ModeRules:
    """How forgiving a mode is.

    ``objective_reach`` is the Manhattan distance at which an objective counts
    as reached; ``hazards_live`` decides whether hazards cost lives or only
    produce a warning.
    """

    objective_reach: int
    hazards_live: bool


@dataclass(frozen=True, slots=True)
class LevelDefinition:
    number: int
    environment: Environment
    start: Position
    objectives: tuple[Objective, ...]
    hazards: tuple[Hazard, ...] = ()


MODE_RULES: dict[GameMode, ModeRules] = {
    GameMode.PRACTICE: ModeRules(objective_reach=1, hazards_live=False),
    GameMode.ADVENTURE: ModeRules(objective_reach=0, hazards_live=True),
}


def _level(
    number: int,
    name: str,
    size: tuple[int, int],
    description: str,
    objectives: list[tuple[int, int, str]],
    hazards: list[tuple[int, int, str, int, bool]] | None = None,
) -> LevelDefinition:
    return LevelDefinition(
        number=number,
        environment=Environment(name=name, grid_size=GridSize(*size), description=description),
        start=Position(0, 0),
        objectives=tuple(Objective(Position(x, z), text) for x, z, text in objectives),
        hazards=tuple(
            Hazard(Position(x, z), text, severity=severity, persistent=persistent)
            for x, z, text, severity, persistent in hazards or []
        ),
    )


LEVELS: dict[GameMode, tuple[LevelDefinition, ...]] = {
    GameMode.PRACTICE: (
        _level(
            1,
            "Training Grounds",
            (6, 6),
            "A quiet courtyard with soft grass underfoot and a fountain trickling nearby.",
            objectives=[(0, -1, "a humming beacon"), (-2, 2, "a wooden signpost")],
            hazards=[(2, 0, "a shallow puddle", 1, True)],
        ),
        _level(
            2,
            "Echo Hall",
            (8, 8),
            "A long stone hall where every footstep comes back to you twice.",
            objectives=[(2, -2, "a ringing bell"), (-3, 2, "a wind chime")],
            hazards=[(1, 0, "a loose floor tile", 1, False)],
        ),
    ),
    GameMode.ADVENTURE: (
        _level(
            1,
            "Whispering Forest",
            (10, 10),
            "Tall trees creak in the wind and birdsong drifts from the canopy.",
            objectives=[(0, -2, "an ancient chime"), (3, 1, "a carved totem")],
            hazards=[(1, 0, "a thorny bramble", 1, True), (0, 2, "a hidden pit", 2, False)],
        ),
        _level(
            2,
            "Crystal Caverns",
            (8, 8),
            "Water drips onto crystal formations, each drop a different note.",
            objectives=[(-2, -3, "a glowing crystal"), (3, 3, "an underground spring"), (0, 4, "the cavern exit")],
            hazards=[(-1, -1, "a slippery ledge", 1, False), (2, 2, "a swarm of bats", 1, True)],
        ),
        _level(
            3,
            "Sky Bridge",
            (6, 6),
            "A narrow rope bridge sways high above a roaring river.",
            objectives=[(0, -3, "the far tower door")],
            hazards=[(-1, -1, "a broken plank", 2, False), (1, -2, "a gust of wind", 1, True)],
        ),
    ),
}


def rules_for(mode: GameMode) -> ModeRules:
    return MODE_RULES[mode]


def level_count(mode: GameMode) -> int:
    return len(LEVELS[mode])


def get_level(mode: GameMode, number: int) -> LevelDefinition:
    levels = LEVELS[mode]
    if not 1 <= number <= len(levels):
        raise UnknownLevelError(f"{mode.value} mode has no level {number} (levels 1-{len(levels)})")
    return levels[number - 1]


def has_level(mode: GameMode, number: int) -> bool:
    return 1 <= number <= level_count(mode)
