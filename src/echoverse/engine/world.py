"""Mutable per-level world: player position, objectives and hazards."""

from __future__ import annotations

from dataclasses import replace

from echoverse.engine.levels import LevelDefinition
from echoverse.models import Direction, Environment, Hazard, Objective, Position, WorldSnapshot


class WorldModel:
    """Grid world for a single level. Owned and mutated only by the state machine."""

    def __init__(
        self,
        environment: Environment,
        *,
        start: Position | None = None,
        objectives: tuple[Objective, ...] = (),
        hazards: tuple[Hazard, ...] = (),
    ) -> None:
        self._environment = environment
        self._position = start or Position(0, 0)
        if not environment.grid_size.contains(self._position):
            raise ValueError(f"Start position {self._position} is outside {environment.name}")
        self._objectives = list(objectives)
        self._hazards = list(hazards)

    @classmethod
    def from_level(cls, level: LevelDefinition) -> WorldModel:
        return cls(level.environment, start=level.start, objectives=level.objectives, hazards=level.hazards)

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def player_position(self) -> Position:
        return self._position

    @property
    def objectives(self) -> tuple[Objective, ...]:
        return tuple(self._objectives)

    @property
    def hazards(self) -> tuple[Hazard, ...]:
        return tuple(self._hazards)

    def candidate(self, direction: Direction) -> Position:
        return self._position.step(direction)

    def in_bounds(self, position: Position) -> bool:
        return self._environment.grid_size.contains(position)

    def move(self, direction: Direction) -> Position | None:
        """Commit a one-cell move, or return ``None`` when it would leave the grid."""
        target = self.candidate(direction)
        if not self.in_bounds(target):
            return None
        self._position = target
        return target

    def trigger_hazards(self) -> list[Hazard]:
        """Return hazards on the player's cell, consuming the one-shot ones."""
        triggered = [hazard for hazard in self._hazards if hazard.position == self._position]
        self._hazards = [hazard for hazard in self._hazards if hazard not in triggered or hazard.persistent]
        return triggered

    def satisfy_objectives(self, reach: int = 0) -> list[int]:
        """Mark unsatisfied objectives within ``reach`` as satisfied; return their indices."""
        newly: list[int] = []
        for index, objective in enumerate(self._objectives):
            if objective.satisfied or objective.position.distance_to(self._position) > reach:
                continue
            self._objectives[index] = replace(objective, satisfied=True)
            newly.append(index)
        return newly

    def all_objectives_satisfied(self) -> bool:
        return all(objective.satisfied for objective in self._objectives)

    def remaining_objectives(self) -> list[Objective]:
        return [objective for objective in self._objectives if not objective.satisfied]

    def nearby(self, sensing_range: int) -> tuple[list[Objective], list[Hazard]]:
        """Unsatisfied objectives and hazards within ``sensing_range`` of the player."""
        objectives = [
            objective
            for objective in self.remaining_objectives()
            if objective.position.distance_to(self._position) <= sensing_range
        ]
        hazards = [hazard for hazard in self._hazards if hazard.position.distance_to(self._position) <= sensing_range]
        return objectives, hazards

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            environment=self._environment,
            player_position=self._position,
            objectives=tuple(self._objectives),
            hazards=tuple(self._hazards),
        )
