"""Game engine: level catalogue, world model and state machine."""

from .levels import LEVELS, LevelDefinition, ModeRules, get_level, level_count, rules_for
from .state_machine import GameEngine, Narrator, TransitionListener
from .world import WorldModel

__all__ = [
    "GameEngine",
    "LEVELS",
    "LevelDefinition",
    "ModeRules",
    "Narrator",
    "TransitionListener",
    "WorldModel",
    "get_level",
    "level_count",
    "rules_for",
]
