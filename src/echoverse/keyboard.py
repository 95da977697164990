"""Keyboard shortcuts that map straight to actions without going through the interpreter."""

from __future__ import annotations

from echoverse.actions import Action, ActionType
from echoverse.models import Direction

KEY_BINDINGS: dict[str, Action] = {
    "s": Action(type=ActionType.START_GAME),
    "m": Action(type=ActionType.TOGGLE_MODE),
    "r": Action(type=ActionType.RESET_GAME),
    "v": Action(type=ActionType.TOGGLE_LISTENING),
    "h": Action(type=ActionType.HELP),
    "l": Action(type=ActionType.INSPECT),
    "arrowleft": Action.move(Direction.LEFT),
    "arrowright": Action.move(Direction.RIGHT),
    "arrowup": Action.move(Direction.FORWARD),
    "arrowdown": Action.move(Direction.BACK),
}

_ALIASES = {
    "left": "arrowleft",
    "right": "arrowright",
    "up": "arrowup",
    "down": "arrowdown",
}


def action_for_key(key: str, *, paused: bool = False) -> Action | None:
    """Return the bound action for a key name, or ``None`` when the key is unbound.

    ``P`` toggles pause, so it resolves against the current pause state.
    """
    name = key.strip().lower()
    name = _ALIASES.get(name, name)
    if name == "p":
        return Action(type=ActionType.RESUME if paused else ActionType.PAUSE)
    return KEY_BINDINGS.get(name)
