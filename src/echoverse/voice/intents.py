"""Spoken-command parsing into game actions."""

from __future__ import annotations

import re

from echoverse.actions import Action, ActionType
from echoverse.models import Direction

_PUNCTUATION = re.compile(r"[^\w\s']")

PHRASES: dict[str, Action] = {
    "go left": Action.move(Direction.LEFT),
    "go right": Action.move(Direction.RIGHT),
    "go forward": Action.move(Direction.FORWARD),
    "go back": Action.move(Direction.BACK),
    "move left": Action.move(Direction.LEFT),
    "move right": Action.move(Direction.RIGHT),
    "move forward": Action.move(Direction.FORWARD),
    "move back": Action.move(Direction.BACK),
    "go forwards": Action.move(Direction.FORWARD),
    "go backward": Action.move(Direction.BACK),
    "go backwards": Action.move(Direction.BACK),
    "start game": Action(type=ActionType.START_GAME),
    "look around": Action(type=ActionType.INSPECT),
    "help": Action(type=ActionType.HELP),
    "repeat": Action(type=ActionType.REPEAT_LAST_NARRATION),
    "pause game": Action(type=ActionType.PAUSE),
    "resume game": Action(type=ActionType.RESUME),
}


def normalize(utterance: str) -> str:
    """Case-fold, drop punctuation and collapse whitespace."""
    return " ".join(_PUNCTUATION.sub(" ", utterance.casefold()).split())


class CommandInterpreter:
    """Maps free-form utterances onto the fixed phrase grammar.

    A phrase matches when it appears in the utterance on word boundaries, so
    "please go left now" matches "go left" but "helpful" does not match
    "help". An utterance that is exactly a phrase maps straight to it;
    otherwise the longest matching phrase wins, and if the longest matches
    disagree on the action the utterance is unrecognized.
    """

    def __init__(self, phrases: dict[str, Action] | None = None) -> None:
        source = phrases if phrases is not None else PHRASES
        self._patterns = [
            (phrase, re.compile(rf"(?<!\S){re.escape(phrase)}(?!\S)"), action)
            for phrase, action in source.items()
        ]

    def interpret(self, text: str) -> Action:
        normalized = normalize(text)
        if not normalized:
            return Action.unrecognized(text)

        for phrase, _, action in self._patterns:
            if phrase == normalized:
                return action

        matches = [(phrase, action) for phrase, pattern, action in self._patterns if pattern.search(normalized)]
        if not matches:
            return Action.unrecognized(text)

        longest = max(len(phrase) for phrase, _ in matches)
        candidates = {action for phrase, action in matches if len(phrase) == longest}
        if len(candidates) != 1:
            return Action.unrecognized(text)
        return candidates.pop()
