from echoverse.actions import Action, ActionType
from echoverse.models import Direction
from echoverse.voice.intents import CommandInterpreter, normalize


def test_interpreter_maps_phrase_families() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.interpret("go left") == Action.move(Direction.LEFT)
    assert interpreter.interpret("go right") == Action.move(Direction.RIGHT)
    assert interpreter.interpret("go forward") == Action.move(Direction.FORWARD)
    assert interpreter.interpret("go back") == Action.move(Direction.BACK)
    assert interpreter.interpret("start game").type == ActionType.START_GAME
    assert interpreter.interpret("look around").type == ActionType.INSPECT
    assert interpreter.interpret("help").type == ActionType.HELP
    assert interpreter.interpret("repeat").type == ActionType.REPEAT_LAST_NARRATION
    assert interpreter.interpret("pause game").type == ActionType.PAUSE
    assert interpreter.interpret("resume game").type == ActionType.RESUME


def test_interpreter_tolerates_filler_case_and_spacing() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.interpret("please GO   Left now") == Action.move(Direction.LEFT)
    assert interpreter.interpret("  Could you look around?  ").type == ActionType.INSPECT
    assert interpreter.interpret("Go back, quickly!") == Action.move(Direction.BACK)
    assert interpreter.interpret("go backwards") == Action.move(Direction.BACK)


def test_interpreter_returns_unrecognized_instead_of_raising() -> None:
    interpreter = CommandInterpreter()

    result = interpreter.interpret("xyzzy")

    assert result.type == ActionType.UNRECOGNIZED
    assert result.text == "xyzzy"
    assert interpreter.interpret("").type == ActionType.UNRECOGNIZED
    assert interpreter.interpret("   ").type == ActionType.UNRECOGNIZED


def test_interpreter_requires_whole_words() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.interpret("that was helpful").type == ActionType.UNRECOGNIZED
    assert interpreter.interpret("go lefty").type == ActionType.UNRECOGNIZED
    assert interpreter.interpret("undergo left").type == ActionType.UNRECOGNIZED


def test_interpreter_prefers_longest_phrase() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.interpret("help me start game").type == ActionType.START_GAME
    assert interpreter.interpret("repeat that, or help").type == ActionType.REPEAT_LAST_NARRATION


def test_interpreter_rejects_ties_between_families() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.interpret("go back or go left").type == ActionType.UNRECOGNIZED
    assert interpreter.interpret("go left, go left").type == ActionType.MOVE


def test_interpreter_accepts_custom_grammar() -> None:
    interpreter = CommandInterpreter({"north": Action.move(Direction.FORWARD)})

    assert interpreter.interpret("head north") == Action.move(Direction.FORWARD)
    assert interpreter.interpret("go left").type == ActionType.UNRECOGNIZED


def test_normalize() -> None:
    assert normalize("  Please,  GO\tLeft! ") == "please go left"
    assert normalize("don't stop") == "don't stop"
