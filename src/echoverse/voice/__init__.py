"""Voice input and output module boundaries."""

from .input import ListeningController
from .intents import PHRASES, CommandInterpreter, normalize
from .interfaces import RecognitionSource, SpeechSink
from .output import NarrationCoordinator, VoiceOutputConfig

__all__ = [
    "PHRASES",
    "CommandInterpreter",
    "ListeningController",
    "NarrationCoordinator",
    "RecognitionSource",
    "SpeechSink",
    "VoiceOutputConfig",
    "normalize",
]
