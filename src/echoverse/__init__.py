"""EchoVerse: a voice and keyboard driven audio adventure engine."""

__version__ = "0.1.0"
