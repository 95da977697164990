"""Exception types raised at EchoVerse capability and catalogue boundaries."""

from __future__ import annotations


class EchoVerseError(Exception):
    """Base class for EchoVerse errors."""


class CapabilityUnavailableError(EchoVerseError):
    """Raised when an external speech or recognition capability cannot be used."""

    def __init__(self, capability: str, reason: str) -> None:
        super().__init__(f"{capability} capability unavailable: {reason}")
        self.capability = capability
        self.reason = reason


class UnknownLevelError(EchoVerseError, LookupError):
    """Raised when a level number is outside the catalogue for a mode."""
