"""Telemetry sinks and the player-facing activity log."""

from .logging import ActivityEntry, ActivityLog, LoggingTelemetry, Telemetry

__all__ = ["ActivityEntry", "ActivityLog", "LoggingTelemetry", "Telemetry"]
