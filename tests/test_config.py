import pytest
from pydantic import ValidationError

from echoverse.config import Settings


def test_defaults() -> None:
    config = Settings()

    assert config.starting_lives == 3
    assert config.score_per_objective == 1
    assert config.sensing_range == 1
    assert config.activity_log_size == 10


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("ECHOVERSE_SENSING_RANGE", "2")
    monkeypatch.setenv("ECHOVERSE_VOICE_ENABLED", "false")

    config = Settings()

    assert config.sensing_range == 2
    assert config.voice_enabled is False


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(default_mode="arcade")
    with pytest.raises(ValidationError):
        Settings(starting_lives=0)
