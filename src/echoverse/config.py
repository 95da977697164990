"""Runtime configuration for EchoVerse."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="ECHOVERSE_", env_file=".env", extra="ignore")

    app_name: str = "echoverse"
    log_level: str = "INFO"
    voice_enabled: bool = True
    default_mode: str = Field(default="practice", pattern="^(practice|adventure)$")
    starting_lives: int = Field(default=3, ge=1)
    score_per_objective: int = Field(default=1, ge=1)
    sensing_range: int = Field(
        default=1,
        ge=0,
        description="Manhattan distance within which 'look around' reports objectives and hazards.",
    )
    activity_log_size: int = Field(default=10, ge=1)
    narration_max_chars: int = Field(default=500, ge=1)
    recognition_language: str = "en-US"
    phrase_time_limit: float = Field(default=5.0, gt=0)
    tts_rate: int | None = None
    tts_volume: float | None = Field(default=None, ge=0.0, le=1.0)


settings = Settings()
