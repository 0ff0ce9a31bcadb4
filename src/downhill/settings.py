"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlopeSettings(BaseSettings):
    """Obstacle placement and skier movement."""

    # Minimum clearance between obstacle centers and viewport edges
    placement_buffer: int = Field(default=50, gt=0)
    # A new obstacle spawns only when a 1..N roll comes up N
    placement_constant: int = Field(default=8, ge=1)

    # Initial obstacle count multiplier range
    initial_multiplier_low: int = Field(default=5, ge=0)
    initial_multiplier_high: int = Field(default=7, ge=0)

    initial_speed: int = Field(default=8, gt=0)
    movement_ratio: float = Field(default=1.4142, gt=0.0)

    # Upper bound for rejection sampling
    max_placement_attempts: int = Field(default=1000, ge=1)


class ScoringSettings(BaseSettings):
    """Points cadence and collision tuning."""

    points_cadence: int = Field(default=3, ge=1)
    collision_margin: int = Field(default=5, ge=0)


class JumpSettings(BaseSettings):
    """Jump animation timing."""

    frame_interval_ms: float = Field(default=250.0, gt=0.0)
    frame_count: int = Field(default=5, ge=1)


class DisplaySettings(BaseSettings):
    """Viewport geometry. Read-only once the simulation starts."""

    width: int = Field(default=1024, gt=0)
    height: int = Field(default=768, gt=0)
    pixel_ratio: float = Field(default=1.0, gt=0.0)
    fps: int = Field(default=60, gt=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOWNHILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    seed: int | None = None

    highscore_path: Path = Field(
        default_factory=lambda: Path.home() / ".downhill" / "highscore.json"
    )

    slope: SlopeSettings = Field(default_factory=SlopeSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    jump: JumpSettings = Field(default_factory=JumpSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
