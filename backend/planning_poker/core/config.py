"""Application settings for backend runtime and tests."""

from __future__ import annotations

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

from planning_poker.rooms.scales import DEFAULT_SCALE_ID
from planning_poker.rooms.scales import is_registered_scale


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    poker_app_env: str = "dev"
    poker_app_host: str = "127.0.0.1"
    poker_app_port: int = Field(default=8000, ge=1)
    poker_cors_allow_origins: str = "*"
    poker_log_level: str = "INFO"

    poker_default_scale: str = DEFAULT_SCALE_ID
    poker_room_idle_seconds: int = Field(default=3600, ge=0)
    poker_room_sweep_interval_seconds: float = Field(default=60.0, gt=0)
    poker_reject_votes_after_reveal: bool = True

    @model_validator(mode="after")
    def validate_default_scale(self) -> "Settings":
        """Ensure the default scale names a registered estimation scale."""
        if not is_registered_scale(self.poker_default_scale):
            raise ValueError(
                f"POKER_DEFAULT_SCALE={self.poker_default_scale!r} is not a registered scale"
            )
        return self

    @property
    def cors_allow_origins(self) -> list[str]:
        return [origin.strip() for origin in self.poker_cors_allow_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
