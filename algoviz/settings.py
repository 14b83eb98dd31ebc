"""
settings.py - Application Configuration
========================================
Environment-driven settings for the web layer and the Player defaults.

    ALGOVIZ_LOG_LEVEL=DEBUG ALGOVIZ_DEFAULT_SPEED=slow python main.py
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ALGOVIZ_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------
    env: Literal["local", "test", "prod"] = "local"

    # ---- Logging -----------------------------------------------------
    log_level: str = "INFO"

    # ---- Playback ----------------------------------------------------
    default_speed: str = Field(
        default="medium",
        description="Speed preset a freshly created Player starts with",
    )

    # ---- Input limits ------------------------------------------------
    max_input_items: int = Field(
        default=200,
        ge=1,
        description="Largest array / node list the configuration layer accepts",
    )
    max_trace_steps: int = Field(
        default=50_000,
        ge=2,
        description="Snapshots one run may record before it is rejected as too long",
    )

    # ---- Sessions ----------------------------------------------------
    max_sessions: int = Field(
        default=256,
        ge=1,
        description="Live Players kept in memory; the least recently used is evicted",
    )
    session_idle_seconds: float = Field(
        default=1800.0,
        gt=0,
        description="A Player untouched for this long is closed and dropped",
    )

    # ---- Server ------------------------------------------------------
    secret_key: str = ""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Process-wide settings, read from the environment once."""
    return AppSettings()
