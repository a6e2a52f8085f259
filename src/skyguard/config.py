"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (``SKYGUARD_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="SKYGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SkyGuard"
    debug: bool = False
    log_level: str = "INFO"

    # Battlespace extent (simulation units, origin top-left)
    field_width: float = 800.0
    field_height: float = 600.0

    # Timing
    fire_cooldown: float | None = None  # overrides every airframe's weapon_cooldown
    stats_interval: float = 0.1       # seconds between full stats snapshots
    tick_rate: float = 60.0           # headless runner frames per second

    # Scenario defaults (used by the CLI when no flags are given)
    default_map: str = "base"
    default_formation: str = "circle"
    default_friendly_count: int = 8
    default_hostile_count: int = 5
    default_friendly_bomber_count: int = 0
    default_hostile_bomber_count: int = 0


settings = Settings()
