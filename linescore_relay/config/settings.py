import logging

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Upstream Configuration
    stats_base_url: HttpUrl = Field(
        "https://stats.nba.com/stats",
        description="Base URL of the stats API serving the box score summary.",
    )
    game_id: str = Field(
        "0021700807", description="Game identifier passed as the GameID parameter."
    )
    upstream_timeout_seconds: float = Field(
        10.0,
        gt=0,
        description=(
            "Upstream timeout in seconds: limits each httpx phase and also "
            "bounds the whole request, body download included."
        ),
    )

    # Server Configuration
    relay_host: str = Field("0.0.0.0", description="Interface the relay binds to.")
    relay_port: int = Field(3001, ge=1, le=65535, description="Listen port.")

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def box_score_summary_url(self) -> str:
        return f"{str(self.stats_base_url).rstrip('/')}/boxscoresummaryv2"


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
