"""Configuration management."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from rich.logging import RichHandler


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


class Settings(BaseModel):
    """Application settings, injected into every collaborator client."""

    # Samsara fleet telemetry
    samsara_api_token: str | None = Field(
        default_factory=lambda: os.getenv("SAMSARA_API_TOKEN")
    )
    samsara_base_url: str = Field(
        default_factory=lambda: os.getenv("SAMSARA_BASE_URL", "https://api.samsara.com")
    )
    samsara_page_limit: int = 512

    # Geocoding (Nominatim) and routing (OSRM)
    nominatim_url: str = Field(
        default_factory=lambda: os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
    )
    geocoder_user_agent: str = Field(
        default_factory=lambda: os.getenv("GEOCODER_USER_AGENT", "samsara-eta-bot/1.0")
    )
    osrm_url: str = Field(
        default_factory=lambda: os.getenv("OSRM_URL", "https://router.project-osrm.org")
    )
    osrm_profile: str = "driving"

    # Chat delivery (Telegram)
    telegram_bot_token: str | None = Field(
        default_factory=lambda: os.getenv("TELEGRAM_BOT_TOKEN")
    )
    telegram_api_url: str = "https://api.telegram.org"

    # Assistant model settings
    github_token: str | None = Field(
        default_factory=lambda: os.getenv("GITHUB_TOKEN")
    )
    model_id: str | None = Field(
        default_factory=lambda: os.getenv("MODEL_ID")
    )
    use_ollama: bool = Field(
        default_factory=lambda: os.getenv("USE_OLLAMA", "").lower() in ("true", "1", "yes")
    )
    ollama_url: str = Field(
        default_factory=lambda: os.getenv("OLLAMA_URL", "http://localhost:11434/v1")
    )

    http_timeout_s: float = 30.0
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO")
    )

    class Config:
        frozen = True

    def validate_required(self) -> list[str]:
        """Check for missing required configuration."""
        missing = []

        if not self.samsara_api_token:
            missing.append("SAMSARA_API_TOKEN")

        # Telegram and the assistant are optional surfaces

        return missing


def configure_logging(level: str | None = None) -> None:
    """Route all package logging through a rich handler."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


# Global settings instance
settings = Settings()
