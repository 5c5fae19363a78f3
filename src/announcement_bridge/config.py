"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Server budget (seconds)
    request_timeout: float = 5.0
    keep_alive_timeout: float = 3.0

    # Fallback author shown on announcements without one
    default_author_name: str = "madtisa"
    default_author_icon: str = (
        "https://cdn.discordapp.com/avatars/1036860169382015007/"
        "45c6dbecf5e2da6f01ff5cefb679d965.webp"
    )

    @property
    def is_production(self) -> bool:
        """True when running with ENVIRONMENT=production."""
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
