"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # DuckDB file, or ":memory:" for a throwaway in-process database
    database_path: str = ":memory:"

    # Seconds per draft action, persisted as a string on every session
    draft_timer_seconds: str = "30"

    # Accept champions already banned or picked in the same draft
    allow_duplicate_champions: bool = False

    # Auth
    admin_password: str = "change-me"
    token_ttl_seconds: int = 12 * 60 * 60
    access_code_length: int = 8


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
