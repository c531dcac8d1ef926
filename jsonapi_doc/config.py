from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables with JSONAPI_ prefix."""

    # Codec
    max_depth: int = 256
    media_type: str = "application/vnd.api+json"
    # Client
    client_timeout: float = 10.0
    client_path_suffix: str = ""

    model_config = SettingsConfigDict(env_prefix="JSONAPI_")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
