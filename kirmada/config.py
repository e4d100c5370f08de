# ABOUTME: Runtime settings for the assistant, read from the environment and an optional .env file.
# ABOUTME: Values are validated once at startup and passed explicitly to the services that need them.

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "openai/gpt-oss-20b"


class Settings(BaseSettings):
    """Assistant configuration loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    openrouter_api_key: str = Field(default="", alias="OPENROUTER_API_KEY", repr=False)
    model_name: str = Field(default=DEFAULT_MODEL, alias="OPENROUTER_MODEL")
    cors_origin: str = Field(default="http://localhost:3001", alias="CORS_ORIGIN")
    host: str = Field(default="0.0.0.0", alias="KIRMADA_HOST")
    port: int = Field(default=8000, ge=1, le=65535, alias="KIRMADA_PORT")
    http_timeout: float = Field(default=15.0, gt=0, alias="KIRMADA_HTTP_TIMEOUT")
    # 1 means a single attempt, i.e. no transport-level retry.
    http_attempts: int = Field(default=1, ge=1, alias="KIRMADA_HTTP_ATTEMPTS")
    geocode_count: int = Field(default=10, ge=1, le=100, alias="KIRMADA_GEOCODE_COUNT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


def load_settings() -> Settings:
    """Build Settings from the environment, failing fast on invalid values."""
    return Settings()
