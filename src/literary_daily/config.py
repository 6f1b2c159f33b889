# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads all settings from environment variables and .env file.

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from literary_daily.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # AI / SiliconFlow (required only when content has to be generated)
    siliconflow_api_key: SecretStr | None = None
    siliconflow_model_id: str | None = None
    ai_endpoint: str = "https://api.siliconflow.cn/v1/chat/completions"
    ai_timeout_seconds: float = Field(default=60.0, gt=0)
    ai_max_attempts: int = Field(default=2, ge=1)  # original request plus one retry
    ai_retry_wait_seconds: float = Field(default=1.0, ge=0)
    ai_max_tokens: int = 1000
    ai_temperature: float = 0.7
    ai_top_p: float = 0.7
    ai_top_k: int = 50
    ai_frequency_penalty: float = 0.5

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "literary_daily"
    db_user: str = "literary_daily"
    db_password: SecretStr | None = None
    db_pool_size: int = 5
    db_pool_max_overflow: int = 10

    @property
    def database_url(self) -> str:
        """Build async PostgreSQL connection URL."""
        password = self.db_password.get_secret_value() if self.db_password else ""
        return f"postgresql+asyncpg://{self.db_user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    # Web
    app_host: str = "0.0.0.0"
    app_port: int = 8000


@dataclass(frozen=True)
class AIConfig:
    """Credential and model identifier for the completion endpoint."""

    api_key: str
    model_id: str

    def __repr__(self) -> str:
        return f"AIConfig(api_key='**********', model_id={self.model_id!r})"


def require_ai_config(settings: Settings | None = None) -> AIConfig:
    """Build the AI configuration, failing fast when credentials are missing.

    Raises:
        ConfigurationError: If the API key or model id is not set.
    """
    settings = settings or get_settings()
    api_key = settings.siliconflow_api_key.get_secret_value() if settings.siliconflow_api_key else ""
    model_id = (settings.siliconflow_model_id or "").strip()

    missing = []
    if not api_key.strip():
        missing.append("SILICONFLOW_API_KEY")
    if not model_id:
        missing.append("SILICONFLOW_MODEL_ID")
    if missing:
        raise ConfigurationError(f"AI API credentials are not set: {', '.join(missing)}")

    return AIConfig(api_key=api_key.strip(), model_id=model_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables and .env file.
    AI credentials are optional here and checked by require_ai_config().
    """
    return Settings()
