import os
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./skm_chambers.db"


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the current environment."""


class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = None
    PORT: int = 5000
    HOST: str = "localhost"

    ENVIRONMENT: str = "development"
    ALLOWED_ORIGINS: str = ""  # comma separated, production only

    MAX_BODY_BYTES: int = 10 * 1024 * 1024  # 10 MiB
    HEALTH_VERBOSE: bool = True
    LOG_LEVEL: str = "INFO"

    # Pool tuning (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour

    SERVICE_NAME: str = "SKM Chambers API"
    SERVICE_VERSION: str = "1.0.0"

    model_config = SettingsConfigDict(
        # Use absolute path to make sure .env is found
        env_file=os.path.join(os.path.dirname(__file__), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def resolve_database_url(settings: Settings) -> str:
    """
    Return the store connection string for this process.

    Production refuses to start without an explicit DATABASE_URL; any other
    deployment mode falls back to a local SQLite file.
    """
    database_url = (settings.DATABASE_URL or "").strip()

    # Some hosting environments accidentally prepend "DATABASE_URL=" to the value
    prefix = "DATABASE_URL="
    if database_url.startswith(prefix):
        database_url = database_url[len(prefix):].strip()

    if database_url:
        return database_url

    if settings.is_production:
        raise ConfigurationError("DATABASE_URL must be set when ENVIRONMENT=production")

    logger.warning(
        "DATABASE_URL not found in environment. Falling back to %s", DEFAULT_DATABASE_URL
    )
    return DEFAULT_DATABASE_URL
