"""
@file: config.py
@description:
This module provides centralized configuration management for the shop data layer.
It loads environment variables and provides typed access to configuration settings
used throughout the application.

The configuration includes settings for:
- Application mode (development vs. production)
- Database connection (host, name, credentials, driver)
- Connection pool limits and timeouts
- Logging parameters

@dependencies:
- pydantic: For settings validation
- pydantic_settings: For environment variable loading
- dotenv: For loading environment variables from .env file

@notes:
- Host, database name, credentials and APP_ENV are required; there are no
  defaults and a missing value is reported as a ConfigurationError.
- Pool limits default to max 5 / min 0 connections, 30s acquire timeout and
  10s idle timeout.
- Settings are loaded lazily through get_settings() so that importing the
  package never fails on an incomplete environment.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

from app.core.errors import ConfigurationError

load_dotenv()

DEVELOPMENT = "development"


class PoolSettings(BaseModel):
    """
    Connection pool limits.

    SQLAlchemy pools open connections on demand, so the minimum size is only
    honoured as a floor of zero idle connections.
    """
    max_size: int = Field(default=5, ge=1)
    min_size: int = Field(default=0, ge=0)
    acquire_timeout: float = Field(default=30.0, gt=0)
    idle_timeout: int = Field(default=10, gt=0)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provides typed access to all configuration parameters used by the data layer.
    """
    # Application Settings
    APP_ENV: str = Field(..., description="Running mode, e.g. 'development' or 'production'.")

    # Database
    DB_HOST: str = Field(...)
    DB_NAME: str = Field(...)
    DB_USER: str = Field(...)
    DB_PASS: str = Field(...)
    DB_PORT: Optional[int] = Field(default=None)
    DB_DRIVER: str = Field(default="postgresql+asyncpg")

    # Connection pool
    DB_POOL_MAX: int = Field(default=5, ge=1)
    DB_POOL_MIN: int = Field(default=0, ge=0)
    DB_POOL_ACQUIRE_TIMEOUT: float = Field(default=30.0, gt=0)
    DB_POOL_IDLE_TIMEOUT: int = Field(default=10, gt=0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator("APP_ENV", mode="before")
    def normalize_app_env(cls, v: str) -> str:
        """
        Normalize the running mode so comparisons are case-insensitive.
        """
        if isinstance(v, str):
            v = v.strip().lower()
        if not v:
            raise ValueError("APP_ENV must not be empty")
        return v

    @field_validator("DB_HOST", "DB_NAME", "DB_USER", mode="before")
    def reject_blank(cls, v: str) -> str:
        """
        Treat blank connection values as missing.
        """
        if isinstance(v, str) and not v.strip():
            raise ValueError("value must not be blank")
        return v

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == DEVELOPMENT

    @property
    def pool(self) -> PoolSettings:
        """
        Bundle the pool settings for the connection factory.
        """
        return PoolSettings(
            max_size=self.DB_POOL_MAX,
            min_size=self.DB_POOL_MIN,
            acquire_timeout=self.DB_POOL_ACQUIRE_TIMEOUT,
            idle_timeout=self.DB_POOL_IDLE_TIMEOUT,
        )

    @property
    def database_url(self) -> URL:
        """
        Build the SQLAlchemy connection URL from the individual settings.
        """
        return URL.create(
            drivername=self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASS,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Load and cache the application settings.

    Returns:
        Settings: The validated settings object.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(f"Invalid or missing settings: {', '.join(missing)}") from e
