"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./jobportal.db")

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=1440)  # 24 hours

    # API
    api_prefix: str = Field(default="")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Client
    storage_backend: str = Field(default="remote")
    api_base_url: str = Field(default="http://localhost:8000")
    embedded_db_path: str = Field(default="~/.jobportal/portals.db")
    session_path: str = Field(default="~/.jobportal/session.json")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
        if self.storage_backend not in ("remote", "embedded"):
            raise ValueError("STORAGE_BACKEND must be 'remote' or 'embedded'")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
