"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=7 * 24 * 60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Origin of the single-page client allowed by CORS",
    )
    storage_backend: Literal["local", "azure"] = Field(
        default="local",
        description="Where uploaded documents and attachments are kept",
    )
    upload_dir: str = Field(
        default="uploads",
        description="Root directory used by the local storage backend",
        min_length=1,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string for the Azure Blob Storage account",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container that receives uploaded files",
    )
    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted upload size in bytes",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_azure_storage(self) -> "Settings":
        if self.storage_backend == "azure" and not (
            self.azure_storage_connection_string and self.azure_storage_container_name
        ):
            raise ValueError(
                "AZURE_STORAGE_CONNECTION_STRING and AZURE_STORAGE_CONTAINER_NAME "
                "must both be provided when STORAGE_BACKEND is 'azure'"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
