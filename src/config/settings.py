"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

PublicAccessLevel = Literal["blob", "container", "private"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Azure Storage
    azure_storage_connection_string: SecretStr | None = None

    # Quickstart run
    quickstart_container_prefix: str = Field(
        "quickstartblobs", description="Prefix for the generated container name"
    )
    quickstart_local_dir: Path | None = Field(
        None, description="Folder for the temp files (defaults to the Desktop)"
    )
    quickstart_file_content: str = "Hello, World!"
    quickstart_public_access: PublicAccessLevel = "blob"
    quickstart_page_size: int | None = Field(
        None, gt=0, description="Blobs per listing page (SDK default when unset)"
    )

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    @property
    def azure_connection_string_str(self) -> str | None:
        """Get Azure Storage connection string as string."""
        if self.azure_storage_connection_string:
            return self.azure_storage_connection_string.get_secret_value()
        return None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
