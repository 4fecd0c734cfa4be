"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Elasticsearch
    elasticsearch_url: str = Field(
        default="http://localhost:9200",
        description="Elasticsearch base URL",
    )
    elasticsearch_index: str = Field(default="documents", description="Index name")
    elasticsearch_username: str = Field(default="", description="Basic auth user")
    elasticsearch_password: str = Field(default="", description="Basic auth password")
    elasticsearch_api_key: str = Field(default="", description="API key (overrides basic auth)")
    elasticsearch_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    # Storage
    uploads_dir: Path = Field(default=Path("uploads"), description="Root of the uploads tree")
    max_upload_size_mb: int = Field(default=100, gt=0, description="Per-file upload limit")
    max_files_per_upload: int = Field(default=5, gt=0, description="Files per multi-upload")
    default_document_type: str = Field(default="documentos", description="Document type when none is given")

    # HTTP
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: str = Field(default="", description="Comma-separated allowed origins")

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
