"""
Configuration and settings for the emotes backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    # Comma-separated list, or "*" to allow all origins.
    cors_allow_origins: str = Field(default="*")

    # Shared secret expected in the x-admin-key header.
    admin_access_key: str = Field(default="123")

    default_ad_link: str = Field(default="https://google.com")
    unnamed_emote_name: str = Field(default="Unnamed Emote")

    # Firebase (Firestore + Cloud Storage)
    firebase_credentials_path: str = Field(default="serviceAccountKey.json")
    firebase_storage_bucket: str = Field(
        default="YOUR_FIREBASE_PROJECT_ID.appspot.com"
    )

    # SQL document store (Postgres, or SQLite for local runs)
    database_url: Optional[str] = Field(default=None)

    # S3-compatible storage (Tencent COS, MinIO, AWS S3)
    cos_endpoint: Optional[str] = Field(default=None)
    cos_region: Optional[str] = Field(default=None)
    cos_bucket: Optional[str] = Field(default=None)
    cos_public_base_url: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    def cors_origins(self) -> list[str]:
        raw = (self.cors_allow_origins or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
