"""
Application configuration using Pydantic Settings.

This module defines the Settings object used across the service to configure:
- App metadata and environment
- MongoDB connectivity for the primary mapping store
- Local JSON file and embedded store behavior
- Search pagination limits
- Audit sink collection, retention and identifier hashing
- Remote mapping API credentials and timeouts

Values are read from environment variables with sensible defaults for development.
Use a .env file in development; in production, set environment variables via the platform's secret management.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORE_", extra="ignore")

    mongo_collection: str = "mappings"
    file_path: str = "data/mappings.json"
    embedded_seed: bool = True
    operation_timeout_seconds: float = Field(5.0, gt=0)
    server_selection_timeout_ms: int = 3000


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SEARCH_", extra="ignore")

    default_limit: int = Field(20, ge=1)
    max_limit: int = Field(100, ge=1)


class AuditSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AUDIT_", extra="ignore")

    collection: str = "auditLogs"
    ttl_days: int = 90
    id_hash_salt: str = "dev-salt"


class RemoteApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="REMOTE_API_", extra="ignore")

    base_url: str | None = None
    token: str | None = None
    timeout_seconds: float = 8.0


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App metadata
    APP_NAME: str = Field("namaste-mapping-service")
    ENV: Literal["dev", "test", "staging", "prod"] = Field("dev")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("INFO")

    # MongoDB connection string (SRV URI for Atlas)
    MONGO_URI: str | None = Field(None)
    MONGO_DATABASE: str = Field("namaste-sync")

    # Which network-backed store sits in the primary tier
    PRIMARY_BACKEND: Literal["mongo", "api"] = Field("mongo")

    # Insert the sample mapping set when the active store is empty
    SEED_ON_STARTUP: bool = Field(False)

    stores: StoreSettings = StoreSettings()
    search: SearchSettings = SearchSettings()
    audit: AuditSettings = AuditSettings()
    remote_api: RemoteApiSettings = RemoteApiSettings()

    # Observability
    ENABLE_ACCESS_LOG: bool = Field(True)

    @property
    def is_prod(self) -> bool:
        return self.ENV == "prod"

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance.

    Use lru_cache to avoid re-parsing environment variables. Tests may clear the cache if needed.
    """
    return Settings()  # type: ignore[arg-type]
