# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_WEAK_SECRETS = {"dev", "development", "test", "secret", "changeme", "change-me"}

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


def _parse_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///sharelink.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG


class TokenConfig(BaseSettings):
    session_ttl_seconds: int = Field(24 * 60 * 60, ge=1, alias="SESSION_TTL_SECONDS")
    share_ttl_seconds: int = Field(7 * 24 * 60 * 60, ge=1, alias="SHARE_TTL_SECONDS")

    model_config = _SECTION_CONFIG


class UploadConfig(BaseSettings):
    max_bytes: int = Field(10 * 1024 * 1024, ge=1, alias="UPLOAD_MAX_BYTES")
    allowed_types: Annotated[list[str], NoDecode] = Field(
        [
            "jpeg", "jpg", "png", "gif", "pdf", "txt", "doc", "docx",
            "xls", "xlsx", "zip", "rar", "mp4", "mp3", "avi", "mov",
        ],
        alias="UPLOAD_ALLOWED_TYPES",
    )

    model_config = _SECTION_CONFIG

    @field_validator("allowed_types", mode="before")
    @classmethod
    def _split_types(cls, value: Any) -> Any:
        parsed = _parse_csv(value)
        if isinstance(parsed, list):
            return [item.lower().lstrip(".") for item in parsed]
        return parsed


class StorageConfig(BaseSettings):
    cloud_name: str | None = Field(None, alias="CLOUDINARY_CLOUD_NAME")
    api_key: str | None = Field(None, alias="CLOUDINARY_API_KEY")
    api_secret: str | None = Field(None, alias="CLOUDINARY_API_SECRET")
    folder: str = Field("sharelink", alias="CLOUDINARY_FOLDER")

    model_config = _SECTION_CONFIG

    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class SecurityConfig(BaseSettings):
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, ge=0.1, alias="RL_WINDOW")

    # Prefix for share URLs; falls back to the request host when unset
    public_base_url: str | None = Field(None, alias="PUBLIC_BASE_URL")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: Any) -> Any:
        return _parse_csv(value)

    @field_validator("enable_rate_limit", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


def _upload_config_factory() -> UploadConfig:
    return UploadConfig()  # type: ignore[call-arg]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field(..., min_length=16, alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    tokens: TokenConfig = Field(default_factory=_token_config_factory)
    uploads: UploadConfig = Field(default_factory=_upload_config_factory)
    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key.lower() in _WEAK_SECRETS:
            raise ValueError("SECRET_KEY must be a strong random value in production")

        warnings = []
        if not self.storage.is_configured():
            warnings.append("⚠️  Cloudinary credentials are missing, uploads will fail")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_rate_limit:
            warnings.append("⚠️  Rate limiting is DISABLED")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "StorageConfig",
    "TokenConfig",
    "UploadConfig",
    "load_config",
]
