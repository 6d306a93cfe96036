from __future__ import annotations

import pytest
from pydantic import ValidationError

from sharelink.shared.config import AppConfig, SecurityConfig, UploadConfig


def test_secret_key_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        AppConfig(_env_file=None)


def test_short_secret_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(SECRET_KEY="short", _env_file=None)


def test_weak_secret_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        AppConfig(SECRET_KEY="changeme", APP_ENV="production", _env_file=None)


def test_defaults_match_token_lifetimes() -> None:
    config = AppConfig(SECRET_KEY="x" * 32, _env_file=None)

    assert config.tokens.session_ttl_seconds == 24 * 60 * 60
    assert config.tokens.share_ttl_seconds == 7 * 24 * 60 * 60
    assert config.uploads.max_bytes == 10 * 1024 * 1024


def test_csv_settings_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPLOAD_ALLOWED_TYPES", "PDF, .png ,txt")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    assert UploadConfig(_env_file=None).allowed_types == ["pdf", "png", "txt"]
    assert SecurityConfig(_env_file=None).allowed_origins == [
        "https://a.example",
        "https://b.example",
    ]
