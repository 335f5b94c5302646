"""Tests for environment-driven settings."""

from camp_api.core.config import Settings


def test_settings_expose_only_used_options(monkeypatch):
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "client-secret")

    settings = Settings(DATABASE_URL="sqlite://")

    assert not hasattr(settings, "GOOGLE_CLIENT_ID")
    assert not hasattr(settings, "GOOGLE_CLIENT_SECRET")
    assert not hasattr(settings, "cookie_secure")


def test_cors_origins_list_is_trimmed(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " https://a.example , ,https://b.example")

    settings = Settings(DATABASE_URL="sqlite://")

    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


def test_jwt_secrets_include_previous_during_rotation():
    settings = Settings(
        DATABASE_URL="sqlite://", JWT_SECRET="new", JWT_SECRET_PREVIOUS="old"
    )

    assert settings.jwt_secrets == ["new", "old"]
