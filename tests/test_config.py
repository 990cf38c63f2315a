"""Tests for environment-driven Settings."""

import pytest

from app import create_app
from config import Settings

_VARS = (
    "PORT",
    "ENVIRONMENT",
    "CORS_ORIGINS",
    "CONTENT_DIR",
    "CACHE_TTL_SECONDS",
    "RATE_LIMIT_REQUESTS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "TRUST_PROXY_HEADERS",
)


def test_defaults(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.port == 3001
    assert settings.environment == "development"
    assert settings.is_development
    assert not settings.is_production
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.cache_ttl_seconds == 300
    assert settings.rate_limit_requests == 100
    assert settings.rate_limit_window_seconds == 60
    assert settings.trust_proxy_headers is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "yes")

    settings = Settings()
    assert settings.port == 8080
    assert settings.is_production
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.trust_proxy_headers is True


def test_validate_ok(make_settings):
    assert make_settings().validate() == []


def test_validate_reports_problems(make_settings):
    settings = make_settings(CACHE_TTL_SECONDS=0, RATE_LIMIT_REQUESTS=-1)
    problems = settings.validate()
    assert any("CACHE_TTL_SECONDS" in p for p in problems)
    assert any("RATE_LIMIT_REQUESTS" in p for p in problems)


def test_missing_content_dir_is_not_a_problem(make_settings, tmp_path):
    assert make_settings(CONTENT_DIR=tmp_path / "missing").validate() == []


@pytest.mark.parametrize(
    "name",
    ["RATE_LIMIT_WINDOW_SECONDS", "RATE_LIMIT_REQUESTS", "CACHE_TTL_SECONDS", "CACHE_SWEEP_INTERVAL_SECONDS"],
)
def test_create_app_refuses_non_positive_settings(make_settings, name):
    with pytest.raises(ValueError, match=name):
        create_app(make_settings(**{name: 0}))


def test_create_app_serves_defaults_without_content_dir(make_settings, tmp_path):
    app = create_app(make_settings(CONTENT_DIR=tmp_path / "missing"))
    assert len(app.state.episodes) == 2
