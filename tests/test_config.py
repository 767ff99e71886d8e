"""Tests for environment-driven settings and caller helpers."""

import pydantic
import pytest

from bearer_auth.config import AuthSettings
from bearer_auth.responses import CORS_HEADERS, unauthorized_response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("AUTH_ISSUER_DOMAIN", "CLERK_DOMAIN", "AUTH_JWKS_CACHE_TTL", "AUTH_JWKS_TIMEOUT", "AUTH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir("/")


def test_reads_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_ISSUER_DOMAIN", "example.com")
    monkeypatch.setenv("AUTH_JWKS_CACHE_TTL", "600")

    settings = AuthSettings()

    assert settings.issuer_domain == "example.com"
    assert settings.jwks_cache_ttl == 600
    assert settings.jwks_timeout == 5.0
    assert settings.log_level == "info"


def test_reads_clerk_domain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLERK_DOMAIN", "app.clerk.accounts.dev")
    assert AuthSettings().issuer_domain == "app.clerk.accounts.dev"


def test_issuer_domain_required() -> None:
    with pytest.raises(pydantic.ValidationError):
        AuthSettings()


def test_ttl_must_be_positive() -> None:
    with pytest.raises(pydantic.ValidationError):
        AuthSettings(issuer_domain="example.com", jwks_cache_ttl=0)


def test_log_level_is_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_LOG_LEVEL", "WARNING")
    assert AuthSettings(issuer_domain="example.com").log_level == "warning"


def test_unknown_log_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_LOG_LEVEL", "verbose")
    with pytest.raises(pydantic.ValidationError, match="log_level"):
        AuthSettings(issuer_domain="example.com")


def test_unauthorized_response() -> None:
    status, body, headers = unauthorized_response()
    assert status == 401
    assert body == {"error": "Unauthorized"}
    assert headers == CORS_HEADERS
    headers["X-Extra"] = "1"
    assert "X-Extra" not in CORS_HEADERS


def test_configure_logging_routes_through_stdlib() -> None:
    import structlog

    from bearer_auth.log import configure_logging, get_logger

    try:
        configure_logging("debug")
        logger = get_logger("bearer_auth.test")
        logger.info("configured", check=True)
        assert structlog.is_configured()
    finally:
        structlog.reset_defaults()
