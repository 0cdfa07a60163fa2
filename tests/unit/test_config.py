"""Tests for configuration validation."""

import pytest

from src.core.config import Settings, constants


def test_require_credential_with_valid_value() -> None:
    """Test require_credential returns value when credential is set."""
    settings = Settings(invite_backend_url="http://invites.local")

    result = settings.require_credential("invite_backend_url", "Invite backend")

    assert result == "http://invites.local"


def test_require_credential_with_none_raises_error() -> None:
    """Test require_credential raises ValueError when credential is None."""
    settings = Settings(invite_backend_url=None)

    with pytest.raises(ValueError, match="Invite backend credential not configured"):
        settings.require_credential("invite_backend_url", "Invite backend")


def test_require_credential_with_empty_string_raises_error() -> None:
    """Test require_credential raises ValueError when credential is empty."""
    settings = Settings(invite_backend_url="")

    with pytest.raises(ValueError, match="Invite backend credential not configured"):
        settings.require_credential("invite_backend_url", "Invite backend")


def test_require_credential_error_message_includes_field_name() -> None:
    """Test error message includes the environment variable name."""
    settings = Settings(invite_backend_api_key=None)

    with pytest.raises(ValueError, match="INVITE_BACKEND_API_KEY"):
        settings.require_credential("invite_backend_api_key", "Invite backend API key")


def test_is_production() -> None:
    assert Settings(environment="Production").is_production is True
    assert Settings(environment="development").is_production is False


def test_defaults_match_preferences_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.default_language == "pt"
    assert settings.default_date_format == "DD/MM/YYYY"
    assert settings.default_timezone == "America/Sao_Paulo"


def test_invite_constants() -> None:
    assert constants.INVITE_ENDPOINT_PATH == "/api/invites"
    assert constants.INVITE_MAX_RETRIES >= 1
