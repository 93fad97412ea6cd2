"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError
from leavedesk.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    """Production settings reject wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        APP_ENV="prod",
        ALLOWED_ORIGINS="*"
    )

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_prod_settings_rejects_sqlite():
    """Production settings reject a SQLite balance store"""
    settings = Settings(
        DATABASE_URL="sqlite:///./leavedesk.db",
        APP_ENV="prod",
        ALLOWED_ORIGINS="https://hr.example.com"
    )

    with pytest.raises(ValueError, match="DATABASE_URL"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    """Local settings allow wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        APP_ENV="local",
        ALLOWED_ORIGINS="*"
    )

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_get_allowed_origins_list():
    """Test parsing of ALLOWED_ORIGINS"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        ALLOWED_ORIGINS="https://example.com, https://app.example.com,"
    )
    origins = settings.get_allowed_origins_list()
    assert origins == ["https://example.com", "https://app.example.com"]


def test_invalid_app_env_rejected():
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="postgresql://test", APP_ENV="dev")


def test_log_level_normalized_to_upper_case():
    settings = Settings(DATABASE_URL="postgresql://test", LOG_LEVEL="debug")
    assert settings.LOG_LEVEL == "DEBUG"
