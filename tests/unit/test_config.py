"""
Unit tests for configuration.

Tests cover:
- Reading WEBFLOW_* environment variables
- Missing API key reported at use, not at load
- Site ID resolution order
"""

import pytest
from pydantic import ValidationError

from webflow_tools.config import DEFAULT_BASE_URL, Settings, get_settings
from webflow_tools.errors import MissingApiKeyError, MissingSiteIdError


class TestSettingsFromEnvironment:
    """Tests for loading settings from the environment."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that WEBFLOW_* variables are read."""
        monkeypatch.setenv("WEBFLOW_API_KEY", "env-key")
        monkeypatch.setenv("WEBFLOW_SITE_ID", "env-site")

        settings = Settings(_env_file=None)

        assert settings.api_key == "env-key"
        assert settings.site_id == "env-site"
        assert settings.base_url == DEFAULT_BASE_URL

    def test_missing_key_does_not_fail_at_load(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a missing API key does not fail at load time."""
        monkeypatch.delenv("WEBFLOW_API_KEY", raising=False)
        monkeypatch.delenv("WEBFLOW_SITE_ID", raising=False)

        settings = Settings(_env_file=None)

        assert settings.api_key is None
        assert settings.site_id is None

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that keyword overrides beat the environment."""
        monkeypatch.setenv("WEBFLOW_SITE_ID", "env-site")

        settings = get_settings(site_id="explicit-site", _env_file=None)

        assert settings.site_id == "explicit-site"

    def test_settings_are_frozen(self) -> None:
        """Test that settings cannot be changed after creation."""
        settings = Settings(api_key="k", _env_file=None)

        with pytest.raises(ValidationError):
            settings.api_key = "other"

    def test_timeout_must_be_positive(self) -> None:
        """Test that a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings(timeout_seconds=0, _env_file=None)


class TestRequireApiKey:
    """Tests for require_api_key."""

    def test_returns_key(self) -> None:
        """Test that a configured key is returned."""
        assert Settings(api_key="abc", _env_file=None).require_api_key() == "abc"

    def test_raises_when_missing(self) -> None:
        """Test that a missing key raises MissingApiKeyError."""
        with pytest.raises(MissingApiKeyError):
            Settings(api_key=None, _env_file=None).require_api_key()

    def test_raises_when_empty(self) -> None:
        """Test that an empty key counts as missing."""
        with pytest.raises(MissingApiKeyError):
            Settings(api_key="", _env_file=None).require_api_key()


class TestResolveSiteId:
    """Tests for site ID resolution."""

    def test_explicit_wins(self) -> None:
        """Test that an explicit site ID beats the default."""
        settings = Settings(site_id="default", _env_file=None)
        assert settings.resolve_site_id("explicit") == "explicit"

    def test_falls_back_to_default(self) -> None:
        """Test that a missing or empty site ID uses the default."""
        settings = Settings(site_id="default", _env_file=None)
        assert settings.resolve_site_id(None) == "default"
        assert settings.resolve_site_id("") == "default"

    def test_raises_without_either(self) -> None:
        """Test that MissingSiteIdError is raised without any site ID."""
        settings = Settings(site_id=None, _env_file=None)
        with pytest.raises(MissingSiteIdError):
            settings.resolve_site_id(None)
