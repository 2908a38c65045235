"""Tests for service settings loading."""

import pytest

from iaas_service.application.setup.options import SetupOptions
from iaas_service.config.settings import ServiceSettings, load_settings
from iaas_service.domain.base.exceptions import ConfigurationError


@pytest.mark.unit
class TestServiceSettings:
    """Test ServiceSettings and load_settings."""

    def test_defaults(self, monkeypatch):
        """Without sources the defaults apply."""
        monkeypatch.delenv("IAAS_SERVICE_SETUP__RETRY_COUNT", raising=False)

        settings = load_settings()

        assert settings.setup == SetupOptions()
        assert settings.logging.level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        """IAAS_SERVICE_* variables override nested keys."""
        monkeypatch.setenv("IAAS_SERVICE_SETUP__RETRY_COUNT", "5")
        monkeypatch.setenv("IAAS_SERVICE_DEFAULT_ZONE", "tk1a")

        settings = load_settings()

        assert settings.setup.retry_count == 5
        assert settings.default_zone == "tk1a"

    def test_settings_file(self, tmp_path, monkeypatch):
        """Values are read from settings files."""
        monkeypatch.delenv("IAAS_SERVICE_SETUP__RETRY_COUNT", raising=False)
        path = tmp_path / "settings.toml"
        path.write_text('default_zone = "is1b"\n\n[setup]\npolling_interval = 1.5\n')

        settings = load_settings([str(path)])

        assert settings.default_zone == "is1b"
        assert settings.setup.polling_interval == 1.5
        assert settings.setup.retry_count == 3

    def test_keyword_overrides(self):
        """Keyword overrides win."""
        settings = load_settings(default_zone="is1c")

        assert settings.default_zone == "is1c"

    def test_invalid_values_raise_configuration_error(self, monkeypatch):
        """Invalid values are reported as ConfigurationError."""
        monkeypatch.setenv("IAAS_SERVICE_SETUP__RETRY_COUNT", "-1")

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_setup_options_overrides_do_not_leak(self):
        """Per-call overrides return a copy."""
        settings = ServiceSettings()

        options = settings.setup_options(boot_after_build=True)

        assert options.boot_after_build is True
        assert settings.setup.boot_after_build is False
