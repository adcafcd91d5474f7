"""Tests for config.settings."""

import pytest
from pydantic import ValidationError

from config import CaptureSettings, ConnectionSettings, ImageFormat, MonitoringSettings, load_settings


class TestSettings:
    def test_defaults(self):
        settings = CaptureSettings()
        assert settings.connection.base_url == ""
        assert settings.connection.timeout == 60
        assert settings.images.default_mime_type == "image/tiff"
        assert settings.monitoring.log_level == "INFO"
        assert settings.uses_remote_service is False

    def test_base_url_enables_remote_service(self):
        settings = CaptureSettings(connection=ConnectionSettings(base_url="https://capture.example/api"))
        assert settings.uses_remote_service is True

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_timeout_must_be_positive(self, timeout):
        with pytest.raises(ValidationError):
            ConnectionSettings(timeout=timeout)

    def test_log_level_normalised(self):
        assert MonitoringSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            MonitoringSettings(log_level="chatty")

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CAPTURE_BASE_URL", "https://env.example/api")
        assert ConnectionSettings().base_url == "https://env.example/api"


class TestYaml:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "capture.yaml"
        original = CaptureSettings(
            connection=ConnectionSettings(base_url="https://capture.example/api", timeout=15),
            monitoring=MonitoringSettings(log_level="WARNING", performance_tracking=False),
        )

        original.to_yaml(path)
        loaded = CaptureSettings.from_yaml(path)

        assert loaded.connection.base_url == "https://capture.example/api"
        assert loaded.connection.timeout == 15
        assert loaded.monitoring.log_level == "WARNING"
        assert loaded.monitoring.performance_tracking is False
        assert ImageFormat(loaded.images.default_image_format) == ImageFormat.TIF

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert CaptureSettings.from_yaml(path).connection.timeout == 60

    def test_load_settings_missing_file_falls_back(self, tmp_path):
        settings = load_settings(str(tmp_path / "missing.yaml"))
        assert settings.uses_remote_service is False
