"""
Unit tests for galaxyd configuration.

Tests YAML loading, environment overrides and the example config.
"""

from pathlib import Path

import pytest

from galaxyd.config import loader
from galaxyd.config.models import Config
from galaxyd.config.models import MockConfig


@pytest.mark.unit
class TestDaemonConfigLoader:
    """Test service configuration loading."""

    def test_defaults_without_file(self, mock_storage_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the service binds locally with mock mode off by default."""
        monkeypatch.delenv("GALAXYD_MOCK_ENABLED", raising=False)

        config = loader.load_config()

        assert config.daemon.host == "127.0.0.1"
        assert config.daemon.port == 8080
        assert config.mock.enabled is False
        assert loader.get_config_path().name == "daemon.yaml"

    def test_yaml_round_trip(self, tmp_path: Path) -> None:
        """Test a saved config loads back unchanged."""
        config = Config.get_default()
        config.mock.max_sessions = 5
        path = tmp_path / "daemon.yaml"

        config.save_to_file(path)

        assert Config.load_from_file(path) == config

    def test_env_overrides(self, mock_storage_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test GALAXYD_SECTION_KEY variables win over the file."""
        path = loader.get_config_path()
        path.write_text("daemon:\n  port: 9000\nmock:\n  enabled: false\n")
        monkeypatch.setenv("GALAXYD_DAEMON_PORT", "9100")
        monkeypatch.setenv("GALAXYD_DAEMON_CORS_ORIGINS", "http://a, http://b")
        monkeypatch.setenv("GALAXYD_MOCK_ENABLED", "true")
        monkeypatch.setenv("GALAXYD_MOCK_SEED", "42")
        monkeypatch.setenv("GALAXYD_MOCK_MAX_DELAY", "0.25")
        monkeypatch.setenv("GALAXYD_MOCK_MIN_DELAY", "0.1")

        config = loader.load_config()

        assert config.daemon.port == 9100
        assert config.daemon.cors_origins == ["http://a", "http://b"]
        assert config.mock.enabled is True
        assert config.mock.seed == 42
        assert config.mock.max_delay == 0.25

    def test_broken_file_falls_back_to_defaults(self, mock_storage_env: Path) -> None:
        """Test an invalid file does not stop the service."""
        loader.get_config_path().write_text("daemon:\n  port: 80\n")

        config = loader.load_config()

        assert config.daemon.port == 8080

    def test_save_example_config(self, tmp_path: Path) -> None:
        """Test the example file has the header and loads cleanly."""
        path = loader.save_example_config(tmp_path / "daemon.example.yaml")

        content = path.read_text()
        assert content.startswith("# galaxyd Configuration")
        assert "mock:" in content
        assert Config.load_from_file(path) == Config.get_default()


@pytest.mark.unit
class TestMockConfig:
    """Test mock range validation."""

    def test_min_actions_above_max_is_rejected(self) -> None:
        """Test inverted action ranges fail."""
        with pytest.raises(ValueError):
            MockConfig(min_actions=5, max_actions=2)

    def test_min_delay_above_max_is_rejected(self) -> None:
        """Test inverted delay ranges fail."""
        with pytest.raises(ValueError):
            MockConfig(min_delay=2.0, max_delay=1.0)
