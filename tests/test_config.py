"""Tests for configuration loading."""

from pathlib import Path

import pytest

from ct_intel.config import BriefConfig, CTIntelConfig, _interpolate_env_vars, load_config, save_config


class TestInterpolation:
    """Tests for environment variable interpolation."""

    def test_default_used_when_unset(self, monkeypatch):
        """Test that the inline default applies when the variable is unset."""
        monkeypatch.delenv("CT_TEST_VAR", raising=False)

        assert _interpolate_env_vars("${CT_TEST_VAR:-fallback}") == "fallback"

    def test_env_value_wins(self, monkeypatch):
        """Test that a set variable overrides the default, including in nested values."""
        monkeypatch.setenv("CT_TEST_VAR", "set")

        assert _interpolate_env_vars({"a": ["${CT_TEST_VAR:-fallback}"]}) == {"a": ["set"]}

    def test_required_variable_missing(self, monkeypatch):
        """Test that a required variable that is unset raises ValueError."""
        monkeypatch.delenv("CT_TEST_VAR", raising=False)

        with pytest.raises(ValueError):
            _interpolate_env_vars("${CT_TEST_VAR}")


class TestCTIntelConfig:
    """Tests for CTIntelConfig."""

    def test_defaults(self, monkeypatch):
        """Test the built-in defaults."""
        monkeypatch.delenv("CT_DATA_DIR", raising=False)
        monkeypatch.delenv("PORT", raising=False)

        config = CTIntelConfig.default()

        assert config.data.data_dir == Path("~/ct-scanner/data").expanduser()
        assert config.data.bundle_path == Path("scans-bundle.json")
        assert config.server.port == 3500
        assert config.brief.default_window_hours == 24
        assert config.brief.display_timezone == "America/New_York"
        assert config.logging.level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test that CT_DATA_DIR and PORT override the defaults."""
        monkeypatch.setenv("CT_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("PORT", "8080")

        config = CTIntelConfig.default()

        assert config.data.data_dir == tmp_path
        assert config.server.port == 8080

    def test_from_dict(self, tmp_path):
        """Test that every section is read from a dictionary."""
        config = CTIntelConfig.from_dict({
            "data": {"data_dir": str(tmp_path)},
            "server": {"port": "9000"},
            "brief": {"default_window_hours": 48, "meta": {"source": "unit"}},
            "logging": {"level": "DEBUG"},
        })

        assert config.data.data_dir == tmp_path
        assert config.server.port == 9000
        assert config.brief.default_window_hours == 48
        assert config.brief.meta == {"source": "unit"}
        assert config.logging.level == "DEBUG"

    def test_zero_default_window_allowed(self):
        """Test that a 0h default window is accepted."""
        config = CTIntelConfig.from_dict({"brief": {"default_window_hours": 0}})

        assert config.brief.default_window_hours == 0

    def test_negative_default_window_rejected(self):
        """Test that a negative default window raises ValueError."""
        with pytest.raises(ValueError, match="default_window_hours"):
            CTIntelConfig.from_dict({"brief": {"default_window_hours": -1}})

    def test_brief_config_rejects_negative_window(self):
        """Test that BriefConfig validates its window on construction."""
        with pytest.raises(ValueError):
            BriefConfig(default_window_hours=-5)


class TestLoadConfig:
    """Tests for YAML loading and saving."""

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, tmp_path):
        """Test that an empty YAML file yields the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path).brief.default_window_hours == 24

    def test_negative_window_in_file_rejected(self, tmp_path):
        """Test that a negative default window in YAML is rejected on load."""
        path = tmp_path / "bad.yaml"
        path.write_text("brief:\n  default_window_hours: -24\n")

        with pytest.raises(ValueError):
            load_config(path)

    def test_round_trip(self, tmp_path):
        """Test that a saved config loads back unchanged."""
        original = CTIntelConfig.from_dict({"data": {"data_dir": str(tmp_path / "scans")}, "server": {"port": 4000}})
        path = tmp_path / "config" / "ct_intel.yaml"

        save_config(original, path)
        loaded = load_config(path)

        assert loaded.to_dict() == original.to_dict()

    def test_example_config_loads(self, monkeypatch):
        """Test that the shipped example config loads."""
        monkeypatch.delenv("PORT", raising=False)
        path = Path(__file__).resolve().parent.parent / "config" / "ct_intel.yaml"

        config = load_config(path)

        assert config.server.port == 3500
        assert config.brief.meta["frequency"] == "~30 min scan interval"
