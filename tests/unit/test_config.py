"""
Unit tests for Config class.

Tests configuration loading, defaults, environment variable overrides,
and configuration precedence.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from runtime_fingerprint.config import Config

pytestmark = pytest.mark.unit


class TestConfigDefaults:
    """Test Config class initialization with default values."""

    def test_default_values(self):
        """Test that all default values are set correctly."""
        config = Config()
        assert config.host_description is None
        assert config.host_target is None
        assert config.host_version_major is None
        assert config.netcore_marker == "Microsoft.NETCore.App"
        assert config.netcore_component == "System.Runtime"
        assert config.installed_releases == []
        assert config.log_level == "INFO"


class TestConfigFromDict:
    """Test Config creation from dictionary."""

    def test_from_dict_flat_structure(self):
        """Test creating Config from flat dictionary."""
        config = Config.from_dict(
            {
                "host_description": ".NET 6.0.1",
                "log_level": "DEBUG",
            }
        )
        assert config.host_description == ".NET 6.0.1"
        assert config.log_level == "DEBUG"

    def test_from_dict_nested_structure(self, installed_releases):
        """Test creating Config from nested sections."""
        config = Config.from_dict(
            {
                "host": {"description": ".NET Framework 4.7.2633.0", "target": "netfx", "version_major": 4},
                "overrides": {"installed_releases": installed_releases},
                "logging": {"level": "DEBUG", "file": "/tmp/fp.log"},
            }
        )
        assert config.host_description == ".NET Framework 4.7.2633.0"
        assert config.host_target == "netfx"
        assert config.host_version_major == 4
        assert config.installed_releases == installed_releases
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/fp.log"

    def test_from_dict_keeps_mapping_values(self):
        """Test that mapping-valued fields are not flattened."""
        config = Config.from_dict(
            {"overrides": {"component_origins": {"System.Runtime": "/a/b/c.dll"}}}
        )
        assert config.component_origins == {"System.Runtime": "/a/b/c.dll"}

    def test_from_dict_unknown_fields_filtered(self):
        """Test that unknown fields are filtered out."""
        config = Config.from_dict({"log_level": "WARNING", "unknown_field": "ignored"})
        assert config.log_level == "WARNING"
        assert not hasattr(config, "unknown_field")

    def test_from_dict_blank_values_use_defaults(self):
        """Test that keys left blank in YAML fall back to defaults."""
        config = Config.from_dict(
            {
                "overrides": {
                    "installed_releases": None,
                    "component_origins": None,
                    "netcore_marker": None,
                },
                "logging": {"level": None},
            }
        )
        assert config.installed_releases == []
        assert config.component_origins == {}
        assert config.netcore_marker == "Microsoft.NETCore.App"
        assert config.log_level == "INFO"


class TestConfigFromFile:
    """Test Config creation from YAML file."""

    def test_from_file_valid_yaml(self):
        """Test loading Config from valid YAML file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump({"host": {"description": ".NET 7.0.0"}}, f)
            path = f.name

        try:
            config = Config.from_file(path)
            assert config.host_description == ".NET 7.0.0"
        finally:
            os.unlink(path)

    def test_from_file_empty(self, tmp_path):
        """Test that an empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert Config.from_file(path) == Config()

    def test_from_file_missing(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config.from_file(tmp_path / "missing.yaml")


class TestConfigLoad:
    """Test full configuration resolution."""

    def test_load_explicit_path(self, tmp_path, clean_env):
        """Test loading from an explicit path."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: DEBUG\n")

        assert Config.load(path).log_level == "DEBUG"

    def test_load_no_files(self, clean_env):
        """Test defaults when no config file exists."""
        with patch("runtime_fingerprint.config.DEFAULT_CONFIG_PATHS", [Path("/nonexistent/config.yaml")]):
            config = Config.load()

        assert config == Config()

    def test_load_default_path(self, tmp_path, clean_env):
        """Test that the first existing default path is used."""
        path = tmp_path / "config.yaml"
        path.write_text("host:\n  target: netcore\n")

        with patch("runtime_fingerprint.config.DEFAULT_CONFIG_PATHS", [tmp_path / "nope.yaml", path]):
            config = Config.load()

        assert config.host_target == "netcore"

    def test_env_overrides_file(self, tmp_path, clean_env, monkeypatch):
        """Test environment variables take precedence over file values."""
        path = tmp_path / "config.yaml"
        path.write_text("host:\n  description: .NET 6.0.1\n  version_major: 6\n")
        monkeypatch.setenv("FINGERPRINT_HOST_DESCRIPTION", ".NET Framework 4.8.4084.0")
        monkeypatch.setenv("FINGERPRINT_HOST_VERSION_MAJOR", "4")

        config = Config.load(path)

        assert config.host_description == ".NET Framework 4.8.4084.0"
        assert config.host_version_major == 4

    def test_env_log_level(self, clean_env, monkeypatch):
        """Test log level from environment."""
        monkeypatch.setenv("FINGERPRINT_LOG_LEVEL", "ERROR")
        with patch("runtime_fingerprint.config.DEFAULT_CONFIG_PATHS", []):
            assert Config.load().log_level == "ERROR"


class TestConfigSave:
    """Test configuration serialization."""

    def test_save_and_reload(self, tmp_path, netfx_config):
        """Test that a saved config loads back unchanged."""
        path = tmp_path / "out" / "config.yaml"

        netfx_config.save(path)

        assert Config.from_file(path) == netfx_config

    def test_to_dict_sections(self):
        """Test dictionary sections."""
        data = Config().to_dict()

        assert set(data) == {"host", "overrides", "logging"}
        assert data["logging"]["level"] == "INFO"
