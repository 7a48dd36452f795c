"""Tests for repocache.config module."""

from datetime import timedelta

import pytest
import yaml

from repocache.config import (
    DEFAULT_CONFIG,
    CacheSettings,
    get_config_file,
    load_config,
    load_settings,
    save_config,
    set_config_value,
)
from repocache.exceptions import ConfigError


class TestGetConfigFile:
    """Tests for get_config_file function."""

    def test_returns_correct_path(self, temp_dir):
        """Test that correct config path is returned."""
        config_file = get_config_file(temp_dir)
        assert config_file.name == "config.yaml"
        assert config_file.parent.name == ".repocache"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_when_missing(self, temp_dir):
        """Test that defaults are returned without creating a file."""
        assert load_config(temp_dir) == DEFAULT_CONFIG
        assert not get_config_file(temp_dir).exists()

    def test_merges_with_defaults(self, temp_dir):
        """Test that missing keys are filled from defaults."""
        save_config(temp_dir, {"ttl_seconds": 2})

        config = load_config(temp_dir)

        assert config["ttl_seconds"] == 2
        assert config["log_level"] == DEFAULT_CONFIG["log_level"]

    def test_corrupt_yaml_raises(self, temp_dir):
        """Test that unparseable config is an error."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir()
        config_file.write_text("ttl_seconds: [1, 2")

        with pytest.raises(ConfigError):
            load_config(temp_dir)

    def test_non_mapping_raises(self, temp_dir):
        """Test that a list at top level is rejected."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir()
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_config(temp_dir)

    def test_empty_file_gives_defaults(self, temp_dir):
        """Test that an empty file is treated as no overrides."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir()
        config_file.write_text("")

        assert load_config(temp_dir) == DEFAULT_CONFIG


class TestSaveConfig:
    """Tests for save_config function."""

    def test_creates_file(self, temp_dir):
        """Test that the directory and file are created."""
        save_config(temp_dir, {"log_level": "DEBUG"})

        with open(get_config_file(temp_dir)) as f:
            assert yaml.safe_load(f) == {"log_level": "DEBUG"}


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults(self, temp_dir):
        """Test default settings."""
        settings = load_settings(temp_dir)

        assert settings.ttl == timedelta(seconds=0.5)
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"

    def test_file_values(self, temp_dir):
        """Test that config.yaml values are applied."""
        save_config(temp_dir, {"ttl_seconds": 1.5, "log_format": "json"})

        settings = load_settings(temp_dir)

        assert settings.ttl_seconds == 1.5
        assert settings.log_format == "json"

    def test_env_overrides_file(self, temp_dir, monkeypatch):
        """Test that environment variables win over the file."""
        save_config(temp_dir, {"ttl_seconds": 1.5})
        monkeypatch.setenv("REPOCACHE_TTL_SECONDS", "3")
        monkeypatch.setenv("REPOCACHE_LOG_LEVEL", "DEBUG")

        settings = load_settings(temp_dir)

        assert settings.ttl_seconds == 3
        assert settings.log_level == "DEBUG"

    def test_negative_ttl_rejected(self, temp_dir):
        """Test that a negative TTL is invalid."""
        save_config(temp_dir, {"ttl_seconds": -1})

        with pytest.raises(ConfigError):
            load_settings(temp_dir)

    def test_reads_dotenv_on_load(self, temp_dir, mocker):
        """Test that .env is loaded by load_settings, not at import time."""
        load_dotenv = mocker.patch("repocache.config.load_dotenv")

        load_settings(temp_dir)

        load_dotenv.assert_called_once_with()

    def test_bad_format_rejected(self, temp_dir, monkeypatch):
        """Test that an unknown log format is invalid."""
        monkeypatch.setenv("REPOCACHE_LOG_FORMAT", "xml")

        with pytest.raises(ConfigError):
            load_settings(temp_dir)


class TestSetConfigValue:
    """Tests for set_config_value function."""

    def test_writes_coerced_value(self, temp_dir):
        """Test that the value is validated and written with the other settings."""
        settings = set_config_value(temp_dir, "ttl_seconds", "2")

        assert settings.ttl_seconds == 2.0
        with open(get_config_file(temp_dir)) as f:
            saved = yaml.safe_load(f)
        assert saved["ttl_seconds"] == 2.0
        assert saved["log_level"] == "INFO"

    def test_keeps_existing_values(self, temp_dir):
        """Test that other keys in config.yaml survive."""
        save_config(temp_dir, {"log_format": "json"})

        set_config_value(temp_dir, "log_level", "DEBUG")

        assert load_config(temp_dir)["log_format"] == "json"
        assert load_config(temp_dir)["log_level"] == "DEBUG"

    def test_unknown_key_raises(self, temp_dir):
        """Test that only known keys can be set."""
        with pytest.raises(ConfigError):
            set_config_value(temp_dir, "colour", "blue")
        assert not get_config_file(temp_dir).exists()

    def test_invalid_value_not_saved(self, temp_dir):
        """Test that an invalid value leaves the file untouched."""
        save_config(temp_dir, {"ttl_seconds": 1})

        with pytest.raises(ConfigError):
            set_config_value(temp_dir, "ttl_seconds", "-3")
        assert load_config(temp_dir)["ttl_seconds"] == 1


class TestSnapshotRoot:
    """Tests for CacheSettings.snapshot_root."""

    def test_relative_to_repo(self, temp_dir):
        """Test that a relative snapshot_dir is resolved against the repo."""
        assert CacheSettings().snapshot_root(temp_dir) == temp_dir / ".repocache"

    def test_absolute_kept(self, temp_dir):
        """Test that an absolute snapshot_dir is used as-is."""
        target = temp_dir / "elsewhere"
        assert CacheSettings(snapshot_dir=str(target)).snapshot_root(temp_dir / "repo") == target
