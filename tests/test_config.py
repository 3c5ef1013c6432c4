"""Unit tests for config loading, validation, and persistence."""

import json
from pathlib import Path

import pytest

from lazytf.config import (
    Config,
    ConfigError,
    load_config,
    load_theme,
    save_config,
    save_theme,
)
from lazytf.constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_SEARCH_PATHS


def _write(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


@pytest.fixture
def cfg_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "lazytf" / "config.json"
    monkeypatch.setattr("lazytf.config.CONFIG_PATH", path)
    monkeypatch.setattr("lazytf.config._README_PATH", tmp_path / "lazytf" / "README.md")
    return path


class TestConfigModel:
    def test_defaults(self):
        """
        Given no values
        When Config is constructed
        Then the default search paths and ignore patterns are used
        """
        config = Config()
        assert config.search_paths == DEFAULT_SEARCH_PATHS
        assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS

    def test_defaults_are_copies(self):
        """
        Given two Config instances
        When one list is mutated
        Then the other instance and the defaults are unaffected
        """
        first, second = Config(), Config()
        first.search_paths.append("/tmp")
        assert second.search_paths == DEFAULT_SEARCH_PATHS


class TestLoadConfig:
    def test_bootstraps_when_file_missing(self, cfg_path: Path, tmp_path: Path):
        """
        Given no config file exists
        When load_config is called
        Then defaults are returned and config.json plus README are created
        """
        result = load_config()

        assert result == Config()
        assert json.loads(cfg_path.read_text()) == Config().model_dump()
        assert (tmp_path / "lazytf" / "README.md").exists()

    def test_partial_config_falls_back(self, cfg_path: Path):
        """
        Given config.json only sets search_paths
        When load_config is called
        Then ignore_patterns keeps its default
        """
        _write(cfg_path, {"search_paths": ["~/infra"]})

        result = load_config()

        assert result.search_paths == ["~/infra"]
        assert result.ignore_patterns == DEFAULT_IGNORE_PATTERNS

    def test_underscore_keys_are_stripped(self, cfg_path: Path):
        """
        Given config.json contains a "_comment" key
        When load_config is called
        Then the key is ignored
        """
        _write(cfg_path, {"_comment": "hello", "ignore_patterns": ["tmp-*"]})

        assert load_config().ignore_patterns == ["tmp-*"]

    def test_invalid_json_raises_config_error(self, cfg_path: Path):
        """
        Given config.json contains malformed JSON
        When load_config is called
        Then ConfigError is raised
        """
        cfg_path.parent.mkdir(parents=True)
        cfg_path.write_text("{bad json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config()

    def test_non_object_root_raises_config_error(self, cfg_path: Path):
        """
        Given config.json contains a JSON array
        When load_config is called
        Then ConfigError is raised
        """
        _write(cfg_path, ["."])

        with pytest.raises(ConfigError, match="JSON object"):
            load_config()

    def test_wrong_type_raises_config_error(self, cfg_path: Path):
        """
        Given search_paths is a number
        When load_config is called
        Then ConfigError is raised
        """
        _write(cfg_path, {"search_paths": 5})

        with pytest.raises(ConfigError, match="Invalid config"):
            load_config()


class TestSaveConfig:
    def test_round_trip(self, cfg_path: Path):
        """
        Given a Config with custom values
        When it is saved and loaded again
        Then the same values come back
        """
        config = Config(search_paths=["/srv/tf"], ignore_patterns=[".git"])

        save_config(config)

        assert load_config() == config


class TestTheme:
    def test_missing_theme_is_none(self, tmp_path: Path, monkeypatch):
        """
        Given no theme.json
        When the theme is loaded
        Then None is returned
        """
        monkeypatch.setattr("lazytf.config.THEME_CONFIG_PATH", tmp_path / "theme.json")
        assert load_theme() is None

    def test_saved_theme_is_loaded(self, tmp_path: Path, monkeypatch):
        """
        Given a theme was saved
        When the theme is loaded
        Then the saved name is returned
        """
        monkeypatch.setattr("lazytf.config.THEME_CONFIG_PATH", tmp_path / "x" / "theme.json")

        save_theme("nord")

        assert load_theme() == "nord"

    def test_corrupt_theme_is_none(self, tmp_path: Path, monkeypatch):
        """
        Given theme.json is not a JSON object
        When the theme is loaded
        Then None is returned
        """
        path = tmp_path / "theme.json"
        path.write_text("[]")
        monkeypatch.setattr("lazytf.config.THEME_CONFIG_PATH", path)

        assert load_theme() is None
