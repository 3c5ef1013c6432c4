"""Tests for the command-line entry point."""

from pathlib import Path

import pytest
from conftest import write_files
from typer.testing import CliRunner

from lazytf import cli
from lazytf.models import Mode

runner = CliRunner()


class RecordingApp:
    """Replaces LazyTfApp so the CLI can be driven without a terminal."""

    instances: list["RecordingApp"] = []

    def __init__(self, projects, mode, theme=None, persist_theme=False) -> None:
        self.projects = projects
        self.mode = mode
        self.theme = theme
        self.ran = False
        RecordingApp.instances.append(self)

    def run(self) -> None:
        self.ran = True


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch):
    RecordingApp.instances = []
    monkeypatch.setattr("lazytf.cli.LazyTfApp", RecordingApp)
    monkeypatch.setattr("lazytf.config.CONFIG_PATH", tmp_path / "cfg" / "config.json")
    monkeypatch.setattr("lazytf.config._README_PATH", tmp_path / "cfg" / "README.md")
    monkeypatch.setattr("lazytf.config.THEME_CONFIG_PATH", tmp_path / "cfg" / "theme.json")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


class TestMain:
    def test_search_path_overrides_config(self, tmp_path: Path):
        """
        Given a directory with two projects passed via --search-path
        When the CLI runs
        Then the app is started in multi-project mode with both projects
        """
        write_files(tmp_path / "infra", {"a/main.tf": "", "b/main.tf": ""})

        result = runner.invoke(cli.app, ["-s", str(tmp_path / "infra")])

        assert result.exit_code == 0, result.output
        [app] = RecordingApp.instances
        assert app.ran is True
        assert app.mode is Mode.MULTI_PROJECT
        assert [p.name for p in app.projects] == ["a", "b"]
        assert (tmp_path / "cache" / "lazytf" / "lazytf.log").exists()

    def test_initialized_cwd_is_single_project(self, tmp_path: Path):
        """
        Given the working directory is an initialized project
        When the CLI runs
        Then the app opens that project in single-project mode
        """
        work = tmp_path / "work"
        (work / ".terraform").mkdir()

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 0, result.output
        [app] = RecordingApp.instances
        assert app.mode is Mode.SINGLE_PROJECT
        assert [p.path for p in app.projects] == [str(work)]

    def test_invalid_config_exits_with_error(self, tmp_path: Path):
        """
        Given config.json is not valid JSON
        When the CLI runs
        Then it exits with status 1 without starting the app
        """
        write_files(tmp_path / "cfg", {"config.json": "{oops"})

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 1
        assert "Error loading config" in result.output
        assert RecordingApp.instances == []
