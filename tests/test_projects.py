"""Unit tests for project discovery and mode selection."""

import os
from pathlib import Path

from conftest import write_files

from lazytf.domain.projects import determine_mode, discover_projects, make_names_unique
from lazytf.models import Mode, Project


class TestDiscoverProjects:
    def test_finds_projects_in_lexical_order(self, tmp_path: Path):
        """
        Given two sibling projects
        When discovery runs on their parent
        Then both are returned, sorted by directory name, with absolute paths
        """
        write_files(tmp_path, {"vpc/main.tf": "", "dns/main.tf": ""})

        projects = discover_projects([str(tmp_path)], [])

        assert [p.name for p in projects] == ["dns", "vpc"]
        assert all(os.path.isabs(p.path) for p in projects)

    def test_does_not_descend_into_projects(self, tmp_path: Path):
        """
        Given a project with a nested module directory containing .tf files
        When discovery runs
        Then only the outer project is reported
        """
        write_files(tmp_path, {"app/main.tf": "", "app/modules/db/main.tf": ""})

        projects = discover_projects([str(tmp_path)], [])

        assert [p.path for p in projects] == [os.path.abspath(tmp_path / "app")]

    def test_ignored_directories_are_pruned(self, tmp_path: Path):
        """
        Given a project below a directory matching an ignore pattern
        When discovery runs
        Then that project is not reported
        """
        write_files(tmp_path, {"node_modules/pkg/main.tf": "", "live/main.tf": ""})

        projects = discover_projects([str(tmp_path)], ["node_modules"])

        assert [p.name for p in projects] == ["live"]

    def test_ignored_root_is_skipped(self, tmp_path: Path):
        """
        Given a search root whose own name matches an ignore pattern
        When discovery runs
        Then nothing under it is reported
        """
        write_files(tmp_path, {"vendor/mod/main.tf": ""})

        assert discover_projects([str(tmp_path / "vendor")], ["vendor"]) == []

    def test_missing_root_is_skipped(self, tmp_path: Path):
        """
        Given a search root that does not exist
        When discovery runs
        Then an empty list is returned without raising
        """
        assert discover_projects([str(tmp_path / "nope")], []) == []

    def test_overlapping_roots_deduplicated(self, tmp_path: Path):
        """
        Given the same project reachable from two search roots
        When discovery runs
        Then it is reported once
        """
        write_files(tmp_path, {"infra/vpc/main.tf": ""})

        projects = discover_projects([str(tmp_path), str(tmp_path / "infra")], [])

        assert len(projects) == 1
        assert projects[0].name == "vpc"

    def test_same_name_disambiguated_by_parent(self, tmp_path: Path):
        """
        Given two projects named "network" under different parents
        When discovery runs
        Then both names are prefixed with their parent directory
        """
        write_files(tmp_path, {"aws/network/main.tf": "", "gcp/network/main.tf": ""})

        projects = discover_projects([str(tmp_path)], [])

        assert sorted(p.name for p in projects) == ["aws/network", "gcp/network"]

    def test_initialized_flag(self, tmp_path: Path):
        """
        Given one project with a .terraform directory and one without
        When discovery runs
        Then only the first is flagged as initialized
        """
        write_files(tmp_path, {"a/main.tf": "", "b/main.tf": ""})
        (tmp_path / "a" / ".terraform").mkdir()

        flags = {p.name: p.is_initialized for p in discover_projects([str(tmp_path)], [])}

        assert flags == {"a": True, "b": False}


class TestMakeNamesUnique:
    def test_unique_names_untouched(self):
        """
        Given projects with distinct names
        When names are made unique
        Then nothing is renamed
        """
        projects = [Project("a", "/x/a"), Project("b", "/y/b")]
        assert [p.name for p in make_names_unique(projects)] == ["a", "b"]

    def test_duplicate_paths_dropped_first(self):
        """
        Given the same path listed twice
        When names are made unique
        Then the duplicate is dropped and the name keeps its plain form
        """
        projects = [Project("a", "/x/a"), Project("a", "/x/a")]

        result = make_names_unique(projects)

        assert len(result) == 1
        assert result[0].name == "a"


class TestDetermineMode:
    def test_initialized_cwd_is_single_project(self, tmp_path: Path):
        """
        Given the working directory contains .terraform
        When the mode is determined
        Then it is single-project mode with that directory as the project
        """
        (tmp_path / ".terraform").mkdir()

        mode, project = determine_mode(str(tmp_path))

        assert mode is Mode.SINGLE_PROJECT
        assert project is not None
        assert project.path == str(tmp_path)
        assert project.name == tmp_path.name
        assert project.is_initialized is True

    def test_plain_cwd_is_multi_project(self, tmp_path: Path):
        """
        Given the working directory has no .terraform directory
        When the mode is determined
        Then it is multi-project mode with no project
        """
        assert determine_mode(str(tmp_path)) == (Mode.MULTI_PROJECT, None)


class TestUnreadableDirectories:
    def test_unreadable_directory_is_skipped(self, tmp_path: Path, monkeypatch):
        """
        Given two sibling projects, one of which cannot be listed
        When discovery runs
        Then the readable sibling is still found and nothing is raised
        """
        write_files(tmp_path, {"locked/main.tf": "", "open/main.tf": ""})
        locked = str(tmp_path / "locked")
        real_scandir = os.scandir

        def guarded_scandir(path="."):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", guarded_scandir)

        projects = discover_projects([str(tmp_path)], [])

        assert [p.name for p in projects] == ["open"]
