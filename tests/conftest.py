"""Shared fixtures: throwaway Terraform project trees on disk."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create *files* (relative path -> content) under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def write_backend_state(project: Path, config: dict[str, object], backend_type: str = "s3") -> None:
    """Write the ``.terraform/terraform.tfstate`` a successful init leaves behind."""
    metadata = project / ".terraform"
    metadata.mkdir(parents=True, exist_ok=True)
    state = {"version": 3, "backend": {"type": backend_type, "config": config}}
    (metadata / "terraform.tfstate").write_text(json.dumps(state))


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Build a project directory containing main.tf plus any extra files."""

    def _make(name: str = "network", files: dict[str, str] | None = None) -> Path:
        project = tmp_path / name
        write_files(project, {"main.tf": "", **(files or {})})
        return project

    return _make


@pytest.fixture
def env_project(make_project) -> Path:
    """A project with two environments and one backend file per environment."""
    return make_project(
        "network",
        {
            "variables/dev.tfvars": "",
            "variables/prod.tfvars": "",
            "variables/backend/backend_dev.tfvars": "",
            "variables/backend/backend_prod.tfvars": "",
        },
    )
