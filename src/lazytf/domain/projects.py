"""Terraform project discovery.

Walks the configured search roots, records every directory that directly
contains ``*.tf`` files, and never descends into a project once found (so
a project's ``.terraform`` or module directories are not reported as
nested projects).
"""

import logging
import os
from collections import Counter

from lazytf.domain.paths import expand_home, is_initialized, is_terraform_project, should_ignore
from lazytf.models import Mode, Project

logger = logging.getLogger(__name__)


def discover_projects(roots: list[str], ignore_patterns: list[str]) -> list[Project]:
    """Scan *roots* depth-first and return the Terraform projects found.

    Unreadable directories and missing roots are skipped.  Raises
    ``HomeDirectoryError`` if a root starts with ``~`` and the home
    directory cannot be resolved.
    """
    projects: list[Project] = []
    for root in roots:
        root = expand_home(root)
        if should_ignore(root, ignore_patterns):
            continue
        # os.walk swallows errors from unreadable directories when onerror is unset.
        for dirpath, dirnames, _filenames in os.walk(root):
            if is_terraform_project(dirpath):
                path = os.path.abspath(dirpath)
                projects.append(
                    Project(
                        name=os.path.basename(path),
                        path=path,
                        is_initialized=is_initialized(path),
                    )
                )
                dirnames[:] = []
                continue
            dirnames[:] = sorted(d for d in dirnames if not should_ignore(d, ignore_patterns))

    projects = make_names_unique(projects)
    logger.debug("Discovered %d project(s) under %s", len(projects), roots)
    return projects


def make_names_unique(projects: list[Project]) -> list[Project]:
    """Drop duplicate paths, then prefix clashing names with their parent dir.

    Only names shared after deduplication are rewritten, as
    ``"<parent>/<name>"``.  This is a single pass; a clash introduced by the
    rename itself is left alone.
    """
    seen: set[str] = set()
    unique: list[Project] = []
    for project in projects:
        path = os.path.abspath(project.path)
        if path in seen:
            continue
        seen.add(path)
        unique.append(project)

    counts = Counter(p.name for p in unique)
    for project in unique:
        if counts[project.name] > 1:
            parent = os.path.basename(os.path.dirname(os.path.abspath(project.path)))
            project.name = f"{parent}/{project.name}"
    return unique


def determine_mode(cwd: str) -> tuple[Mode, Project | None]:
    """Open straight into *cwd* when it is an initialized Terraform project."""
    path = os.path.abspath(cwd)
    if is_initialized(path):
        project = Project(name=os.path.basename(path), path=path, is_initialized=True)
        return Mode.SINGLE_PROJECT, project
    return Mode.MULTI_PROJECT, None
