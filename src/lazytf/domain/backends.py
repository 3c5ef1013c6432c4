"""Backend-file discovery and environment matching.

Backend configuration files live anywhere under ``variables/backend`` and
are named after the environment they configure:

- ``backend_dev2.tfvars`` configures ``dev2``
- ``backend.tfvars`` is generic and applies to any environment
- any other ``<stem>.tfvars`` configures ``<stem>``

These functions do no writes and never raise for a missing directory.
"""

import os
from collections.abc import Iterator

from lazytf.constants import (
    BACKEND_DIR,
    BACKEND_PREFIX,
    GENERIC_BACKEND_STEM,
    TFVARS_EXTENSION,
)
from lazytf.models import BackendVarFile


def discover_backend_var_files(project_path: str) -> list[BackendVarFile]:
    """Return every ``*.tfvars`` file below ``variables/backend``, in walk order."""
    backend_dir = os.path.join(project_path, *BACKEND_DIR)
    if not os.path.isdir(backend_dir):
        return []

    backends: list[BackendVarFile] = []
    for path in _walk_files(backend_dir):
        name = os.path.basename(path)
        if not name.endswith(TFVARS_EXTENSION):
            continue
        backends.append(
            BackendVarFile(
                name=name,
                relative_path=os.path.relpath(os.path.dirname(path), project_path),
                full_path=path,
                env_name=extract_env_from_backend_file(name),
            )
        )
    return backends


def _walk_files(directory: str) -> Iterator[str]:
    """Yield files depth-first with entries visited in lexical order.

    Files and subdirectories are interleaved by name; unreadable
    directories are skipped.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(entry.path)
        else:
            yield entry.path


def extract_env_from_backend_file(filename: str) -> str:
    """Return the environment a backend file configures ("" when generic).

    >>> extract_env_from_backend_file("backend_dev2.tfvars")
    'dev2'
    >>> extract_env_from_backend_file("backend.tfvars")
    ''
    """
    stem = filename.removesuffix(TFVARS_EXTENSION)
    if stem.startswith(BACKEND_PREFIX):
        return stem.removeprefix(BACKEND_PREFIX)
    if stem == GENERIC_BACKEND_STEM:
        return ""
    return stem


def match_backends_for_env(env_name: str, backends: list[BackendVarFile]) -> list[BackendVarFile]:
    """Return the backend files that apply to *env_name*.

    Exact (case-sensitive) matches win and are returned in scan order.
    Without one, a generic backend is returned on its own; if there are
    several generic files the last one scanned is used.  Returns an empty
    list when nothing applies.
    """
    matches: list[BackendVarFile] = []
    generic: BackendVarFile | None = None
    for backend in backends:
        if backend.is_generic:
            generic = backend
        elif backend.env_name == env_name:
            matches.append(backend)

    if matches:
        return matches
    if generic is not None:
        return [generic]
    return []


def format_backend_info(backends: list[BackendVarFile]) -> str:
    """Describe the candidate backend files for the detail panel."""
    if not backends:
        return "No backend configuration found"
    if len(backends) == 1:
        b = backends[0]
        return f"{b.name} ({b.relative_path})"
    lines = ["Multiple backend options available:"]
    lines.extend(f"  • {b.name} ({b.relative_path})" for b in backends)
    return "\n".join(lines)
