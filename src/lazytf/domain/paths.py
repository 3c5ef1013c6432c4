"""Path helpers shared by the discovery functions."""

import fnmatch
import os
from pathlib import Path

from lazytf.constants import TF_EXTENSION, TF_METADATA_DIR


class HomeDirectoryError(Exception):
    """Raised when ``~`` must be expanded but the home directory is unknown."""


def expand_home(path: str) -> str:
    """Replace a single leading ``~`` with the user's home directory.

    Paths that do not start with ``~`` are returned unchanged.
    """
    if not path.startswith("~"):
        return path
    try:
        home = str(Path.home())
    except RuntimeError as exc:
        raise HomeDirectoryError(f"Cannot expand {path!r}: {exc}") from exc
    return home + path[1:]


def should_ignore(path: str, patterns: list[str]) -> bool:
    """Return True if the base name of *path* glob-matches any pattern.

    A malformed pattern (an unterminated ``[`` class) never matches.
    """
    base = os.path.basename(os.path.normpath(path))
    return any(
        not _is_malformed(pattern) and fnmatch.fnmatchcase(base, pattern) for pattern in patterns
    )


def _is_malformed(pattern: str) -> bool:
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            i += 1
            continue
        j = i + 1
        if j < n and pattern[j] in "!^":
            j += 1
        # A "]" directly after the opening bracket is a literal member.
        end = pattern.find("]", j + 1)
        if end == -1:
            return True
        i = end + 1
    return False


def is_initialized(path: str) -> bool:
    """Return True if *path* contains a ``.terraform`` directory."""
    return os.path.isdir(os.path.join(path, TF_METADATA_DIR))


def is_terraform_project(path: str) -> bool:
    """Return True if *path* directly contains at least one ``*.tf`` file."""
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.name.endswith(TF_EXTENSION) and not entry.is_dir():
                    return True
    except OSError:
        return False
    return False
