"""Var-file discovery in the conventional project locations."""

import os

from lazytf.constants import TFVARS_EXTENSION, VAR_FILE_DIRS
from lazytf.models import VarFile


def discover_var_files(project_path: str) -> list[VarFile]:
    """Return every ``*.tfvars`` file in the root, variables/, env/ and tfvars/.

    Each directory is read non-recursively and in file-name order.  The same
    environment may appear twice when it exists in two directories; both
    entries are kept so the ambiguity stays visible.
    """
    var_files: list[VarFile] = []
    for directory in VAR_FILE_DIRS:
        dir_path = os.path.join(project_path, directory)
        if not os.path.isdir(dir_path):
            continue
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            continue

        for entry in entries:
            if entry.is_dir() or not entry.name.endswith(TFVARS_EXTENSION):
                continue
            relative = entry.name if directory == "." else os.path.join(directory, entry.name)
            var_files.append(
                VarFile(
                    name=entry.name,
                    relative_path=relative,
                    full_path=os.path.join(project_path, relative),
                    env_name=entry.name.removesuffix(TFVARS_EXTENSION),
                )
            )
    return var_files


def env_names(var_files: list[VarFile]) -> list[str]:
    return [vf.env_name for vf in var_files]


def find_var_file_by_env_name(
    env_name: str, var_files: list[VarFile]
) -> tuple[VarFile | None, int]:
    """Return the first var file for *env_name* and its index, or (None, -1)."""
    for i, vf in enumerate(var_files):
        if vf.env_name == env_name:
            return vf, i
    return None, -1
