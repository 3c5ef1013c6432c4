"""Backend-state inference from Terraform's local metadata.

After ``terraform init`` Terraform records the active backend in
``.terraform/terraform.tfstate``::

    {"backend": {"type": "s3", "config": {"key": "dev2/terraform.tfstate", ...}}}

The environment is guessed from the path-like config values.  The guess
is a heuristic: unconventional layouts can yield no environment or the
wrong segment, and that is accepted.
"""

import json
import logging
import os

from lazytf.constants import (
    ENV_CANDIDATE_KEYS,
    NON_ENV_SEGMENTS,
    TF_LOCAL_STATE_FILE,
    TF_METADATA_DIR,
    TFSTATE_SUFFIX,
)
from lazytf.domain.paths import is_initialized
from lazytf.models import BackendState, BackendVarFile

logger = logging.getLogger(__name__)


def detect_current_backend(
    project_path: str, backend_var_files: list[BackendVarFile]
) -> BackendState:
    """Inspect *project_path* and describe the backend it is initialized with.

    Never raises: a missing ``.terraform`` directory yields the default
    (not initialized) state and an unreadable state file yields an
    initialized state with empty backend fields.
    """
    if not is_initialized(project_path):
        return BackendState()

    state_path = os.path.join(project_path, TF_METADATA_DIR, TF_LOCAL_STATE_FILE)
    try:
        with open(state_path, encoding="utf-8") as f:
            raw: object = json.load(f)
    except FileNotFoundError:
        return BackendState(is_initialized=True)
    except (OSError, ValueError) as exc:
        logger.warning("Cannot read %s: %s", state_path, exc)
        return BackendState(is_initialized=True)

    backend = raw.get("backend") if isinstance(raw, dict) else None
    if not isinstance(backend, dict):
        return BackendState(is_initialized=True)

    backend_type = backend.get("type")
    raw_config = backend.get("config")
    # Non-string values (lists, numbers, nulls) are dropped.
    config = (
        {k: v for k, v in raw_config.items() if isinstance(v, str)}
        if isinstance(raw_config, dict)
        else {}
    )

    detected_env = infer_env_from_backend_config(config)
    matched: BackendVarFile | None = None
    if detected_env:
        matched = next((b for b in backend_var_files if b.env_name == detected_env), None)

    return BackendState(
        is_initialized=True,
        backend_type=backend_type if isinstance(backend_type, str) else "",
        backend_config=config,
        detected_env=detected_env,
        matched_backend=matched,
    )


def infer_env_from_backend_config(config: dict[str, str]) -> str:
    """Guess the environment name from a backend config ("" when unknown).

    Only the first present key of ``key``, ``path``, ``prefix`` and
    ``workspace_key_prefix`` is examined.  Its value is split on ``/`` and
    the first segment that is not empty, not ``terraform``/``states`` and
    not a ``*.d`` directory wins, after stripping a ``.tfstate`` suffix.

    >>> infer_env_from_backend_config({"key": "dev2/terraform.tfstate"})
    'dev2'
    >>> infer_env_from_backend_config({"key": "terraform.tfstate.d/dev2"})
    'dev2'
    >>> infer_env_from_backend_config({"path": "states/int/terraform.tfstate"})
    'int'
    """
    for key in ENV_CANDIDATE_KEYS:
        if key not in config:
            continue
        for part in config[key].split("/"):
            if not part:
                continue
            segment = part.removesuffix(TFSTATE_SUFFIX)
            if segment in NON_ENV_SEGMENTS or segment.endswith(".d"):
                continue
            if segment:
                return segment
        return ""
    return ""


def format_backend_state(state: BackendState) -> str:
    """Render the backend state for the project detail panel."""
    if not state.is_initialized:
        return "❌ Not initialized\n\nRun 'terraform init' with a backend config to get started."

    lines = ["✅ Initialized", ""]
    if state.backend_type:
        lines.append(f"Backend Type: {state.backend_type}")
    if state.detected_env:
        lines.append(f"Current Environment: {state.detected_env}")
    if state.matched_backend is not None:
        lines.append(f"Backend Config: {state.matched_backend.name}")
        lines.append(f"Config Path: {state.matched_backend.relative_path}")
    return "\n".join(lines)
