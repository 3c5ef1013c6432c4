"""Domain models."""

from dataclasses import dataclass, field
from enum import Enum, auto


@dataclass
class Project:
    """A directory that owns Terraform source files.

    Identity is the absolute ``path``; ``name`` is display-only and may be
    rewritten once by discovery to disambiguate duplicates.
    """

    name: str
    path: str
    is_initialized: bool = False


@dataclass(frozen=True)
class VarFile:
    name: str  # e.g. "dev2.tfvars"
    relative_path: str  # e.g. "variables/dev2.tfvars"
    full_path: str
    env_name: str  # e.g. "dev2"


@dataclass(frozen=True)
class BackendVarFile:
    """A backend configuration file found under ``variables/backend``.

    ``relative_path`` is the containing directory relative to the project
    root (e.g. ``variables/backend/local``).  An empty ``env_name`` marks a
    generic backend that applies to any environment.
    """

    name: str
    relative_path: str
    full_path: str
    env_name: str

    @property
    def is_generic(self) -> bool:
        return self.env_name == ""


@dataclass(frozen=True)
class BackendState:
    """What Terraform's local metadata says about the active backend."""

    is_initialized: bool = False
    backend_type: str = ""
    backend_config: dict[str, str] = field(default_factory=dict)
    detected_env: str = ""
    matched_backend: BackendVarFile | None = None


@dataclass(frozen=True)
class InitOptions:
    backend_config_file: BackendVarFile | None = None
    reconfigure: bool = False
    upgrade: bool = False
    allow_input: bool = False


class Mode(Enum):
    SINGLE_PROJECT = auto()
    MULTI_PROJECT = auto()


class EnvStatus(Enum):
    """Initialization status of an environment relative to the detected one."""

    CURRENT = auto()
    OTHER = auto()
    NOT_INITIALIZED = auto()
