"""Interactive selection flow: project → environment → backend → init.

``Session`` owns everything the user has selected and decides which modal
comes next.  It knows nothing about Textual: every decision is returned as
a ``Prompt`` (confirm / select / error) tagged with a pending action, and
the UI hands that action back through ``confirm``, ``select`` or ``cancel``
once the user answers.  A confirmed init or SSO login comes back as an
intent for the UI to execute; ``finish`` must be called when it ends.

Backend resolution for an environment:

- no candidate backend: ERROR prompt, the user has to create one
- one candidate: CONFIRM prompt for that backend
- several candidates: SELECT prompt, then CONFIRM for the chosen one
"""

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum, auto

from lazytf.aws.sso import SSOSession, sso_login_invocation
from lazytf.domain.backends import (
    discover_backend_var_files,
    format_backend_info,
    match_backends_for_env,
)
from lazytf.domain.state import detect_current_backend, format_backend_state
from lazytf.domain.varfiles import discover_var_files, env_names, find_var_file_by_env_name
from lazytf.models import (
    BackendState,
    BackendVarFile,
    EnvStatus,
    InitOptions,
    Mode,
    Project,
    VarFile,
)
from lazytf.terraform import init_invocation


class View(Enum):
    PROJECT_LIST = auto()
    PROJECT_DETAIL = auto()


class PromptKind(Enum):
    CONFIRM = auto()
    SELECT = auto()
    ERROR = auto()


@dataclass(frozen=True)
class PendingEnvInit:
    """The selected environment is not the initialized one; offer to init it."""

    env_name: str


@dataclass(frozen=True)
class PendingEnvChoice:
    env_names: tuple[str, ...]


@dataclass(frozen=True)
class PendingBackendChoice:
    env_name: str
    candidates: tuple[BackendVarFile, ...]


@dataclass(frozen=True)
class PendingInit:
    project_path: str
    env_name: str
    backend: BackendVarFile


@dataclass(frozen=True)
class PendingSsoChoice:
    sessions: tuple[SSOSession, ...]


PendingAction = (
    PendingEnvInit | PendingEnvChoice | PendingBackendChoice | PendingInit | PendingSsoChoice
)


@dataclass(frozen=True)
class Prompt:
    kind: PromptKind
    title: str
    message: str = ""
    items: tuple[str, ...] = ()
    action: PendingAction | None = None


@dataclass(frozen=True)
class InitIntent:
    project_path: str
    env_name: str
    options: InitOptions

    def invocation(self) -> tuple[str, list[str], str | None]:
        return init_invocation(self.project_path, self.options)


@dataclass(frozen=True)
class SsoLoginIntent:
    session: SSOSession

    def invocation(self) -> tuple[str, list[str], str | None]:
        return sso_login_invocation(self.session)


Intent = InitIntent | SsoLoginIntent
Step = Prompt | InitIntent | SsoLoginIntent | None


@dataclass
class SelectionContext:
    """Discovery snapshot and selection for the open project."""

    project: Project
    var_files: list[VarFile]
    backend_files: list[BackendVarFile]
    backend_state: BackendState
    selected_var_file: VarFile | None = None
    selected_index: int = -1


class NoProjectSelected(Exception):
    """Raised when a project-level operation is used from the project list."""


def _error(title: str, message: str) -> Prompt:
    return Prompt(kind=PromptKind.ERROR, title=title, message=message)


_BUSY = _error("❌ Command Running", "Another command is still running. Wait for it to finish.")


class Session:
    """State of one interactive lazytf session."""

    def __init__(self, projects: list[Project], mode: Mode = Mode.MULTI_PROJECT) -> None:
        self.projects = list(projects)
        self.mode = mode
        self.view = View.PROJECT_LIST
        self.context: SelectionContext | None = None
        self.busy = False
        if mode is Mode.SINGLE_PROJECT and self.projects:
            self.select_project(0)

    # Navigation

    def select_project(self, index: int) -> SelectionContext:
        """Open the project at *index*, taking a fresh discovery snapshot."""
        project = self.projects[index]
        backend_files = discover_backend_var_files(project.path)
        self.context = SelectionContext(
            project=project,
            var_files=discover_var_files(project.path),
            backend_files=backend_files,
            backend_state=detect_current_backend(project.path, backend_files),
        )
        self.view = View.PROJECT_DETAIL
        return self.context

    def back(self) -> bool:
        """Drop the selection and return to the project list.

        Returns False (and does nothing) in single-project mode or when
        already on the project list.
        """
        if self.view is not View.PROJECT_DETAIL or self.mode is Mode.SINGLE_PROJECT:
            return False
        self.context = None
        self.view = View.PROJECT_LIST
        return True

    def _require_context(self) -> SelectionContext:
        if self.context is None:
            raise NoProjectSelected("no project is open")
        return self.context

    @property
    def initialized_env(self) -> str:
        if self.context is None:
            return ""
        return self.context.backend_state.detected_env

    def env_status(self, var_file: VarFile) -> EnvStatus:
        state = self._require_context().backend_state
        if not state.is_initialized:
            return EnvStatus.NOT_INITIALIZED
        if state.detected_env and state.detected_env == var_file.env_name:
            return EnvStatus.CURRENT
        return EnvStatus.OTHER

    # Decisions

    def select_var_file(self, index: int) -> Prompt | None:
        """Select a var file; offer to init it unless it is already active."""
        ctx = self._require_context()
        var_file = ctx.var_files[index]
        ctx.selected_var_file = var_file
        ctx.selected_index = index
        if self.env_status(var_file) is EnvStatus.CURRENT:
            return None
        return Prompt(
            kind=PromptKind.CONFIRM,
            title="⚠️  Environment Not Initialized",
            message=(
                f'Environment "{var_file.env_name}" is not initialized.\n\n'
                "Terraform commands won't work until you initialize it.\n\n"
                "Initialize now?"
            ),
            action=PendingEnvInit(var_file.env_name),
        )

    def request_init(self) -> Prompt:
        """Ask which environment to initialize."""
        ctx = self._require_context()
        names = tuple(env_names(ctx.var_files))
        if not names:
            return _error(
                "❌ No Environments Found",
                f"No .tfvars files found in {ctx.project.name}.",
            )
        return Prompt(
            kind=PromptKind.SELECT,
            title="Terraform Init",
            message=f"Choose an environment to init for {ctx.project.name}",
            items=names,
            action=PendingEnvChoice(names),
        )

    def choose_environment(self, env_name: str) -> Prompt:
        """Resolve the backend files for *env_name* into the next prompt."""
        ctx = self._require_context()
        var_file, index = find_var_file_by_env_name(env_name, ctx.var_files)
        if var_file is not None:
            ctx.selected_var_file = var_file
            ctx.selected_index = index

        candidates = match_backends_for_env(env_name, ctx.backend_files)
        if not candidates:
            return _error(
                "❌ No Backend Config Found",
                f"No backend configuration found for environment: {env_name}\n\n"
                f"Please create a backend configuration file (e.g., backend_{env_name}.tfvars) "
                "to initialize this environment.",
            )
        if len(candidates) == 1:
            return self._confirm_init(env_name, candidates[0])
        return Prompt(
            kind=PromptKind.SELECT,
            title="Select Backend Config",
            message=(
                f"Multiple backend configurations found for environment {env_name}. "
                "Please select one:"
            ),
            items=tuple(f"{b.name} ({os.path.basename(b.relative_path)})" for b in candidates),
            action=PendingBackendChoice(env_name, tuple(candidates)),
        )

    def _confirm_init(self, env_name: str, backend: BackendVarFile) -> Prompt:
        project = self._require_context().project
        return Prompt(
            kind=PromptKind.CONFIRM,
            title="Confirm Terraform Init",
            message=(
                f"Initialize project {project.name} with environment {env_name}?\n\n"
                f"Using backend: {backend.name} ({backend.relative_path})"
            ),
            action=PendingInit(project.path, env_name, backend),
        )

    def request_sso_login(self, sessions: list[SSOSession]) -> Prompt:
        if not sessions:
            return _error("❌ No SSO Sessions", "No [sso-session] entries found in the AWS config.")
        return Prompt(
            kind=PromptKind.SELECT,
            title="AWS SSO Login",
            message="Choose an SSO session to log into",
            items=tuple(s.name for s in sessions),
            action=PendingSsoChoice(tuple(sessions)),
        )

    # Answers

    def confirm(self, action: PendingAction) -> Step:
        """Apply a confirmed CONFIRM prompt."""
        if isinstance(action, PendingEnvInit):
            return self.choose_environment(action.env_name)
        if isinstance(action, PendingInit):
            if self.busy:
                return _BUSY
            self.busy = True
            return InitIntent(
                project_path=action.project_path,
                env_name=action.env_name,
                options=InitOptions(
                    backend_config_file=action.backend,
                    reconfigure=True,
                    upgrade=True,
                    allow_input=False,
                ),
            )
        raise ValueError(f"{type(action).__name__} cannot be confirmed")

    def select(self, action: PendingAction, index: int) -> Step:
        """Apply the item picked in a SELECT prompt."""
        if isinstance(action, PendingEnvChoice):
            return self.choose_environment(action.env_names[index])
        if isinstance(action, PendingBackendChoice):
            return self._confirm_init(action.env_name, action.candidates[index])
        if isinstance(action, PendingSsoChoice):
            if self.busy:
                return _BUSY
            self.busy = True
            return SsoLoginIntent(action.sessions[index])
        raise ValueError(f"{type(action).__name__} is not a selection")

    def cancel(self, action: PendingAction) -> Step:
        """Declining any prompt leaves the session untouched."""
        return None

    def finish(self, intent: Intent) -> None:
        """Record that *intent* ended, successfully or not.

        After an init the backend state is always re-read from disk because
        the run changed Terraform's metadata.
        """
        self.busy = False
        if not isinstance(intent, InitIntent):
            return
        state = detect_current_backend(
            intent.project_path,
            self.context.backend_files
            if self.context is not None and self.context.project.path == intent.project_path
            else discover_backend_var_files(intent.project_path),
        )
        for i, project in enumerate(self.projects):
            if project.path == intent.project_path:
                self.projects[i] = dataclasses.replace(
                    project, is_initialized=state.is_initialized
                )
        if self.context is not None and self.context.project.path == intent.project_path:
            self.context.backend_state = state
            self.context.project = dataclasses.replace(
                self.context.project, is_initialized=state.is_initialized
            )

    # Rendering helpers

    def describe_project(self) -> str:
        ctx = self._require_context()
        return (
            f"Project: {ctx.project.name}\n"
            f"Path: {ctx.project.path}\n\n"
            "--- Backend Status ---\n"
            f"{format_backend_state(ctx.backend_state)}\n\n"
            "--- Available Environments ---\n"
            f"Var Files: {len(ctx.var_files)}\n"
            f"Backend Configs: {len(ctx.backend_files)}"
        )

    def describe_environment(self) -> str:
        """Describe the selected var file, or the project when none is selected."""
        ctx = self._require_context()
        var_file = ctx.selected_var_file
        if var_file is None:
            return self.describe_project()

        status = self.env_status(var_file)
        if status is EnvStatus.CURRENT:
            status_text = "✅ This environment is currently initialized"
        elif status is EnvStatus.OTHER:
            detected = ctx.backend_state.detected_env or "unknown"
            status_text = f"⚠️  Different environment is initialized ({detected})"
        else:
            status_text = "❌ Not initialized"

        backends = match_backends_for_env(var_file.env_name, ctx.backend_files)
        return (
            f"Environment: {var_file.env_name}\n"
            f"Status: {status_text}\n\n"
            f"Var File: {var_file.relative_path}\n"
            f"Full Path: {var_file.full_path}\n\n"
            f"Backend Configuration:\n{format_backend_info(backends)}"
        )
