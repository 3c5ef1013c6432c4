"""Main application."""

from collections.abc import AsyncIterator, Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import DataTable, Footer, Header

from lazytf.aws.sso import AwsConfigError, SSOSession, discover_sso_sessions
from lazytf.config import save_theme
from lazytf.constants import APP_SUBTITLE, APP_TITLE
from lazytf.executor import CommandCompleted, CommandEvent, OutputLine, stream_command
from lazytf.models import Mode, Project
from lazytf.screens.confirm import ConfirmScreen
from lazytf.screens.error import ErrorScreen
from lazytf.screens.help import HelpScreen
from lazytf.screens.select import SelectScreen
from lazytf.session import Intent, Prompt, PromptKind, Session, Step, View
from lazytf.widgets.detail_panel import DetailPanel
from lazytf.widgets.item_table import ItemTable

Runner = Callable[[str, list[str], str | None], AsyncIterator[CommandEvent]]

# Actions that must not fire while a modal owns the keyboard.
_VIEW_ACTIONS = {"init", "back", "sso_login", "toggle_help", "quit"}


class LazyTfApp(App):
    """lazytf: Terraform project TUI."""

    CSS_PATH = "app.tcss"
    TITLE = APP_TITLE

    running: reactive[bool] = reactive(False)

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "toggle_help", "Help"),
        Binding("i", "init", "Init"),
        Binding("backspace", "back", "Back"),
        Binding("p", "back", show=False),
        Binding("escape", "back", show=False),
        Binding("a", "sso_login", "SSO login"),
    ]

    def __init__(
        self,
        projects: list[Project] | None = None,
        mode: Mode = Mode.MULTI_PROJECT,
        runner: Runner | None = None,
        sso_sessions: Callable[[], list[SSOSession]] | None = None,
        theme: str | None = None,
        persist_theme: bool = False,
    ) -> None:
        super().__init__()
        self._session = Session(projects or [], mode)
        self._runner: Runner = runner or stream_command
        self._load_sso_sessions = sso_sessions or discover_sso_sessions
        self._theme_name = theme
        self._persist_theme = persist_theme

    @property
    def session(self) -> Session:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            yield ItemTable(id="sidebar")
            yield DetailPanel(id="main")
        yield Footer()

    def on_mount(self) -> None:
        if self._theme_name and self._theme_name in self.available_themes:
            self.theme = self._theme_name
        self._render_view()
        self._get_table().focus()

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes when running with a real config."""
        if self._persist_theme:
            save_theme(theme)

    def watch_running(self, running: bool) -> None:
        self._update_subtitle()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Route every key to the open modal, if there is one."""
        if action in _VIEW_ACTIONS and isinstance(self.screen, ModalScreen):
            return False
        return True

    def _get_table(self) -> ItemTable:
        return self.query_one("#sidebar", ItemTable)

    def _get_panel(self) -> DetailPanel:
        return self.query_one("#main", DetailPanel)

    def _update_subtitle(self) -> None:
        ctx = self._session.context
        if ctx is None:
            base = f"{APP_SUBTITLE} · {len(self._session.projects)} project(s)"
        else:
            env = ctx.selected_var_file.env_name if ctx.selected_var_file else "no env"
            base = f"[{ctx.project.name} · {env}]"
        self.sub_title = f"{base}  running…" if self.running else base

    def _render_view(self) -> None:
        """Redraw the sidebar and detail panel from the session state."""
        table = self._get_table()
        panel = self._get_panel()
        session = self._session
        ctx = session.context
        if session.view is View.PROJECT_LIST or ctx is None:
            table.border_title = "Projects"
            table.load_projects(session.projects)
            panel.show(
                "Projects",
                f"{len(session.projects)} Terraform project(s) found.\n\n"
                "Select a project and press Enter.",
            )
        else:
            table.border_title = ctx.project.name
            table.load_var_files(
                ctx.var_files, session.initialized_env, cursor_row=max(ctx.selected_index, 0)
            )
            if ctx.selected_var_file is None:
                panel.show("📋 Project Details", session.describe_project())
            else:
                panel.show("🌍 Environment Details", session.describe_environment())
        self._update_subtitle()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        index = event.cursor_row
        session = self._session
        if session.view is View.PROJECT_LIST:
            if 0 <= index < len(session.projects):
                session.select_project(index)
                self._get_panel().clear_output()
                self._render_view()
            return

        ctx = session.context
        if ctx is not None and 0 <= index < len(ctx.var_files):
            prompt = session.select_var_file(index)
            self._render_view()
            self._advance(prompt)

    def _advance(self, step: Step) -> None:
        """Present the next prompt or start the confirmed command."""
        if step is None:
            self._render_view()
        elif isinstance(step, Prompt):
            self._render_view()
            self._show_prompt(step)
        else:
            self._run_intent(step)

    def _show_prompt(self, prompt: Prompt) -> None:
        if prompt.kind is PromptKind.ERROR:
            self.push_screen(ErrorScreen(prompt.title, prompt.message))
            return

        action = prompt.action
        if action is None:
            return

        if prompt.kind is PromptKind.CONFIRM:

            def on_confirm(confirmed: bool | None) -> None:
                if confirmed:
                    self._advance(self._session.confirm(action))
                else:
                    self._advance(self._session.cancel(action))

            self.push_screen(ConfirmScreen(prompt.title, prompt.message), on_confirm)
            return

        def on_select(index: int | None) -> None:
            if index is None:
                self._advance(self._session.cancel(action))
            else:
                self._advance(self._session.select(action, index))

        self.push_screen(SelectScreen(prompt.title, prompt.items, prompt.message), on_select)

    @work
    async def _run_intent(self, intent: Intent) -> None:
        """Stream one command into the output log, then refresh from disk."""
        command, args, cwd = intent.invocation()
        panel = self._get_panel()
        panel.write_status(f"$ {' '.join([command, *args])}", ok=True)
        self.running = True
        try:
            async for event in self._runner(command, args, cwd):
                if isinstance(event, OutputLine):
                    panel.write_line(event.line, event.is_err)
                elif isinstance(event, CommandCompleted):
                    panel.write_status(f"✅ {event.command} completed", ok=True)
                else:
                    panel.write_status(f"❌ {event.command} failed: {event.error}", ok=False)
        finally:
            self._session.finish(intent)
            self.running = False
            self._render_view()

    def action_toggle_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_init(self) -> None:
        """Ask which environment of the open project to initialize."""
        if self._session.view is not View.PROJECT_DETAIL:
            self.notify("Select a project first", timeout=2)
            return
        self._advance(self._session.request_init())

    def action_back(self) -> None:
        """Return to the project list (multi-project mode only)."""
        if self._session.back():
            self._get_panel().clear_output()
            self._render_view()
            self._get_table().focus()

    def action_sso_login(self) -> None:
        """Pick an AWS SSO session and run ``aws sso login`` for it."""
        try:
            sessions = self._load_sso_sessions()
        except AwsConfigError as exc:
            self.notify(str(exc), severity="error", timeout=8)
            return
        self._advance(self._session.request_sso_login(sessions))
