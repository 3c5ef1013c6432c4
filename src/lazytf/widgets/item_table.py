"""Sidebar table listing projects or environments."""

from rich.text import Text
from textual.binding import Binding
from textual.widgets import DataTable

from lazytf.constants import ENV_COLUMNS, INITIALIZED_MARK, PROJECT_COLUMNS
from lazytf.models import Project, VarFile

_INITIALIZED_STYLE = "bold green"


class ItemTable(DataTable):
    """Scrollable sidebar table with vim-style navigation.

    Shows either the discovered projects or the var files of the open
    project.  The environment Terraform is currently initialized against is
    marked with a green dot.  Enter (or clicking the highlighted row) posts
    ``DataTable.RowSelected``; the app decides what selecting means.
    """

    BINDINGS = [
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    def action_cursor_down(self) -> None:
        """Move down one row, wrapping from the last row to the first."""
        if self.row_count == 0:
            return
        if self.cursor_row == self.row_count - 1:
            self.move_cursor(row=0)
        else:
            super().action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move up one row, wrapping from the first row to the last."""
        if self.row_count == 0:
            return
        if self.cursor_row == 0:
            self.move_cursor(row=self.row_count - 1)
        else:
            super().action_cursor_up()

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True

    def load_projects(self, projects: list[Project]) -> None:
        """Replace table contents with the project list."""
        self.clear(columns=True)
        self.add_columns(*PROJECT_COLUMNS)
        for i, project in enumerate(projects, start=1):
            mark = Text(INITIALIZED_MARK, style=_INITIALIZED_STYLE) if project.is_initialized else ""
            self.add_row(str(i), project.name, mark, key=project.path)

    def load_var_files(
        self, var_files: list[VarFile], initialized_env: str, cursor_row: int = 0
    ) -> None:
        """Replace table contents with the var files of one project.

        Rows whose environment equals *initialized_env* get the initialized
        marker.  Rows are keyed by relative path, which is unique per project.
        """
        self.clear(columns=True)
        self.add_columns(*ENV_COLUMNS)
        for i, var_file in enumerate(var_files, start=1):
            if initialized_env and var_file.env_name == initialized_env:
                env_cell: str | Text = Text(
                    f"{INITIALIZED_MARK} {var_file.env_name}", style=_INITIALIZED_STYLE
                )
            else:
                env_cell = f"  {var_file.env_name}"
            self.add_row(str(i), env_cell, var_file.relative_path, key=var_file.relative_path)
        if 0 < cursor_row < self.row_count:
            self.move_cursor(row=cursor_row)
