"""Detail panel: project/environment summary above the command output log."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import RichLog, Static


class DetailPanel(Vertical):
    """Composes the summary text and the streamed command output.

    The plain text of everything shown is also kept on the widget so it can
    be inspected without rendering.
    """

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self.detail_text = ""
        self.output_lines: list[str] = []

    def compose(self) -> ComposeResult:
        yield Static("", id="detail", markup=False)
        yield RichLog(id="output", wrap=True, markup=False, highlight=False)

    def show(self, title: str, text: str) -> None:
        self.border_title = title
        self.detail_text = text
        self.query_one("#detail", Static).update(text)

    def write_line(self, line: str, is_err: bool = False) -> None:
        """Append one output line; ANSI colours from the command are kept."""
        text = Text.from_ansi(line)
        if is_err:
            text.stylize("red")
        self._write(text)

    def write_status(self, message: str, ok: bool) -> None:
        self._write(Text(message, style="bold green" if ok else "bold red"))

    def _write(self, text: Text) -> None:
        self.output_lines.append(text.plain)
        self.query_one("#output", RichLog).write(text)

    def clear_output(self) -> None:
        self.output_lines.clear()
        self.query_one("#output", RichLog).clear()
