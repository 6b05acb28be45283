"""Main envlayer viewer application class."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from envlayer.widgets.entries_panel import EntriesPanel


class EnvLayerApp(App):
    """envlayer - layered .env viewer."""

    TITLE = "envlayer"
    SUB_TITLE = "Layered .env viewer"

    CSS = """
    Screen { layout: vertical; }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("ctrl+o", "toggle_overridden", "Overridden", show=True),
    ]

    def __init__(
        self,
        paths: list[Path],
        *,
        strict: bool = False,
        encoding: str = "utf-8",
        show_overridden: bool = True,
        theme_name: str = "dark",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.paths = paths
        self.strict = strict
        self.encoding = encoding
        self.show_overridden = show_overridden
        self.theme_name = theme_name

    def compose(self) -> ComposeResult:
        yield Header()
        yield EntriesPanel(
            self.paths,
            strict=self.strict,
            encoding=self.encoding,
            show_overridden=self.show_overridden,
        )
        yield Footer()

    def on_mount(self) -> None:
        self.theme = "textual-light" if self.theme_name == "light" else "textual-dark"

    def action_refresh(self) -> None:
        self.query_one(EntriesPanel).load_data()

    def action_toggle_overridden(self) -> None:
        self.query_one(EntriesPanel).toggle_overridden()
