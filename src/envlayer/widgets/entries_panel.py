"""Entries panel showing every parsed entry and which source won each key."""

from __future__ import annotations

import asyncio
from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import DataTable, Static, Button
from textual import work

from rich.markup import escape
from rich.text import Text

from envlayer.loader import load_sources
from envlayer.models import LoadReport


class EntriesPanel(Vertical):
    """Lists entries from all sources in application order."""

    DEFAULT_CSS = """
    EntriesPanel {
        height: 1fr;
    }
    EntriesPanel .action-bar {
        height: 3;
        layout: horizontal;
        margin-bottom: 1;
    }
    EntriesPanel .action-bar Button {
        margin: 0 1 0 0;
    }
    EntriesPanel DataTable {
        height: 1fr;
    }
    """

    def __init__(
        self,
        paths: list[Path],
        *,
        strict: bool = False,
        encoding: str = "utf-8",
        show_overridden: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.paths = paths
        self.strict = strict
        self.encoding = encoding
        self.show_overridden = show_overridden
        self.report = LoadReport()

    def compose(self) -> ComposeResult:
        yield Static("[bold]Entries[/bold]", classes="panel-title")
        with Vertical(classes="action-bar"):
            yield Button("Refresh", id="btn-refresh", variant="default")
            yield Button("Toggle Overridden", id="btn-toggle", variant="default")
        yield Static("[dim]Loading...[/dim]", id="entries-summary")
        yield DataTable(id="entries-table", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("Key", "Value", "Source", "Status")
        self.load_data()

    @work(exclusive=True)
    async def load_data(self) -> None:
        table = self.query_one(DataTable)
        summary = self.query_one("#entries-summary", Static)
        table.loading = True
        try:
            self.report = await asyncio.to_thread(
                load_sources, self.paths, strict=self.strict, encoding=self.encoding
            )
            self._render_table()
            for failed in self.report.failed:
                self.notify(
                    f"Skipped {failed.path}: {failed.error}",
                    severity="warning",
                    markup=False,
                )
        except Exception as e:
            summary.update(f"[red]Error: {escape(str(e))}[/red]")
            self.notify(f"Error: {e}", severity="error", markup=False)
        finally:
            table.loading = False

    def _render_table(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        rows = [
            (source, entry)
            for source in self.report.sources
            for entry in source.entries
        ]
        # Later positions overwrite earlier ones, leaving each key's winner.
        winners = {entry.key: position for position, (_, entry) in enumerate(rows)}
        overridden = 0
        for position, (source, (key, value)) in enumerate(rows):
            active = winners[key] == position
            if not active:
                overridden += 1
                if not self.show_overridden:
                    continue
            table.add_row(
                Text(key),
                Text(value),
                Text(str(source.path)),
                "active" if active else "overridden",
                key=str(position),
            )

        summary = self.query_one("#entries-summary", Static)
        summary.update(
            f"{len(winners)} keys, {overridden} overridden, "
            f"{len(self.report.sources)} sources ({len(self.report.failed)} unreadable)"
        )

    def toggle_overridden(self) -> None:
        self.show_overridden = not self.show_overridden
        self._render_table()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-refresh":
            self.load_data()
        elif event.button.id == "btn-toggle":
            self.toggle_overridden()
