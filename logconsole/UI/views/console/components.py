"""
Console Components Module - UI widgets and panels

Handles:
- Search field and clear controls
- Level and column toggles
- Log statistics panel
- Stack panel with source snippets
"""
from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Static, Label, Checkbox
from textual.reactive import reactive
from rich.markup import escape

from logconsole.core import LogEntry, LogLevel, SnippetCache


LEVEL_CHECKBOXES = {
    "filter-debug": LogLevel.DEBUG,
    "filter-warn": LogLevel.WARN,
    "filter-error": LogLevel.ERROR,
}

COLUMN_CHECKBOXES = {
    "column-level": "level",
    "column-context": "context",
    "column-time": "time",
    "column-file": "file",
    "column-method": "method",
}

COLUMN_LABELS = {
    "column-level": "Level",
    "column-context": "Context",
    "column-time": "Time",
    "column-file": "File",
    "column-method": "Method",
}


class ConsoleSearchPanel(Horizontal):
    """Search field and log clearing controls"""

    def compose(self) -> ComposeResult:
        """Compose the search panel"""
        yield Label("[bold]Search:[/bold]", classes="control-label")
        yield Input(
            placeholder="Filter by message, file or method (regex)...",
            id="console-search-input"
        )
        yield Button("Clear", id="clear-log-btn", variant="default")


class ConsoleLevelPanel(Horizontal):
    """Log level toggles"""

    def compose(self) -> ComposeResult:
        """Compose the level panel"""
        yield Label("[bold]Levels:[/bold]", classes="control-label")

        yield Checkbox("DEBUG", id="filter-debug", value=True)
        yield Checkbox("WARN", id="filter-warn", value=True)
        yield Checkbox("ERROR", id="filter-error", value=True)

        yield Button("Reset Filters", id="reset-filters-btn", variant="default")


class ConsoleColumnPanel(Horizontal):
    """Column visibility toggles"""

    def compose(self) -> ComposeResult:
        yield Label("[bold]Columns:[/bold]", classes="control-label")

        for checkbox_id, label in COLUMN_LABELS.items():
            yield Checkbox(label, id=checkbox_id, value=True, classes="column-toggle")


class ConsoleStatsPanel(Static):
    """Display log statistics"""

    total_entries: reactive[int] = reactive(0)
    visible_entries: reactive[int] = reactive(0)
    error_count: reactive[int] = reactive(0)
    warning_count: reactive[int] = reactive(0)

    def compose(self) -> ComposeResult:
        """Compose the stats panel"""
        yield Label("[bold]Log Statistics[/bold]", classes="panel-title")
        yield Static(self._format_stats(), id="stats-content")

    def _format_stats(self) -> str:
        return (
            f"Total Entries: {self.total_entries}\n"
            f"Visible: {self.visible_entries}\n"
            f"[red]Errors: {self.error_count}[/red]\n"
            f"[yellow]Warnings: {self.warning_count}[/yellow]"
        )

    def update_stats(self, stats: dict) -> None:
        """Set all counters from LogStore.stats()"""
        self.total_entries = stats['total']
        self.visible_entries = stats['visible']
        self.error_count = stats['error']
        self.warning_count = stats['warn']

    def watch_total_entries(self, value: int) -> None:
        self._update_display()

    def watch_visible_entries(self, value: int) -> None:
        self._update_display()

    def watch_error_count(self, value: int) -> None:
        self._update_display()

    def watch_warning_count(self, value: int) -> None:
        self._update_display()

    def _update_display(self) -> None:
        if not self.is_mounted:
            return
        stats_content = self.query_one("#stats-content", Static)
        stats_content.update(self._format_stats())


class StackPanel(Vertical):
    """Stack frames of the selected entry, with source snippets"""

    def __init__(self, snippets: SnippetCache, **kwargs):
        super().__init__(**kwargs)
        self.snippets = snippets
        self.entry: Optional[LogEntry] = None

    def compose(self) -> ComposeResult:
        yield Label("[bold]Stack[/bold]", classes="panel-title")
        yield Static("Select a log entry to view its stack", id="stack-content")

    def format_entry(self, entry: LogEntry) -> str:
        """
        Render the message and frames of an entry

        Reading a frame's snippet here is what triggers the source lookup.
        """
        lines = [
            f"[bold]{entry.level_word}[/bold] {entry.time_text}  {escape(entry.context)}",
            escape(entry.message),
            "",
        ]
        if not entry.frames:
            lines.append("[dim]No stack frames[/dim]")

        for frame in entry.frames:
            lines.append(f"[bold]{escape(frame.file_line)}[/bold]  {escape(frame.method)}")
            lines.append(f"    [dim]{escape(self.snippets.get(frame))}[/dim]")

        return "\n".join(lines)

    def show_entry(self, entry: Optional[LogEntry]) -> None:
        """Display the stack of an entry (None clears the panel)"""
        self.entry = entry
        content = self.query_one("#stack-content", Static)
        if entry is None:
            content.update("Select a log entry to view its stack")
        else:
            content.update(self.format_entry(entry))
