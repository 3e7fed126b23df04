"""
Console View Module - Main UI orchestration

Handles:
- View composition and layout
- Polling the scheduler and store once per frame
- Search and level filter coordination (debounced)
- Column visibility
- Clearing the log
- Stack panel updates on row selection
"""
import logging
from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, Container
from textual.widgets import Label, Button, Input, Checkbox, DataTable, Static
from textual.timer import Timer
from textual import on

from logconsole.core import FilterScheduler, FilterStatus, LogLevel, LogStore, SnippetCache
from .log_table import ConsoleTable
from .components import (
    COLUMN_CHECKBOXES,
    LEVEL_CHECKBOXES,
    ConsoleSearchPanel,
    ConsoleLevelPanel,
    ConsoleColumnPanel,
    ConsoleStatsPanel,
    StackPanel
)


logger = logging.getLogger(__name__)


class ConsoleView(Vertical):
    """
    Runtime log console

    The view never filters by itself: edits go to the FilterScheduler and
    the table is redrawn from LogStore.view() whenever the store revision
    changes.
    """

    def __init__(self, store: LogStore,
                 scheduler: Optional[FilterScheduler] = None,
                 snippets: Optional[SnippetCache] = None,
                 **kwargs):
        """
        Initialize the console view

        Args:
            store: Log store to display
            scheduler: Debouncer for filter edits (created from store settings if omitted)
            snippets: Snippet cache for the stack panel
        """
        super().__init__(**kwargs)
        self.store = store
        self.scheduler = scheduler or FilterScheduler(store)
        self.snippets = snippets or SnippetCache()

        self.poll_timer: Optional[Timer] = None
        self.rendered_revision = -1
        self.active_levels = {LogLevel.DEBUG, LogLevel.WARN, LogLevel.ERROR}

    def compose(self) -> ComposeResult:
        """Compose the console layout"""
        with Container(id="console-controls"):
            yield ConsoleSearchPanel(id="console-search-panel")
            yield ConsoleLevelPanel(id="console-level-panel")
            yield ConsoleColumnPanel(id="console-column-panel")

        with Horizontal(id="console-content"):
            with Vertical(classes="main-panel", id="console-main-panel"):
                yield Label("[bold]Log Entries[/bold]", classes="section-title")
                yield ConsoleTable(id="console-table")

            with Vertical(classes="right-panel", id="console-sidebar"):
                yield ConsoleStatsPanel(id="console-stats-panel")
                yield StackPanel(self.snippets, id="console-stack-panel")

        yield Static("", id="console-status")

    def on_mount(self) -> None:
        """Start polling the engine"""
        self.poll_timer = self.set_interval(self.store.settings.poll_interval, self.poll_engine)
        self.call_after_refresh(self.refresh_entries)

    # Polling

    def poll_engine(self) -> None:
        """One frame: run a due filter request, then redraw if the store changed"""
        status = self.scheduler.tick()
        if status is not None:
            self.show_status(status)

        if self.store.revision != self.rendered_revision:
            self.refresh_entries()

    def refresh_entries(self) -> None:
        """Redraw the table and statistics from the store"""
        self.rendered_revision = self.store.revision

        table = self.query_one("#console-table", ConsoleTable)
        table.show_entries(self.store.view(), self.store.matcher)

        stats_panel = self.query_one("#console-stats-panel", ConsoleStatsPanel)
        stats_panel.update_stats(self.store.stats())

        self.app.sub_title = f"{self.store.count()} entries"

    def show_status(self, status: FilterStatus) -> None:
        """Reflect the outcome of a filter recomputation"""
        search_input = self.query_one("#console-search-input", Input)
        search_input.set_class(not status.ok, "bad-pattern")

        status_line = self.query_one("#console-status", Static)
        if status.ok:
            status_line.update(f"{status.matched} matching entries")
        else:
            status_line.update(f"[red]Invalid pattern:[/red] {status.error}")

    # Filter state

    @property
    def level_mask(self) -> int:
        mask = 0
        for level in self.active_levels:
            mask |= level
        return mask

    @on(Input.Changed, "#console-search-input")
    def handle_search_changed(self, event: Input.Changed) -> None:
        """Queue a debounced recomputation for the new pattern"""
        self.scheduler.request(pattern=event.value)

    @on(Input.Submitted, "#console-search-input")
    def handle_search_submitted(self, event: Input.Submitted) -> None:
        """Apply the pending pattern without waiting for the quiet period"""
        status = self.scheduler.flush()
        if status is not None:
            self.show_status(status)
            self.refresh_entries()

    @on(Checkbox.Changed)
    def handle_level_filter_changed(self, event: Checkbox.Changed) -> None:
        """Handle log level toggle changes"""
        level = LEVEL_CHECKBOXES.get(event.checkbox.id)
        if level is None:
            return

        if event.value:
            self.active_levels.add(level)
        else:
            self.active_levels.discard(level)

        self.scheduler.request(level_mask=self.level_mask)

    @on(Checkbox.Changed, ".column-toggle")
    def handle_column_toggled(self, event: Checkbox.Changed) -> None:
        """Show or hide a table column"""
        column = COLUMN_CHECKBOXES.get(event.checkbox.id)
        if column is None:
            return

        table = self.query_one("#console-table", ConsoleTable)
        table.set_column_visible(column, event.value)

    @on(Button.Pressed, "#reset-filters-btn")
    def handle_reset_filters(self) -> None:
        """Enable every level and empty the search field"""
        self.reset_controls()
        self.scheduler.request(pattern="", level_mask=LogLevel.ALL)

    def reset_controls(self) -> None:
        """Put the filter controls back to their defaults without queueing requests"""
        self.active_levels = {LogLevel.DEBUG, LogLevel.WARN, LogLevel.ERROR}
        search_input = self.query_one("#console-search-input", Input)

        with self.prevent(Input.Changed, Checkbox.Changed):
            for checkbox_id in LEVEL_CHECKBOXES:
                self.query_one(f"#{checkbox_id}", Checkbox).value = True
            search_input.value = ""

        search_input.remove_class("bad-pattern")

    # Clearing

    @on(Button.Pressed, "#clear-log-btn")
    def handle_clear(self) -> None:
        self.clear_log()

    def clear_log(self, reset_filter: bool = False) -> None:
        """
        Drop all captured entries

        Args:
            reset_filter: Also reset the search pattern and level toggles
        """
        self.store.clear(reset_filter)
        if reset_filter:
            self.reset_controls()
            self.scheduler.sync()

        self.query_one("#console-stack-panel", StackPanel).show_entry(None)
        self.refresh_entries()
        logger.debug("Console cleared")

    # Selection

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Show the stack of the highlighted entry"""
        if event.data_table.id != "console-table":
            return

        table = self.query_one("#console-table", ConsoleTable)
        entry = table.entry_for_key(event.row_key.value)
        self.query_one("#console-stack-panel", StackPanel).show_entry(entry)

    def on_unmount(self) -> None:
        """Clean up when view is unmounted"""
        if self.poll_timer:
            self.poll_timer.stop()
            self.poll_timer = None
