"""
Log Console Application - terminal UI using Textual
"""
import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, Input

from logconsole.settings import ConsoleSettings
from logconsole.core import (
    ConsoleHandler,
    FileSourceReader,
    FilterScheduler,
    LogStore,
    SnippetCache,
    install,
    uninstall,
)
from logconsole.UI.views import ConsoleView


class ConsoleApp(App):
    """Runtime log console - Terminal UI Application"""

    TITLE = "Log Console"
    CSS_PATH = "console.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("c", "clear_log", "Clear"),
        ("x", "clear_all", "Clear + Reset"),
        ("slash", "focus_search", "Search"),
    ]

    def __init__(self,
                 store: Optional[LogStore] = None,
                 settings: Optional[ConsoleSettings] = None,
                 capture: bool = True,
                 **kwargs):
        """
        Initialize the console app

        Args:
            store: Store to display (a new one is created from settings if omitted)
            settings: Console settings
            capture: Attach a ConsoleHandler to the root logger while running
        """
        super().__init__(**kwargs)
        self.console_settings = settings or (store.settings if store else ConsoleSettings())
        self.log_store = store or LogStore(self.console_settings)
        self.filter_scheduler = FilterScheduler(self.log_store)
        self.snippet_cache = SnippetCache(FileSourceReader(self.console_settings.source_root))
        self.capture_logs = capture
        self.log_handler: Optional[ConsoleHandler] = None

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)
        yield ConsoleView(self.log_store, self.filter_scheduler, self.snippet_cache, id="console-view")
        yield Footer()

    def on_mount(self) -> None:
        if self.capture_logs:
            self.log_handler = install(self.log_store, level=logging.DEBUG)

    def on_unmount(self) -> None:
        if self.log_handler:
            uninstall(self.log_handler)
            self.log_handler = None

    def action_clear_log(self) -> None:
        self.query_one("#console-view", ConsoleView).clear_log()

    def action_clear_all(self) -> None:
        self.query_one("#console-view", ConsoleView).clear_log(reset_filter=True)

    def action_focus_search(self) -> None:
        self.query_one("#console-search-input", Input).focus()


def run_app(settings: Optional[ConsoleSettings] = None) -> None:
    """Entry point to run the log console"""
    app = ConsoleApp(settings=settings)
    app.run()


if __name__ == "__main__":
    run_app()
