"""
Console Table Module - DataTable for displaying the filtered log view

Handles:
- Color-coded level column
- Elapsed time, context, file and method columns (each can be hidden)
- Highlighting of filter matches in the message
- Row selection lookup
"""
from typing import Dict, List, Optional, Pattern, Set

from textual.widgets import DataTable
from rich.text import Text

from logconsole.core import LogEntry


MATCH_STYLE = "bold black on yellow"

# (key, label) in display order; the message column is always shown
COLUMNS = [
    ("level", "Lv"),
    ("time", "Time"),
    ("context", "Context"),
    ("file", "File"),
    ("method", "Method"),
    ("message", "Message"),
]
OPTIONAL_COLUMNS = {"level", "time", "context", "file", "method"}


class ConsoleTable(DataTable):
    """
    DataTable for displaying console log entries

    Rows are keyed by entry id so the selection can be mapped back to
    the entry after the view is rebuilt.
    """

    def __init__(self, **kwargs):
        """Initialize the console table"""
        super().__init__(**kwargs)
        self.entries: List[LogEntry] = []
        self.entry_map: Dict[str, LogEntry] = {}  # Maps row key to LogEntry
        self.matcher: Optional[Pattern] = None
        self.hidden_columns: Set[str] = set()
        self.max_message_length = 160  # Truncate long messages

    def on_mount(self) -> None:
        """Initialize table columns when mounted"""
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._add_visible_columns()

    def _add_visible_columns(self) -> None:
        for key, label in COLUMNS:
            if key not in self.hidden_columns:
                self.add_column(label, key=key)

    @property
    def visible_columns(self) -> List[str]:
        return [key for key, _ in COLUMNS if key not in self.hidden_columns]

    def set_column_visible(self, key: str, visible: bool) -> None:
        """
        Show or hide an optional column and rebuild the table

        Raises:
            ValueError: If the column cannot be hidden
        """
        if key not in OPTIONAL_COLUMNS:
            raise ValueError(f"Unknown optional column: {key}")

        if visible:
            self.hidden_columns.discard(key)
        else:
            self.hidden_columns.add(key)

        selected = self.get_selected_entry()
        self.clear(columns=True)
        self._add_visible_columns()
        self.show_entries(self.entries, self.matcher)

        if selected is not None and str(selected.id) in self.entry_map:
            self.move_cursor(row=self.get_row_index(str(selected.id)))

    def show_entries(self, entries: List[LogEntry], matcher: Optional[Pattern] = None) -> None:
        """
        Replace the table contents with a view of entries

        Args:
            entries: Entries to display, newest first
            matcher: Compiled filter pattern used to highlight matches
        """
        selected = self.get_selected_entry()

        self.clear()
        self.entry_map.clear()
        self.entries = list(entries)
        self.matcher = matcher

        for entry in self.entries:
            key = str(entry.id)
            self.add_row(*self._visible_cells(entry, matcher), key=key)
            self.entry_map[key] = entry

        # Keep the cursor on the same entry while new rows arrive on top
        if selected is not None and str(selected.id) in self.entry_map:
            self.move_cursor(row=self.get_row_index(str(selected.id)))

    def _visible_cells(self, entry: LogEntry, matcher: Optional[Pattern]) -> tuple:
        cells = self._format_entry(entry, matcher)
        return tuple(cell for (key, _), cell in zip(COLUMNS, cells) if key not in self.hidden_columns)

    def _format_entry(self, entry: LogEntry, matcher: Optional[Pattern]) -> tuple:
        """
        Format a log entry for table display

        Returns:
            Tuple of formatted cell values
        """
        level_text = Text(entry.level_word, style=entry.level.color)

        message = entry.message.split('\n', 1)[0]
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length - 3] + "..."

        return (
            level_text,
            entry.time_text,
            entry.context or "-",
            self._highlight(entry.top_file_line, matcher),
            self._highlight(entry.top_method, matcher),
            self._highlight(message, matcher),
        )

    @staticmethod
    def _highlight(value: str, matcher: Optional[Pattern]) -> Text:
        text = Text(value)
        if matcher is not None:
            text.highlight_regex(matcher, style=MATCH_STYLE)
        return text

    def entry_for_key(self, key: Optional[str]) -> Optional[LogEntry]:
        if key is None:
            return None
        return self.entry_map.get(key)

    def get_selected_entry(self) -> Optional[LogEntry]:
        """
        Get the currently selected log entry

        Returns:
            Selected LogEntry or None
        """
        if self.row_count == 0:
            return None

        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return self.entry_for_key(row_key.value)
