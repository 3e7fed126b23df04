"""
Console View Package - Interactive view of the log store

This package provides the terminal rendering of the log console with:
- Newest-first log table with highlighted filter matches
- Debounced search (regex, case-insensitive)
- Level toggles (DEBUG / WARN / ERROR)
- Column visibility toggles
- Statistics and stack panel with source snippets

Package Structure:
- view: Main view orchestration (ConsoleView)
- components: UI panels and controls (ConsoleSearchPanel, ConsoleLevelPanel, etc.)
- log_table: Log entry table widget (ConsoleTable)
"""
from .view import ConsoleView

from .components import (
    ConsoleSearchPanel,
    ConsoleLevelPanel,
    ConsoleColumnPanel,
    ConsoleStatsPanel,
    StackPanel
)
from .log_table import ConsoleTable

__all__ = [
    # Main view
    'ConsoleView',

    # UI components
    'ConsoleSearchPanel',
    'ConsoleLevelPanel',
    'ConsoleColumnPanel',
    'ConsoleStatsPanel',
    'StackPanel',
    'ConsoleTable',
]
