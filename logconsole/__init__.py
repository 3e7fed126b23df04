"""
logconsole - runtime log console with a bounded history and debounced filtering
"""
from .settings import ConsoleSettings
from .core import (
    LogEntry,
    LogLevel,
    LogStore,
    FilterScheduler,
    SnippetCache,
    ConsoleHandler,
)

__all__ = [
    'ConsoleSettings',
    'LogEntry',
    'LogLevel',
    'LogStore',
    'FilterScheduler',
    'SnippetCache',
    'ConsoleHandler',
]
