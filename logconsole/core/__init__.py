"""
Console Core Package - Log ingestion and filtering engine

Package Structure:
- stack_parser: Raw stack text to call-site frames (StackFrame, parse_stack)
- log_entry: Immutable entries and levels (LogEntry, LogLevel, new_entry)
- filter_engine: Level/pattern predicate and recomputation (FilterEngine)
- log_store: Bounded history and filtered view (LogStore, FilterStatus)
- scheduler: Debounced filter recomputation (FilterScheduler)
- snippets: Source line lookup with load-once caching (SnippetCache)
- capture: logging.Handler adapter for Python hosts (ConsoleHandler)
"""
from .stack_parser import StackFrame, parse_stack, format_frame
from .log_entry import LogEntry, LogLevel, new_entry
from .filter_engine import FilterEngine, InvalidPatternError
from .log_store import LogStore, FilterStatus
from .scheduler import FilterScheduler
from .snippets import FileSourceReader, SnippetCache
from .capture import ConsoleHandler, classify, install, uninstall

__all__ = [
    # Data models
    'StackFrame',
    'LogEntry',
    'LogLevel',
    'FilterStatus',

    # Engine
    'parse_stack',
    'format_frame',
    'new_entry',
    'FilterEngine',
    'InvalidPatternError',
    'LogStore',
    'FilterScheduler',

    # Collaborators
    'FileSourceReader',
    'SnippetCache',
    'ConsoleHandler',
    'classify',
    'install',
    'uninstall',
]
