"""
Snippets Module - Source line lookup for stack frames

Provides:
- FileSourceReader: reads one line of a source file
- SnippetCache: thread-safe, load-once cache keyed by (path, line)

A failed lookup is cached as its failure text, so the reason is shown
and the file is never read again for that frame.
"""
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Tuple

from .stack_parser import StackFrame


logger = logging.getLogger(__name__)


class FileSourceReader:
    """Reads single lines from source files on disk"""

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize the reader

        Args:
            root: Directory that relative frame paths are resolved against
        """
        self.root = Path(root) if root else None

    def resolve(self, path: str) -> Path:
        file_path = Path(path)
        if self.root and not file_path.is_absolute():
            file_path = self.root / file_path
        return file_path

    def read_line(self, path: str, line: int) -> str:
        """
        Read a 1-based line from a source file

        Raises:
            ValueError: Empty path or line out of range
            OSError: File missing or unreadable
        """
        if not path:
            raise ValueError("No source file for this frame")

        file_path = self.resolve(path)
        with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
            lines = f.read().split('\n')

        if line < 1 or line > len(lines):
            raise ValueError(f"Line {line} is out of range for {file_path.name} ({len(lines)} lines)")

        return lines[line - 1].strip()


class SnippetCache:
    """Load-once cache of source snippets"""

    def __init__(self, reader: Optional[FileSourceReader] = None):
        self.reader = reader or FileSourceReader()
        self._snippets: Dict[Tuple[str, int], str] = {}
        self._lock = threading.Lock()

    def lookup(self, path: str, line: int) -> str:
        """
        Get the snippet for a source location, reading it on first use

        Returns:
            Source text of the line, or the failure text
        """
        key = (path, line)
        with self._lock:
            if key in self._snippets:
                return self._snippets[key]

            try:
                snippet = self.reader.read_line(path, line)
            except Exception as e:
                logger.debug(f"No snippet for {path}:{line}: {e}")
                snippet = str(e)

            self._snippets[key] = snippet
            return snippet

    def get(self, frame: StackFrame) -> str:
        return self.lookup(frame.file_path, frame.line)

    def clear(self) -> None:
        with self._lock:
            self._snippets.clear()

    def __len__(self) -> int:
        return len(self._snippets)
