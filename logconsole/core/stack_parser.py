"""
Stack Parser Module - Call-site extraction from raw stack text

Handles:
- Splitting a raw multi-line stack trace into call-site lines
- Method signature normalization (argument lists replaced by "()")
- File path / line number extraction
- Rendering frames back into the same text shape

Structured lines look like:
    "Foo.Bar (System.String s) (at Assets/Scripts/Foo.cs:42)"
Anything else in the stack text is ignored.
"""
from dataclasses import dataclass
from pathlib import PurePath
from typing import List


FRAME_DELIMITER = ") (at "


@dataclass(frozen=True)
class StackFrame:
    """One parsed call-site"""
    method: str
    file_path: str
    file_name: str
    line: int = 1

    @property
    def file_line(self) -> str:
        return f"{self.file_name}:{self.line}"


def _normalize_method(segment: str) -> str:
    """Replace the argument list of a method signature with "()" """
    cut = segment.rfind('(')
    if cut >= 0:
        segment = segment[:cut]
    return segment.strip() + "()"


def _parse_location(segment: str) -> tuple:
    """
    Split a "path:line)" location segment

    Returns:
        Tuple of (file_path, file_name, line)
    """
    if segment.endswith(')'):
        segment = segment[:-1]

    path, sep, number = segment.rpartition(':')
    if not sep:
        return "", "", 1

    try:
        line = int(number.strip())
    except ValueError:
        line = 1
    if line < 1:
        line = 1

    # Windows-style separators are common in host stack text
    file_name = PurePath(path.replace('\\', '/')).name
    return path, file_name, line


def parse_stack_line(line: str):
    """
    Parse a single stack line

    Returns:
        StackFrame, or None when the line is not a structured call-site
    """
    parts = line.rstrip('\r').split(FRAME_DELIMITER, 1)
    if len(parts) < 2:
        return None

    method = _normalize_method(parts[0])
    file_path, file_name, line_number = _parse_location(parts[1].strip())
    return StackFrame(
        method=method,
        file_path=file_path,
        file_name=file_name,
        line=line_number
    )


def parse_stack(raw_stack: str) -> List[StackFrame]:
    """
    Parse a raw stack trace into frames, top frame first

    Args:
        raw_stack: Stack text with lines separated by newlines

    Returns:
        List of StackFrame objects (empty if nothing was recognised)
    """
    if not raw_stack:
        return []

    frames = []
    for line in raw_stack.split('\n'):
        frame = parse_stack_line(line)
        if frame is not None:
            frames.append(frame)

    return frames


def format_frame(method: str, file_path: str, line: int) -> str:
    """Render a call-site in the shape parse_stack understands"""
    return f"{method} ({FRAME_DELIMITER}{file_path}:{line})"
