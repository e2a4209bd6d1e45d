from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cdok.catalog.model import Function
from cdok.scanner.language_filter import is_header


@dataclass
class CodeChunk:
    file: str
    start_line: int
    end_line: int
    lines: list[str] = field(default_factory=list)
    function: str | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def numbered(self) -> list[tuple[int, str]]:
        return list(enumerate(self.lines, start=self.start_line))


def _brace_delta(line: str) -> tuple[int, bool]:
    """Net brace change for a line, and whether the running count went above zero."""
    depth = 0
    peaked = False
    for ch in line:
        if ch == "{":
            depth += 1
            peaked = True
        elif ch == "}":
            depth -= 1
    return depth, peaked


def extract_function_source(func: Function, root: Path) -> CodeChunk | None:
    """Reproduce the source of ``func`` by brace balancing from its start line.

    Returns ``None`` when the file is shorter than ``func.line_number``. Braces
    inside string literals and comments are counted like any other.
    Raises ``OSError`` when the file cannot be read.
    """
    path = root / func.filename
    with path.open(encoding="utf-8", errors="replace") as f:
        lines = f.read().splitlines()

    start = func.line_number
    if start < 1 or start > len(lines):
        return None

    first = lines[start - 1]
    chunk = CodeChunk(file=func.filename, start_line=start, end_line=start, lines=[first], function=func.name)
    if is_header(func.filename) and first.strip().endswith(";"):
        return chunk

    depth, peaked = _brace_delta(first)
    if peaked and depth <= 0:
        # Whole body on one line.
        return chunk

    # Blank lines and comments may sit between the signature and the opening brace.
    opened = depth > 0
    for idx in range(start, len(lines)):
        line = lines[idx]
        chunk.lines.append(line)
        chunk.end_line = idx + 1
        delta, saw_open = _brace_delta(line)
        depth += delta
        opened = opened or saw_open
        if opened and depth <= 0:
            break
    return chunk
