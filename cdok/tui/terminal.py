from __future__ import annotations

import atexit
import sys
import termios
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"

CLEAR_SCREEN = "\033[2J\033[H"

ARROW_KEYS = {"A": "up", "B": "down"}


class Palette:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def paint(self, text: str, *codes: str) -> str:
        if not self.enabled or not codes:
            return text
        return "".join(codes) + text + RESET


def _is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@contextmanager
def raw_mode(stream: TextIO | None = None) -> Iterator[None]:
    """Switch ``stream`` to unbuffered, non-echoing input for the duration.

    The saved attributes are restored on exit from the block and, as a last
    resort, at interpreter exit. Non-TTY streams are left alone.
    """
    stream = stream or sys.stdin
    if not _is_tty(stream):
        yield
        return

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)

    def restore() -> None:
        termios.tcsetattr(fd, termios.TCSAFLUSH, saved)

    atexit.register(restore)
    raw = termios.tcgetattr(fd)
    raw[3] &= ~(termios.ECHO | termios.ICANON)
    termios.tcsetattr(fd, termios.TCSAFLUSH, raw)
    try:
        yield
    finally:
        restore()
        atexit.unregister(restore)


@contextmanager
def line_mode(stream: TextIO) -> Iterator[None]:
    """Temporarily re-enable echo and line buffering inside ``raw_mode``."""
    if not _is_tty(stream):
        yield
        return

    fd = stream.fileno()
    current = termios.tcgetattr(fd)
    cooked = termios.tcgetattr(fd)
    cooked[3] |= termios.ECHO | termios.ICANON
    termios.tcsetattr(fd, termios.TCSAFLUSH, cooked)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, current)


class Terminal:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None, color: bool = True) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.palette = Palette(color)

    def read_key(self) -> str:
        """Read one keystroke. Arrows come back as "up"/"down", Enter as "enter"."""
        ch = self.stdin.read(1)
        if ch == "":
            return "eof"
        if ch == "\033":
            if self.stdin.read(1) != "[":
                return ""
            return ARROW_KEYS.get(self.stdin.read(1), "")
        if ch in ("\r", "\n"):
            return "enter"
        return ch

    def read_line(self, prompt: str) -> str:
        with line_mode(self.stdin):
            self.write(prompt)
            self.flush()
            line = self.stdin.readline()
        return line.rstrip("\r\n")

    def write(self, text: str) -> None:
        self.stdout.write(text)

    def writeln(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def flush(self) -> None:
        self.stdout.flush()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)

    def pause(self, message: str = "Press any key to continue...") -> str:
        self.write(message)
        self.flush()
        return self.read_key()
