from __future__ import annotations

from cdok.scanner.language_filter import is_header

REJECT_PREFIXES = ("//", "/*", "#", "typedef", "struct", "enum", "union")


def is_function_line(line: str, filename: str) -> bool:
    """Guess whether ``line`` opens a top-level function definition or declaration.

    Single-line heuristic only. Multi-line signatures, K&R declarations and
    function-pointer parameters are not recognised. Indentation is checked on
    the raw line, so callers pass the line as read from the file.
    """
    if line[:1] in (" ", "\t"):
        return False

    text = line.strip()
    if not text:
        return False
    if text.startswith(REJECT_PREFIXES):
        return False
    if "(" not in text or ")" not in text:
        return False

    if is_header(filename):
        return True
    # Prototypes in .c files are extern declarations, not definitions.
    return not text.endswith(";")
