"""Flat-file persistence for function documentation.

One block per documented function::

    FUNCTION: <name>
    FILE: <filename>
    LINE: <line_number>
    SIGNATURE: <signature>
    DESCRIPTION: <description>
    PARAMETERS: <parameters>
    RETURN: <return_value>
    EXAMPLE: <example>
    NOTES: <notes>
    ---

Every value is a single physical line. Loading only annotates functions that
already exist in a freshly scanned catalog; it never creates entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cdok.catalog.model import Catalog

log = logging.getLogger("cdok.store")

HEADER_LINES = (
    "# Project Documentation",
    "# Auto-generated - do not edit the function signatures",
    "",
)
SEPARATOR = "---"

# Store key -> Function attribute.
FIELD_KEYS = {
    "DESCRIPTION": "description",
    "PARAMETERS": "parameters",
    "RETURN": "return_value",
    "EXAMPLE": "example",
    "NOTES": "notes",
}


class DocStoreError(Exception):
    """Raised when the documentation file cannot be read or written."""


@dataclass
class LoadResult:
    applied: int = 0
    discarded: int = 0


def _single_line(value: str) -> str:
    return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def _split_entry(line: str) -> tuple[str, str] | None:
    key, sep, rest = line.partition(":")
    if not sep:
        return None
    # Values are written as "KEY: value"; only that one separator space is dropped.
    return key, rest[1:] if rest.startswith(" ") else rest


def render_documentation(catalog: Catalog) -> tuple[str, int]:
    lines = list(HEADER_LINES)
    blocks = 0
    for _, func in catalog.iter_functions():
        if not func.is_documented:
            continue
        lines.extend(
            [
                f"FUNCTION: {func.name}",
                f"FILE: {func.filename}",
                f"LINE: {func.line_number}",
                f"SIGNATURE: {_single_line(func.signature)}",
                f"DESCRIPTION: {_single_line(func.description)}",
                f"PARAMETERS: {_single_line(func.parameters)}",
                f"RETURN: {_single_line(func.return_value)}",
                f"EXAMPLE: {_single_line(func.example)}",
                f"NOTES: {_single_line(func.notes)}",
                SEPARATOR,
            ]
        )
        blocks += 1
    return "\n".join(lines) + "\n", blocks


def save_documentation(catalog: Catalog, path: Path) -> int:
    """Rewrite ``path`` with every documented function. Returns the block count."""
    payload, blocks = render_documentation(catalog)
    try:
        path.write_text(payload, encoding="utf-8")
    except OSError as e:
        log.warning("Could not write documentation file %s: %s", path, e)
        raise DocStoreError(f"Could not write {path}: {e.strerror or e}") from e
    log.debug("Saved %d documented functions to %s", blocks, path)
    return blocks


def load_documentation(catalog: Catalog, path: Path) -> LoadResult:
    result = LoadResult()
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            raw_lines = f.read().splitlines()
    except FileNotFoundError:
        return result
    except OSError as e:
        raise DocStoreError(f"Could not read {path}: {e.strerror or e}") from e

    current_name = ""
    current_file = ""
    for raw in raw_lines:
        stripped = raw.strip()
        if stripped == SEPARATOR:
            current_name = ""
            current_file = ""
            continue
        entry = _split_entry(raw.lstrip())
        if entry is None:
            continue
        key, value = entry
        if key == "FUNCTION":
            current_name = value.strip()
            continue
        if key == "FILE":
            current_file = value.strip()
            continue
        attr = FIELD_KEYS.get(key)
        if attr is None or not current_name or not current_file:
            continue

        ref = catalog.find(current_file, current_name)
        if ref is None:
            result.discarded += 1
            continue
        func = catalog.function(ref)
        setattr(func, attr, value)
        if attr == "description" and value:
            func.is_documented = True
        result.applied += 1

    log.debug("Loaded documentation from %s: %d fields applied, %d discarded", path, result.applied, result.discarded)
    return result
