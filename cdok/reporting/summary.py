from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cdok.catalog.model import Catalog, Function, SourceFile
from cdok.chunking.function_chunker import CodeChunk, extract_function_source

log = logging.getLogger("cdok.reporting")

# Label, Function attribute; shared by every output format.
DOC_SECTIONS = (
    ("Description", "description"),
    ("Parameters", "parameters"),
    ("Return Value", "return_value"),
    ("Example", "example"),
    ("Notes", "notes"),
)


@dataclass
class ReportEntry:
    function: Function
    source: CodeChunk | None
    source_error: str | None = None

    def doc_sections(self) -> list[tuple[str, str]]:
        return [(label, getattr(self.function, attr)) for label, attr in DOC_SECTIONS if getattr(self.function, attr)]


def coverage_percent(documented: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return documented / total * 100


def build_summary(source: SourceFile) -> dict:
    total = source.function_count
    documented = source.documented_count
    return {
        "filename": source.filename,
        "total_functions": total,
        "documented": documented,
        "undocumented": total - documented,
        "coverage": coverage_percent(documented, total),
    }


def build_catalog_summary(catalog: Catalog) -> dict:
    total = catalog.total_functions
    documented = catalog.documented_functions
    return {
        "files": catalog.file_count,
        "total_functions": total,
        "documented": documented,
        "coverage": coverage_percent(documented, total),
    }


def build_entries(source: SourceFile, root: Path) -> list[ReportEntry]:
    entries: list[ReportEntry] = []
    for func in source.functions:
        try:
            chunk = extract_function_source(func, root)
        except OSError as e:
            log.debug("Source unavailable for %s:%s: %s", func.filename, func.name, e)
            entries.append(ReportEntry(func, None, f"Could not open {func.filename}"))
            continue
        if chunk is None:
            entries.append(ReportEntry(func, None, f"Could not find function at line {func.line_number}"))
        else:
            entries.append(ReportEntry(func, chunk))
    return entries
