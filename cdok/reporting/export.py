from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from cdok.catalog.model import Catalog, SourceFile
from cdok.reporting.html_report import render_html_report
from cdok.reporting.markdown_report import render_markdown_report
from cdok.reporting.postscript_report import render_postscript_report
from cdok.reporting.summary import ReportEntry, build_entries
from cdok.reporting.text_report import render_text_report

log = logging.getLogger("cdok.reporting")

Renderer = Callable[[SourceFile, list[ReportEntry]], str]

RENDERERS: dict[str, Renderer] = {
    "txt": render_text_report,
    "md": render_markdown_report,
    "html": render_html_report,
    "ps": render_postscript_report,
}


def export_path(out_dir: Path, filename: str, fmt: str) -> Path:
    # "util.c" -> "util_docs.md"; only the final extension is dropped.
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return out_dir / f"{stem}_docs.{fmt}"


def render_file(catalog: Catalog, index: int, fmt: str) -> str:
    if fmt not in RENDERERS:
        raise ValueError(f"Unsupported export format: {fmt}")
    source = catalog.files[index]
    return RENDERERS[fmt](source, build_entries(source, catalog.root))


def export_file(catalog: Catalog, index: int, fmt: str, out_dir: Path) -> Path:
    payload = render_file(catalog, index, fmt)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = export_path(out_dir, catalog.files[index].filename, fmt)
    path.write_text(payload, encoding="utf-8")
    log.info("Exported %s to %s", catalog.files[index].filename, path)
    return path


def export_all(catalog: Catalog, formats: list[str], out_dir: Path) -> list[Path]:
    written: list[Path] = []
    for index in range(catalog.file_count):
        for fmt in formats:
            written.append(export_file(catalog, index, fmt, out_dir))
    return written
