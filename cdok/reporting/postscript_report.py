from __future__ import annotations

import textwrap

from cdok.catalog.model import SourceFile
from cdok.reporting.summary import ReportEntry
from cdok.reporting.text_report import render_text_report

# US Letter, points.
PAGE_TOP = 750
PAGE_BOTTOM = 50
LEFT_MARGIN = 40
FONT_SIZE = 9
LEADING = 11
WRAP_COLUMNS = 95

LINES_PER_PAGE = (PAGE_TOP - PAGE_BOTTOM) // LEADING


def ps_escape(text: str) -> str:
    # PostScript strings are bytes; anything outside Latin-1 becomes "?".
    text = text.encode("latin-1", errors="replace").decode("latin-1")
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _wrap(lines: list[str]) -> list[str]:
    out: list[str] = []
    for line in lines:
        line = line.expandtabs(4)
        if len(line) <= WRAP_COLUMNS:
            out.append(line)
            continue
        out.extend(textwrap.wrap(line, WRAP_COLUMNS, subsequent_indent="    ", drop_whitespace=False) or [""])
    return out


def paginate(lines: list[str]) -> list[list[str]]:
    pages = [lines[i : i + LINES_PER_PAGE] for i in range(0, len(lines), LINES_PER_PAGE)]
    return pages or [[]]


def render_postscript_report(source: SourceFile, entries: list[ReportEntry]) -> str:
    body = _wrap(render_text_report(source, entries).splitlines())
    pages = paginate(body)
    out = [
        "%!PS-Adobe-3.0",
        f"%%Title: ({ps_escape(source.filename)} documentation)",
        "%%Creator: cdok",
        f"%%Pages: {len(pages)}",
        "%%DocumentFonts: Courier Courier-Bold",
        "%%EndComments",
        "%%BeginProlog",
        f"/F {{ /Courier findfont {FONT_SIZE} scalefont setfont }} def",
        f"/FB {{ /Courier-Bold findfont {FONT_SIZE} scalefont setfont }} def",
        "/L { moveto show } def",
        "%%EndProlog",
    ]
    for number, page in enumerate(pages, start=1):
        out.append(f"%%Page: {number} {number}")
        out.append("FB")
        out.append(f"({ps_escape(source.filename)} - page {number} of {len(pages)}) {LEFT_MARGIN} {PAGE_TOP + 2 * LEADING} L")
        out.append("F")
        y = PAGE_TOP
        for line in page:
            if line:
                out.append(f"({ps_escape(line)}) {LEFT_MARGIN} {y} L")
            y -= LEADING
        out.append("showpage")
    out.extend(["%%Trailer", "%%EOF"])
    return "\n".join(out) + "\n"
