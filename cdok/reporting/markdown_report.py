from __future__ import annotations

from cdok.catalog.model import SourceFile
from cdok.reporting.summary import ReportEntry, build_summary


def _markdown_link(label: str, uri: str) -> str:
    return f"[{label}]({uri})"


def _function_anchor(name: str, line: int) -> str:
    slug = "".join(ch.lower() if ch.isalnum() else "-" for ch in name).strip("-")
    return f"fn-{slug or 'unknown'}-{line}"


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def _fenced_block(text: str, lang: str = "c") -> list[str]:
    max_ticks = 0
    run = 0
    for ch in text:
        if ch == "`":
            run += 1
            max_ticks = max(max_ticks, run)
        else:
            run = 0
    fence = "`" * max(3, max_ticks + 1)
    return [f"{fence}{lang}", text, fence]


def _report_intro_lines(source: SourceFile) -> list[str]:
    return [
        f"# Documentation for `{source.filename}`",
        "",
        "[Coverage Summary](#coverage-summary) | [Function Table](#function-table)",
        "",
        "## Functions",
        "",
    ]


def _function_lines(entry: ReportEntry) -> list[str]:
    func = entry.function
    lines = [
        f'<a id="{_function_anchor(func.name, func.line_number)}"></a>',
        "",
        f"### `{func.name}`",
        "",
        f"- Line: `{func.line_number}`",
        f"- Return type: `{func.return_type}`",
        f"- Status: {'documented' if func.is_documented else '**not yet documented**'}",
        "",
        *_fenced_block(func.signature),
        "",
    ]
    if func.params:
        lines.extend(["| Parameter | Type | Hint |", "|---|---|---|"])
        for p in func.params:
            lines.append(f"| `{p.name}` | `{_escape_cell(p.display_type) or '-'}` | {p.description} |")
        lines.append("")

    for label, value in entry.doc_sections():
        lines.extend([f"{label}:", "", value, ""])

    if entry.source is not None:
        lines.extend(["Source:", "", *_fenced_block(entry.source.text), ""])
    else:
        lines.extend([f"Source: _{entry.source_error or 'unavailable'}_", ""])
    return lines


def _summary_and_table_lines(source: SourceFile) -> list[str]:
    summary = build_summary(source)
    lines = [
        "## Coverage Summary",
        "",
        f"- Functions: **{summary['total_functions']}**",
        f"- Documented: {summary['documented']}",
        f"- Undocumented: {summary['undocumented']}",
        f"- Coverage: **{summary['coverage']:.1f}%**",
        "",
        "## Function Table",
        "",
        "| Function | Line | Return type | Documented | Description |",
        "|---|---:|---|---|---|",
    ]
    for func in source.functions:
        link = _markdown_link(f"`{func.name}`", f"#{_function_anchor(func.name, func.line_number)}")
        lines.append(
            f"| {link} | {func.line_number} | `{_escape_cell(func.return_type)}` | "
            f"{'yes' if func.is_documented else 'no'} | {_escape_cell(func.description)} |"
        )
    return lines


def render_markdown_report(source: SourceFile, entries: list[ReportEntry]) -> str:
    lines = _report_intro_lines(source)
    if not entries:
        lines.extend(["_No functions found in this file._", ""])
    for entry in entries:
        lines.extend(_function_lines(entry))
    lines.extend(_summary_and_table_lines(source))
    return "\n".join(lines).rstrip() + "\n"
