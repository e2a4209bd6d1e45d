from __future__ import annotations

from cdok.catalog.model import SourceFile
from cdok.reporting.summary import ReportEntry, build_summary

RULE = "=" * 79
THIN_RULE = "-" * 40


def _entry_lines(entry: ReportEntry) -> list[str]:
    func = entry.function
    lines = [
        RULE,
        f"FUNCTION: {func.name} (Line {func.line_number})",
        RULE,
        f"Signature: {func.signature}",
        f"Return Type: {func.return_type}",
    ]
    if func.params:
        lines.append(f"Parameters ({func.param_count}): " + ", ".join(f"{p.display_type} {p.name}" for p in func.params))
    else:
        lines.append("Parameters: None")

    lines.extend(["", "Source:", THIN_RULE])
    if entry.source is not None:
        lines.extend(f"{n:3d}: {text}" for n, text in entry.source.numbered())
    else:
        lines.append(entry.source_error or "Source unavailable")
    lines.extend([THIN_RULE, "", "DOCUMENTATION:"])

    if func.is_documented:
        lines.extend(f"{label}: {value}" for label, value in entry.doc_sections())
    else:
        lines.append("*** NOT YET DOCUMENTED ***")
    lines.append("")
    return lines


def render_text_report(source: SourceFile, entries: list[ReportEntry]) -> str:
    summary = build_summary(source)
    lines = [
        f"COMPLETE DOCUMENTATION FOR: {source.filename}",
        "Generated by cdok",
        "",
        f"Functions: {summary['total_functions']}, documented: {summary['documented']} "
        f"(coverage {summary['coverage']:.1f}%)",
        "",
    ]
    if not entries:
        lines.append("No functions found in this file.")
    for entry in entries:
        lines.extend(_entry_lines(entry))
    lines.extend([RULE, f"END OF DOCUMENTATION FOR {source.filename}", RULE])
    return "\n".join(lines).rstrip() + "\n"
