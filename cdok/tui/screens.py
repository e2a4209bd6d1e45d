from __future__ import annotations

from cdok.catalog.model import Catalog, Function, FunctionRef, SourceFile
from cdok.chunking.function_chunker import CodeChunk
from cdok.reporting.summary import ReportEntry, build_catalog_summary
from cdok.tui.terminal import BLUE, BOLD, CYAN, GREEN, RED, YELLOW, Palette

RULE = "=" * 79
SOURCE_RULE = "-" * 40

FILES_HELP = (
    "Use up/down to navigate, ENTER to view functions, 'p' to print file docs, 'x' to export, "
    "'r' to rescan, 's' to search, 'u' for undocumented, 'q' to quit"
)
FUNCTIONS_HELP = "Use up/down to navigate, ENTER to view/edit docs, 'b' to go back"
DETAIL_HELP = "Press 'e' to edit documentation, 'v' to view source, 'a' to view auto-parsed info, 'b' to go back"
LIST_HELP = "Use up/down to navigate, ENTER to {action}, 'b' to go back"


def _marker(selected: bool, p: Palette) -> str:
    return p.paint("> ", BOLD, YELLOW) if selected else "  "


def _status(func: Function, p: Palette) -> str:
    return p.paint("*", GREEN) if func.is_documented else p.paint(" ", YELLOW)


def header(p: Palette) -> list[str]:
    return [
        p.paint(RULE, BOLD, CYAN),
        p.paint("DYNAMIC C PROJECT DOCUMENTATION".center(79).rstrip(), BOLD, CYAN),
        p.paint(RULE, BOLD, CYAN),
    ]


def stats_line(catalog: Catalog, p: Palette) -> str:
    s = build_catalog_summary(catalog)
    return (
        p.paint("Project Stats: ", BLUE)
        + f"{s['files']} files, {s['total_functions']} functions, {s['documented']} documented ({s['coverage']:.1f}%)"
    )


def files_screen(catalog: Catalog, selection: int, p: Palette) -> str:
    lines = header(p) + [stats_line(catalog, p), "", p.paint("SOURCE FILES", BOLD, GREEN), FILES_HELP, ""]
    for i, source in enumerate(catalog.files):
        label = f"{source.filename} ({source.function_count} functions, {source.documented_count} documented)"
        lines.append(_marker(i == selection, p) + (p.paint(label, BOLD, YELLOW) if i == selection else label))
    if not catalog.files:
        lines.append(p.paint("No C files found in current directory.", YELLOW))
    return "\n".join(lines) + "\n"


def functions_screen(source: SourceFile, selection: int, p: Palette) -> str:
    lines = header(p) + ["", p.paint(f"FUNCTIONS in {source.filename}", BOLD, GREEN), FUNCTIONS_HELP, ""]
    for i, func in enumerate(source.functions):
        lines.append(
            f"{_marker(i == selection, p)}{_status(func, p)} {func.name} " + p.paint(f"(line {func.line_number})", BLUE)
        )
    return "\n".join(lines) + "\n"


def function_detail_screen(func: Function, p: Palette) -> str:
    lines = header(p) + [
        "",
        p.paint(f"FUNCTION: {func.name}", BOLD, GREEN),
        DETAIL_HELP,
        "",
        p.paint("File: ", BOLD, CYAN) + f"{func.filename}:{func.line_number}",
        p.paint("Signature: ", BOLD, CYAN) + func.signature,
    ]
    if func.params:
        lines.append(p.paint("Return Type: ", BOLD, CYAN) + func.return_type)
        lines.append(
            p.paint(f"Parameters ({func.param_count}): ", BOLD, CYAN)
            + ", ".join(f"{prm.display_type} {prm.name}" for prm in func.params)
        )
    else:
        lines.append(p.paint("Parameters: ", BOLD, CYAN) + "None")
    lines.append("")

    if func.is_documented:
        for label, value in ReportEntry(func, None).doc_sections():
            lines.extend([p.paint(f"{label}:", BOLD, CYAN), value, ""])
    else:
        lines.append(p.paint("This function is not yet documented. Press 'e' to add documentation.", YELLOW))
        lines.append(p.paint("Auto-generated parameter documentation is available as a starting point.", BLUE))
    return "\n".join(lines) + "\n"


def auto_parsed_screen(func: Function, p: Palette) -> str:
    lines = header(p) + [
        "",
        p.paint(f"AUTO-PARSED INFORMATION: {func.name}", BOLD, GREEN),
        "",
        p.paint("Return Type: ", BOLD, CYAN) + func.return_type,
        "",
    ]
    if func.params:
        lines.append(p.paint("Parsed Parameters:", BOLD, CYAN))
        for i, prm in enumerate(func.params, start=1):
            flags = [name for name, on in (("const", prm.is_const), ("pointer", prm.is_pointer), ("array", prm.is_array)) if on]
            lines.extend(
                [
                    f"  {i}. " + p.paint(prm.name, BOLD),
                    f"     Type: {prm.display_type}",
                    f"     Auto-description: {prm.description}",
                    f"     Flags: {' '.join(flags)}",
                    "",
                ]
            )
    else:
        lines.append(p.paint("Parameters: ", BOLD, CYAN) + "None (void function)")
    lines.append(p.paint("Auto-generated parameter documentation:", BOLD, CYAN))
    lines.append(func.parameters)
    return "\n".join(lines) + "\n"


def _ref_line(func: Function, selected: bool, p: Palette, with_status: bool) -> str:
    status = f"{_status(func, p)} " if with_status else ""
    return f"{_marker(selected, p)}{status}{func.filename}::{func.name} " + p.paint(f"(line {func.line_number})", BLUE)


def search_screen(catalog: Catalog, term: str, results: list[FunctionRef], selection: int, p: Palette) -> str:
    lines = header(p) + [
        "",
        p.paint(f'SEARCH RESULTS for "{term}"', BOLD, GREEN),
        LIST_HELP.format(action="view"),
        "",
    ]
    for i, ref in enumerate(results):
        lines.append(_ref_line(catalog.function(ref), i == selection, p, with_status=True))
    if not results:
        lines.append(p.paint("No results found.", YELLOW))
    return "\n".join(lines) + "\n"


def undocumented_screen(catalog: Catalog, refs: list[FunctionRef], selection: int, p: Palette) -> str:
    lines = header(p) + ["", p.paint("UNDOCUMENTED FUNCTIONS", BOLD, GREEN), LIST_HELP.format(action="document"), ""]
    for i, ref in enumerate(refs):
        lines.append(_ref_line(catalog.function(ref), i == selection, p, with_status=False))
    if not refs:
        lines.append(p.paint("All functions are documented!", GREEN))
    return "\n".join(lines) + "\n"


def source_block(chunk: CodeChunk | None, error: str | None, p: Palette) -> str:
    lines = [p.paint("Function Source Code:", BOLD, CYAN), p.paint(SOURCE_RULE, CYAN)]
    if chunk is not None:
        lines.extend(p.paint(f"{n:3d}: ", YELLOW) + text for n, text in chunk.numbered())
    lines.append(p.paint(SOURCE_RULE, CYAN))
    if error:
        lines.append(p.paint(error, RED))
    return "\n".join(lines) + "\n"


def file_documentation_block(entry: ReportEntry, p: Palette) -> str:
    func = entry.function
    lines = [
        RULE,
        p.paint(f"FUNCTION: {func.name}", BOLD, CYAN) + f" (Line {func.line_number})",
        RULE,
        source_block(entry.source, entry.source_error, p).rstrip("\n"),
        "",
        p.paint("DOCUMENTATION:", BOLD, CYAN),
    ]
    if func.is_documented:
        lines.extend(p.paint(f"{label}:", BOLD) + f" {value}" for label, value in entry.doc_sections())
    else:
        lines.append(p.paint("*** NOT YET DOCUMENTED ***", YELLOW))
    lines.append("")
    return "\n".join(lines) + "\n"
