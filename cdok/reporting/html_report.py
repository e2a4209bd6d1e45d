from __future__ import annotations

import html
import re

from cdok.catalog.model import SourceFile
from cdok.reporting.summary import ReportEntry, build_summary

STYLE = """
    body { font-family: sans-serif; margin: 2em auto; max-width: 960px; color: #222; }
    h1 { border-bottom: 2px solid #369; padding-bottom: .3em; }
    .coverage { color: #555; }
    .fn { border: 1px solid #ddd; border-radius: 4px; margin: 1.5em 0; padding: 0 1em 1em; }
    .fn.undocumented h2::after { content: " (not yet documented)"; color: #b60; font-size: .7em; }
    .sig { background: #f4f6fa; padding: .5em; font-family: monospace; }
    pre { background: #f8f8f8; padding: .5em; overflow-x: auto; }
    table { border-collapse: collapse; }
    td, th { border: 1px solid #ccc; padding: .2em .6em; text-align: left; }
"""


def escape(text: str) -> str:
    return html.escape(text, quote=True)


def make_anchor(name: str, line: int) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]", "-", f"fn-{name}-{line}").lower().strip("-")


def _function_html(entry: ReportEntry) -> str:
    func = entry.function
    classes = "fn" if func.is_documented else "fn undocumented"
    parts = [
        f'  <div class="{classes}" id="{make_anchor(func.name, func.line_number)}">',
        f"    <h2>{escape(func.name)} <small>(line {func.line_number})</small></h2>",
        f'    <div class="sig">{escape(func.signature)}</div>',
        f"    <p><strong>Return type:</strong> <code>{escape(func.return_type)}</code></p>",
    ]
    if func.params:
        parts.append("    <table>")
        parts.append("      <tr><th>Parameter</th><th>Type</th><th>Hint</th></tr>")
        for p in func.params:
            parts.append(
                f"      <tr><td><code>{escape(p.name)}</code></td>"
                f"<td><code>{escape(p.display_type)}</code></td><td>{escape(p.description)}</td></tr>"
            )
        parts.append("    </table>")

    sections = entry.doc_sections()
    if sections:
        parts.append("    <dl>")
        for label, value in sections:
            parts.append(f"      <dt>{escape(label)}</dt><dd>{escape(value)}</dd>")
        parts.append("    </dl>")

    if entry.source is not None:
        parts.append(f"    <pre><code>{escape(entry.source.text)}</code></pre>")
    else:
        parts.append(f"    <p><em>{escape(entry.source_error or 'Source unavailable')}</em></p>")
    parts.append("  </div>")
    return "\n".join(parts)


def render_html_report(source: SourceFile, entries: list[ReportEntry]) -> str:
    summary = build_summary(source)
    title = f"Documentation for {source.filename}"
    body = "\n".join(_function_html(e) for e in entries) or "  <p>No functions found in this file.</p>"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{escape(title)}</title>
  <style>{STYLE}  </style>
</head>
<body>
  <h1>{escape(title)}</h1>
  <p class="coverage">{summary['documented']} of {summary['total_functions']} functions documented \
({summary['coverage']:.1f}% coverage)</p>
{body}
</body>
</html>
"""
