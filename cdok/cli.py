from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from cdok.catalog.model import Catalog
from cdok.catalog.search import find_undocumented
from cdok.config import Config, build_parser, resolve_config
from cdok.reporting.export import export_all
from cdok.reporting.summary import build_catalog_summary
from cdok.scanner.file_scanner import scan_directory
from cdok.store.doc_store import load_documentation
from cdok.tui.navigator import Navigator, docs_path
from cdok.tui.terminal import Terminal, raw_mode
from cdok.utils.logging import configure_logging

log = logging.getLogger("cdok")

USAGE = "Usage: cdok [project_directory]"


def _change_directory(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError as e:
        print(f"Failed to change to specified directory: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return False
    log.info("Changed to directory: %s", path)
    return True


def _print_functions(catalog: Catalog) -> None:
    for _, func in catalog.iter_functions():
        print(f"{func.filename}:{func.line_number} {func.name}")
    s = build_catalog_summary(catalog)
    print(f"{s['files']} files, {s['total_functions']} functions, {s['documented']} documented ({s['coverage']:.1f}%)")


def _print_undocumented(catalog: Catalog) -> None:
    refs = find_undocumented(catalog)
    for ref in refs:
        func = catalog.function(ref)
        print(f"{func.filename}::{func.name} (line {func.line_number})")
    if not refs:
        print("All functions are documented!")


def _run_interactive(catalog: Catalog, cfg: Config) -> None:
    navigator = Navigator(catalog, cfg, Terminal(color=cfg.ui.color))
    with raw_mode():
        navigator.run()


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Project-local cdok.toml is discovered after the chdir; --config stays relative to the caller.
    if args.config_path:
        args.config_path = os.path.abspath(args.config_path)
    if args.path and not _change_directory(args.path):
        return 1

    try:
        cfg = resolve_config(args)
    except (ValueError, TypeError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    batch = cfg.dry_run or cfg.list_undocumented or cfg.export_all
    configure_logging(cfg.logging.verbose, cfg.logging.quiet, cfg.logging.log_file, console=batch)

    try:
        print("Scanning C files in current directory...")
        catalog = scan_directory(Path("."), cfg.scan, progress=cfg.logging.progress and not cfg.logging.quiet)
        result = load_documentation(catalog, docs_path(catalog, cfg))
        log.debug("Documentation fields restored: %d", result.applied)

        if catalog.file_count == 0:
            print("No C files found in current directory.", file=sys.stderr)
            print(
                "Make sure you're running this from your project directory containing .c and .h files.",
                file=sys.stderr,
            )
            return 1

        if cfg.dry_run:
            _print_functions(catalog)
            return 0
        if cfg.list_undocumented:
            _print_undocumented(catalog)
            return 0
        if cfg.export_all:
            for path in export_all(catalog, cfg.export_cfg.formats, Path(cfg.export_cfg.out_dir)):
                print(str(path))
            return 0

        _run_interactive(catalog, cfg)
        return 0

    except ValueError as e:
        print(f"Usage error: {e}", file=sys.stderr)
        return 2
    except Exception as e:  # noqa: BLE001
        log.debug("Unhandled error", exc_info=True)
        print(f"Runtime error: {e}", file=sys.stderr)
        return 3


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
