from __future__ import annotations

import logging
from pathlib import Path

from cdok.catalog.model import Catalog, Function, SourceFile
from cdok.config import ScanConfig
from cdok.parsing.parameters import generate_parameter_documentation, parse_function_parameters
from cdok.parsing.signature import extract_function_name, extract_return_type
from cdok.scanner.language_filter import is_c_file
from cdok.scanner.line_classifier import is_function_line
from cdok.utils.progress import maybe_progress

log = logging.getLogger("cdok.scanner")


def parse_c_file(path: Path, filename: str, scan_cfg: ScanConfig) -> SourceFile | None:
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError as e:
        log.debug("Skipping unreadable file %s: %s", path, e)
        return None

    source = SourceFile(filename=filename, path=path)
    for line_number, raw in enumerate(lines, start=1):
        if source.function_count >= scan_cfg.max_functions_per_file:
            log.debug("Function cap %d reached in %s", scan_cfg.max_functions_per_file, filename)
            break
        if not is_function_line(raw, filename):
            continue
        signature = raw.strip()
        name = extract_function_name(signature)
        if name is None:
            continue
        params = parse_function_parameters(signature, scan_cfg.max_params)
        source.functions.append(
            Function(
                name=name,
                signature=signature,
                filename=filename,
                line_number=line_number,
                return_type=extract_return_type(signature),
                params=params,
                parameters=generate_parameter_documentation(params),
            )
        )
    return source


def scan_directory(root: str | Path, scan_cfg: ScanConfig, progress: bool = False) -> Catalog:
    """Build a fresh catalog from the ``.c``/``.h`` files directly inside ``root``.

    Files keep directory-iteration order. Files without any recognised function
    are left out entirely.
    """
    base = Path(root)
    catalog = Catalog(root=base)
    candidates = [p for p in base.iterdir() if is_c_file(p.name) and p.is_file()]

    for i, path in enumerate(candidates, start=1):
        if catalog.file_count >= scan_cfg.max_files:
            log.debug("File cap %d reached; %d candidates not admitted", scan_cfg.max_files, len(candidates) - i + 1)
            break
        maybe_progress(progress, i, len(candidates), path.name)
        source = parse_c_file(path, path.name, scan_cfg)
        if source is None or source.function_count == 0:
            continue
        catalog.files.append(source)

    log.debug("Scanned %s: %d files, %d functions", base, catalog.file_count, catalog.total_functions)
    return catalog
