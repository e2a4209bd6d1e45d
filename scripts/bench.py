from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Allow running as `python scripts/bench.py` without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cdok.chunking.function_chunker import extract_function_source
from cdok.config import ScanConfig
from cdok.scanner.file_scanner import scan_directory


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark cdok scan and source extraction throughput")
    p.add_argument("path", nargs="?", default=".")
    p.add_argument("--repeat", type=int, default=1)
    p.add_argument("--max-files", type=int, default=ScanConfig().max_files)
    p.add_argument("--max-functions", type=int, default=ScanConfig().max_functions_per_file)
    p.add_argument("--with-source", action="store_true", help="Also extract every function body")
    return p


def main() -> None:
    args = build_parser().parse_args()
    root = Path(args.path)
    scan_cfg = ScanConfig(max_files=args.max_files, max_functions_per_file=args.max_functions)
    repeat = max(1, args.repeat)

    t0 = time.perf_counter()
    files = functions = lines = 0
    for _ in range(repeat):
        catalog = scan_directory(root, scan_cfg)
        files += catalog.file_count
        functions += catalog.total_functions
        if args.with_source:
            for _, func in catalog.iter_functions():
                chunk = extract_function_source(func, root)
                lines += len(chunk.lines) if chunk else 0
    elapsed = max(1e-9, time.perf_counter() - t0)

    print(f"files: {files // repeat}")
    print(f"functions: {functions // repeat}")
    print(f"lines: {lines // repeat}")
    print(f"files/sec: {files/elapsed:.2f}")
    print(f"functions/sec: {functions/elapsed:.2f}")


if __name__ == "__main__":
    main()
