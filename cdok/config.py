from __future__ import annotations

import argparse
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_DOCS_FILE = ".project_docs.txt"

EXPORT_FORMATS = {"txt", "md", "html", "ps"}
FORMAT_ALIASES = {"text": "txt", "markdown": "md", "htm": "html", "postscript": "ps"}


@dataclass
class ScanConfig:
    max_files: int = 200
    max_functions_per_file: int = 200
    max_params: int = 20


@dataclass
class StoreConfig:
    docs_file: str = DEFAULT_DOCS_FILE


@dataclass
class ExportConfig:
    formats: list[str] = field(default_factory=lambda: ["md"])
    out_dir: str = "."


@dataclass
class UIConfig:
    color: bool = True
    page_size: int = 3


@dataclass
class LoggingConfig:
    progress: bool = False
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None


@dataclass
class Config:
    path: str | None = None
    config_path: str | None = None
    dry_run: bool = False
    list_undocumented: bool = False
    export_all: bool = False

    scan: ScanConfig = field(default_factory=ScanConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    export_cfg: ExportConfig = field(default_factory=ExportConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cdok", description="Browse and document functions in a C project")
    p.add_argument("path", nargs="?", help="Project directory (defaults to the current directory)")
    p.add_argument("--config", dest="config_path")
    p.add_argument("--dry-run", action="store_true", help="Print discovered functions and exit")
    p.add_argument("--undocumented", action="store_true", help="Print undocumented functions and exit")

    p.add_argument("--export", help="Export every file and exit. Comma-separated: txt,md,html,ps")
    p.add_argument("--out-dir")
    p.add_argument("--docs-file")

    p.add_argument("--max-files", type=int)
    p.add_argument("--max-functions", type=int)
    p.add_argument("--max-params", type=int)

    p.add_argument("--no-color", action="store_true")
    p.add_argument("--page-size", type=int)

    p.add_argument("--progress", action="store_true", default=None)
    p.add_argument("--quiet", action="store_true")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-file")

    return p


def _deep_update(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def _discover_config_path() -> Path | None:
    candidates = [
        Path("./cdok.toml"),
        Path("./.cdok.toml"),
        Path.home() / ".config" / "cdok" / "config.toml",
    ]
    for c in candidates:
        if c.exists():
            return c
    return None


def _load_toml(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def _parse_env_value(raw: str) -> Any:
    low = raw.lower()
    if low in {"true", "false"}:
        return low == "true"
    try:
        return int(raw)
    except ValueError:
        if "," in raw:
            return [x.strip() for x in raw.split(",") if x.strip()]
        return raw


def _load_env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith("CDOK_"):
            continue
        key = k[len("CDOK_") :].lower()
        parts = key.split("__")
        cur = out
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})
        cur[parts[-1]] = _parse_env_value(v)
    return out


def _split_formats(raw: str) -> list[str]:
    return [x.strip().lower() for x in raw.split(",") if x.strip()]


def _apply_cli_overrides(data: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    cli: dict[str, Any] = {
        "path": args.path,
        "dry_run": args.dry_run,
        "list_undocumented": args.undocumented,
    }

    if args.config_path is not None:
        cli["config_path"] = args.config_path

    def sec(section: str) -> dict[str, Any]:
        return cli.setdefault(section, {})

    if args.export is not None:
        cli["export_all"] = True
        sec("export")["formats"] = _split_formats(args.export)

    mapping = {
        ("export", "out_dir"): args.out_dir,
        ("store", "docs_file"): args.docs_file,
        ("scan", "max_files"): args.max_files,
        ("scan", "max_functions_per_file"): args.max_functions,
        ("scan", "max_params"): args.max_params,
        ("ui", "page_size"): args.page_size,
        ("logging", "log_file"): args.log_file,
    }
    for (s, k), v in mapping.items():
        if v is not None:
            sec(s)[k] = v

    if args.no_color:
        sec("ui")["color"] = False
    if args.progress is True:
        sec("logging")["progress"] = True
    if args.quiet:
        sec("logging")["quiet"] = True
    if args.verbose:
        sec("logging")["verbose"] = True

    _deep_update(data, cli)
    return data


def _from_dict(d: dict[str, Any]) -> Config:
    return Config(
        path=d.get("path"),
        config_path=d.get("config_path"),
        dry_run=d.get("dry_run", False),
        list_undocumented=d.get("list_undocumented", False),
        export_all=d.get("export_all", False),
        scan=ScanConfig(**d.get("scan", {})),
        store=StoreConfig(**d.get("store", {})),
        export_cfg=ExportConfig(**d.get("export", {})),
        ui=UIConfig(**d.get("ui", {})),
        logging=LoggingConfig(**d.get("logging", {})),
    )


def resolve_config(args: argparse.Namespace) -> Config:
    data: dict[str, Any] = {}

    config_path = Path(args.config_path) if args.config_path else _discover_config_path()
    if config_path:
        _deep_update(data, _load_toml(config_path))
        data["config_path"] = str(config_path)

    _deep_update(data, _load_env_overrides())
    _apply_cli_overrides(data, args)

    cfg = _from_dict(data)

    if cfg.scan.max_files < 1:
        raise ValueError("scan.max_files must be >= 1")
    if cfg.scan.max_functions_per_file < 1:
        raise ValueError("scan.max_functions_per_file must be >= 1")
    if cfg.scan.max_params < 0:
        raise ValueError("scan.max_params must be >= 0")
    if cfg.ui.page_size < 1:
        raise ValueError("ui.page_size must be >= 1")
    if os.environ.get("NO_COLOR"):
        cfg.ui.color = False

    raw_formats = cfg.export_cfg.formats
    if isinstance(raw_formats, str):
        raw_formats = _split_formats(raw_formats)
    formats: list[str] = []
    for fmt in raw_formats:
        fmt = FORMAT_ALIASES.get(fmt, fmt)
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")
        if fmt not in formats:
            formats.append(fmt)
    if not formats:
        raise ValueError("export.formats must name at least one format")
    cfg.export_cfg.formats = formats

    return cfg
