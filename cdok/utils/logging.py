from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
    console: bool = True,
) -> None:
    """Set up the ``cdok`` logger tree.

    ``console=False`` is used while the full-screen browser owns the terminal:
    records then only go to ``log_file`` (or nowhere).
    """
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    if quiet:
        level = logging.WARNING

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
