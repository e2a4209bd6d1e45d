from __future__ import annotations

import enum
import logging
from pathlib import Path

from cdok.catalog.model import Catalog, Function, FunctionRef
from cdok.catalog.search import find_undocumented, perform_search
from cdok.chunking.function_chunker import extract_function_source
from cdok.config import Config
from cdok.reporting.export import export_file
from cdok.reporting.summary import build_entries
from cdok.scanner.file_scanner import scan_directory
from cdok.store.doc_store import DocStoreError, load_documentation, save_documentation
from cdok.tui import screens
from cdok.tui.terminal import BOLD, CYAN, GREEN, RED, Palette, Terminal

log = logging.getLogger("cdok.tui")

# Prompt label, Function attribute.
EDIT_FIELDS = (
    ("description", "description"),
    ("parameters", "parameters"),
    ("return value", "return_value"),
    ("example", "example"),
    ("notes", "notes"),
)


class NavState(enum.Enum):
    FILES = "files"
    FUNCTIONS = "functions"
    FUNCTION_DETAIL = "function_detail"
    SEARCH = "search"
    UNDOCUMENTED = "undocumented"


def docs_path(catalog: Catalog, cfg: Config) -> Path:
    return catalog.root / cfg.store.docs_file


class Navigator:
    """Keyboard-driven browser over a catalog.

    Derived lists (search results, undocumented functions) hold index pairs and
    are recomputed explicitly whenever the catalog changes.
    """

    def __init__(self, catalog: Catalog, cfg: Config, terminal: Terminal) -> None:
        self.catalog = catalog
        self.cfg = cfg
        self.terminal = terminal
        self.state = NavState.FILES
        self.selection = 0
        self.current_file = 0
        self.current_function = 0
        self.search_term = ""
        self.search_results: list[FunctionRef] = []
        self.undocumented: list[FunctionRef] = []
        self.message = ""
        self.running = True

    @property
    def palette(self) -> Palette:
        return self.terminal.palette

    @property
    def current(self) -> Function:
        return self.catalog.function((self.current_file, self.current_function))

    def _list_length(self) -> int:
        if self.state is NavState.FILES:
            return self.catalog.file_count
        if self.state is NavState.FUNCTIONS:
            return self.catalog.files[self.current_file].function_count
        if self.state is NavState.SEARCH:
            return len(self.search_results)
        if self.state is NavState.UNDOCUMENTED:
            return len(self.undocumented)
        return 0

    def _move(self, key: str) -> None:
        if key == "up" and self.selection > 0:
            self.selection -= 1
        elif key == "down" and self.selection < self._list_length() - 1:
            self.selection += 1

    # Rendering

    def render(self) -> str:
        p = self.palette
        if self.state is NavState.FILES:
            text = screens.files_screen(self.catalog, self.selection, p)
        elif self.state is NavState.FUNCTIONS:
            text = screens.functions_screen(self.catalog.files[self.current_file], self.selection, p)
        elif self.state is NavState.FUNCTION_DETAIL:
            text = screens.function_detail_screen(self.current, p)
        elif self.state is NavState.SEARCH:
            text = screens.search_screen(self.catalog, self.search_term, self.search_results, self.selection, p)
        else:
            text = screens.undocumented_screen(self.catalog, self.undocumented, self.selection, p)
        if self.message:
            text += "\n" + self.message + "\n"
            self.message = ""
        return text

    def run(self) -> None:
        while self.running:
            self.terminal.clear()
            self.terminal.write(self.render())
            self.terminal.flush()
            self.handle_key(self.terminal.read_key())

    # Input dispatch

    def handle_key(self, key: str) -> None:
        if key in ("q", "eof"):
            self.running = False
            return
        if key in ("up", "down"):
            self._move(key)
            return
        handler = {
            NavState.FILES: self._on_files,
            NavState.FUNCTIONS: self._on_functions,
            NavState.FUNCTION_DETAIL: self._on_detail,
            NavState.SEARCH: self._on_search,
            NavState.UNDOCUMENTED: self._on_undocumented,
        }[self.state]
        handler(key)

    def _on_files(self, key: str) -> None:
        if key == "r":
            self.rescan()
        elif key == "p":
            if self.catalog.file_count:
                self.print_file_documentation(self.selection)
        elif key == "x":
            if self.catalog.file_count:
                self.export_selected(self.selection)
        elif key == "s":
            term = self.terminal.read_line("Search term: ")
            if term:
                self.search_term = term
                self.search_results = perform_search(self.catalog, term)
                self.state = NavState.SEARCH
                self.selection = 0
        elif key == "u":
            self.undocumented = find_undocumented(self.catalog)
            self.state = NavState.UNDOCUMENTED
            self.selection = 0
        elif key == "enter":
            if self.catalog.file_count:
                self.current_file = self.selection
                self.state = NavState.FUNCTIONS
                self.selection = 0

    def _on_functions(self, key: str) -> None:
        if key == "b":
            self.state = NavState.FILES
            self.selection = self.current_file
        elif key == "enter":
            if self.catalog.files[self.current_file].function_count:
                self.current_function = self.selection
                self.state = NavState.FUNCTION_DETAIL

    def _on_detail(self, key: str) -> None:
        if key == "b":
            self.state = NavState.FUNCTIONS
            self.selection = self.current_function
        elif key == "e":
            self.edit_function(self.current)
        elif key == "a":
            self.terminal.clear()
            self.terminal.write(screens.auto_parsed_screen(self.current, self.palette))
            self.terminal.pause("Press any key to go back")
        elif key == "v":
            self.terminal.clear()
            self.terminal.writeln("\n".join(screens.header(self.palette)))
            self.terminal.writeln(self.palette.paint(f"\nSOURCE CODE: {self.current.name}", BOLD, GREEN))
            self.terminal.write(self.source_text(self.current))
            self.terminal.pause("\nPress any key to continue...")

    def _on_search(self, key: str) -> None:
        if key == "b":
            self.state = NavState.FILES
            self.selection = 0
        elif key == "enter" and self.search_results:
            self.current_file, self.current_function = self.search_results[self.selection]
            self.state = NavState.FUNCTION_DETAIL

    def _on_undocumented(self, key: str) -> None:
        if key == "b":
            self.state = NavState.FILES
            self.selection = 0
        elif key == "enter" and self.undocumented:
            self.edit_function(self.catalog.function(self.undocumented[self.selection]))
            self.undocumented = find_undocumented(self.catalog)
            self.selection = max(0, min(self.selection, len(self.undocumented) - 1))

    # Actions

    def rescan(self) -> None:
        self.terminal.writeln("Rescanning project files...")
        self.catalog = scan_directory(self.catalog.root, self.cfg.scan)
        try:
            load_documentation(self.catalog, docs_path(self.catalog, self.cfg))
        except DocStoreError as e:
            self.message = self.palette.paint(str(e), RED)
        self.search_results = []
        self.undocumented = []
        self.selection = max(0, min(self.selection, self.catalog.file_count - 1))
        self.current_file = 0
        self.current_function = 0

    def source_text(self, func: Function) -> str:
        try:
            chunk = extract_function_source(func, self.catalog.root)
        except OSError:
            return screens.source_block(None, f"Could not open {func.filename} to display function source.", self.palette)
        if chunk is None:
            return screens.source_block(None, f"Could not find function at line {func.line_number}", self.palette)
        return screens.source_block(chunk, None, self.palette)

    def print_file_documentation(self, index: int) -> None:
        source = self.catalog.files[index]
        p = self.palette
        t = self.terminal
        t.clear()
        t.writeln("\n".join(screens.header(p)))
        t.writeln(p.paint(f"COMPLETE DOCUMENTATION FOR: {source.filename}", BOLD, GREEN))
        t.writeln("Generated by cdok\n")

        entries = build_entries(source, self.catalog.root)
        page = self.cfg.ui.page_size
        for i, entry in enumerate(entries, start=1):
            t.write(screens.file_documentation_block(entry, p))
            t.writeln()
            if i % page == 0 and i < len(entries):
                t.pause(f"--- Press any key to continue (showing function {i} of {len(entries)}) ---")
                t.writeln()

        t.writeln(screens.RULE)
        t.writeln(p.paint(f"END OF DOCUMENTATION FOR {source.filename}", BOLD, GREEN))
        t.writeln(screens.RULE)
        t.pause("\nPress any key to continue...")

    def export_selected(self, index: int) -> None:
        out_dir = Path(self.cfg.export_cfg.out_dir)
        written: list[str] = []
        try:
            for fmt in self.cfg.export_cfg.formats:
                written.append(str(export_file(self.catalog, index, fmt, out_dir)))
        except OSError as e:
            log.warning("Export failed: %s", e)
            self.message = self.palette.paint(f"Export failed: {e}", RED)
            return
        self.message = self.palette.paint("Exported: " + ", ".join(written), GREEN)

    def edit_function(self, func: Function) -> bool:
        """Prompt for each documentation field and persist. Returns True if saved."""
        p = self.palette
        t = self.terminal
        t.clear()
        t.writeln(p.paint(f"Editing documentation for: {func.name}", BOLD, CYAN))
        t.writeln(f"File: {func.filename}:{func.line_number}")
        t.write(self.source_text(func))
        t.writeln(p.paint("\nDocumentation Editor", BOLD, CYAN))
        t.writeln("(Leave empty to keep current value, or type new value)")
        t.writeln("Press ENTER after each field to continue...\n")

        for label, attr in EDIT_FIELDS:
            t.writeln(p.paint(f"Current {label}:", BOLD) + f" {getattr(func, attr)}")
            func.apply_edit(attr, t.read_line(f"New {label}: "))
            t.writeln()

        try:
            save_documentation(self.catalog, docs_path(self.catalog, self.cfg))
        except DocStoreError as e:
            t.writeln(p.paint(f"Documentation NOT saved: {e}", RED))
            t.pause()
            return False
        t.writeln(p.paint("Documentation saved!", GREEN))
        t.pause()
        return True
