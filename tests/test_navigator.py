from __future__ import annotations

import io
from pathlib import Path

from cdok.config import Config
from cdok.scanner.file_scanner import scan_directory
from cdok.store.doc_store import load_documentation
from cdok.tui.navigator import NavState, Navigator
from cdok.tui.terminal import CLEAR_SCREEN, Terminal
from tests.project_utils import copy_sample_project

DOWN = "\033[B"
UP = "\033[A"


def _navigator(root: Path, keys: str = "", cfg: Config | None = None) -> tuple[Navigator, io.StringIO]:
    cfg = cfg or Config()
    out = io.StringIO()
    terminal = Terminal(stdin=io.StringIO(keys), stdout=out, color=False)
    return Navigator(scan_directory(root, cfg.scan), cfg, terminal), out


def _open(nav: Navigator, filename: str, name: str) -> None:
    """Drive the keyboard from the file list to the detail view of ``name``."""
    file_idx, func_idx = nav.catalog.find(filename, name)
    for _ in range(file_idx):
        nav.handle_key("down")
    nav.handle_key("enter")
    for _ in range(func_idx):
        nav.handle_key("down")
    nav.handle_key("enter")


def test_files_to_functions_to_detail_and_back(tmp_path: Path):
    nav, _ = _navigator(copy_sample_project(tmp_path))
    _open(nav, "math_utils.c", "twice")

    assert nav.state is NavState.FUNCTION_DETAIL
    assert nav.current.name == "twice"
    assert "FUNCTION: twice" in nav.render()

    nav.handle_key("b")
    assert nav.state is NavState.FUNCTIONS
    assert nav.selection == nav.current_function

    nav.handle_key("b")
    assert nav.state is NavState.FILES
    assert nav.selection == nav.current_file


def test_selection_is_clamped(tmp_path: Path):
    nav, _ = _navigator(copy_sample_project(tmp_path))
    nav.handle_key("up")
    assert nav.selection == 0
    for _ in range(5):
        nav.handle_key("down")
    assert nav.selection == nav.catalog.file_count - 1


def test_search_and_open_result(tmp_path: Path):
    nav, _ = _navigator(copy_sample_project(tmp_path), keys="clamp\n")
    nav.handle_key("s")

    assert nav.state is NavState.SEARCH
    assert nav.search_term == "clamp"
    assert [nav.catalog.function(r).name for r in nav.search_results] == ["clamp_count"]
    assert 'SEARCH RESULTS for "clamp"' in nav.render()

    nav.handle_key("enter")
    assert nav.state is NavState.FUNCTION_DETAIL
    assert nav.current.name == "clamp_count"


def test_empty_search_results(tmp_path: Path):
    nav, _ = _navigator(copy_sample_project(tmp_path), keys="zzz\n")
    nav.handle_key("s")
    assert nav.search_results == []
    assert "No results found." in nav.render()
    nav.handle_key("enter")
    assert nav.state is NavState.SEARCH
    nav.handle_key("b")
    assert (nav.state, nav.selection) == (NavState.FILES, 0)


def test_edit_saves_and_marks_documented(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    answers = "Adds two ints.\n\nThe sum.\n\n\n" + "k"
    nav, out = _navigator(root, keys=answers)
    _open(nav, "math_utils.c", "add")
    nav.handle_key("e")

    func = nav.current
    assert func.is_documented is True
    assert func.description == "Adds two ints."
    assert func.return_value == "The sum."
    assert func.parameters == "@param a (int) - Parameter; @param b (int) - Parameter"
    assert "Documentation saved!" in out.getvalue()

    fresh = scan_directory(root, nav.cfg.scan)
    load_documentation(fresh, root / ".project_docs.txt")
    assert fresh.function(fresh.find("math_utils.c", "add")).description == "Adds two ints."


def test_edit_without_description_stays_undocumented(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    nav, _ = _navigator(root, keys="\n\n\n\nneeds review\nk")
    _open(nav, "math_utils.c", "run")
    nav.handle_key("e")

    assert nav.current.notes == "needs review"
    assert nav.current.is_documented is False


def test_undocumented_view_edits_and_refreshes(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    nav, _ = _navigator(root, keys="Documented now.\n\n\n\n\nk")
    nav.handle_key("u")
    assert nav.state is NavState.UNDOCUMENTED
    assert len(nav.undocumented) == 6
    first = nav.catalog.function(nav.undocumented[0])

    nav.handle_key("enter")
    assert first.is_documented is True
    assert len(nav.undocumented) == 5
    assert nav.catalog.function(nav.undocumented[0]) is not first
    assert (root / ".project_docs.txt").exists()


def test_all_documented_message(tmp_path: Path):
    root = tmp_path / "one"
    root.mkdir()
    (root / "one.c").write_text("int one(void)\n{\n}\n", encoding="utf-8")
    nav, _ = _navigator(root)
    nav.catalog.files[0].functions[0].is_documented = True
    nav.handle_key("u")
    assert "All functions are documented!" in nav.render()


def test_view_source_and_auto_parsed(tmp_path: Path):
    nav, out = _navigator(copy_sample_project(tmp_path), keys="kk")
    _open(nav, "math_utils.c", "clamp_count")
    nav.handle_key("v")
    nav.handle_key("a")

    text = out.getvalue()
    assert "SOURCE CODE: clamp_count" in text
    assert "  9: static int clamp_count(int count, int max_len) {" in text
    assert "@param count (int) - Size/count parameter" in text


def test_rescan_drops_derived_views(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    nav, _ = _navigator(root)
    nav.handle_key("u")
    nav.handle_key("b")
    (root / "extra.c").write_text("int extra(void)\n{\n}\n", encoding="utf-8")

    nav.handle_key("r")
    assert nav.catalog.file_count == 3
    assert nav.undocumented == []
    assert nav.state is NavState.FILES


def test_export_selected_file(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    cfg = Config()
    cfg.export_cfg.out_dir = str(root / "out")
    cfg.export_cfg.formats = ["txt"]
    nav, _ = _navigator(root, cfg=cfg)
    idx = next(i for i, f in enumerate(nav.catalog.files) if f.filename == "math_utils.h")
    for _ in range(idx):
        nav.handle_key("down")
    nav.handle_key("x")

    assert (root / "out" / "math_utils_docs.txt").exists()
    assert "Exported:" in nav.render()


def test_print_documentation_pages(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    cfg = Config()
    cfg.ui.page_size = 2
    nav, out = _navigator(root, keys="kkk", cfg=cfg)
    idx = next(i for i, f in enumerate(nav.catalog.files) if f.filename == "math_utils.c")
    nav.print_file_documentation(idx)

    text = out.getvalue()
    assert "COMPLETE DOCUMENTATION FOR: math_utils.c" in text
    assert "(showing function 2 of 4)" in text
    assert "(showing function 4 of 4)" not in text
    assert "END OF DOCUMENTATION FOR math_utils.c" in text


def test_run_loop_quits_on_q_and_eof(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    nav, out = _navigator(root, keys=DOWN + UP + "\nq")
    nav.run()
    assert nav.running is False
    assert nav.state is NavState.FUNCTIONS
    assert out.getvalue().count(CLEAR_SCREEN) == 4

    nav, _ = _navigator(root, keys="")
    nav.run()
    assert nav.running is False
