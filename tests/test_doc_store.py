from __future__ import annotations

from pathlib import Path

import pytest

from cdok.config import ScanConfig
from cdok.scanner.file_scanner import scan_directory
from cdok.store.doc_store import DocStoreError, load_documentation, save_documentation
from tests.project_utils import copy_sample_project


def _document_add(catalog) -> None:
    func = catalog.function(catalog.find("math_utils.c", "add"))
    func.apply_edit("description", "Adds two integers.")
    func.apply_edit("parameters", "a: left operand; b: right operand")
    func.apply_edit("return_value", "The sum a + b.")
    func.apply_edit("example", "int s = add(1, 2);  /* s == 3 */")
    func.apply_edit("notes", "Overflow is undefined behaviour.")


def test_round_trip_restores_all_fields(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    catalog = scan_directory(root, ScanConfig())
    _document_add(catalog)
    assert save_documentation(catalog, docs) == 1

    fresh = scan_directory(root, ScanConfig())
    result = load_documentation(fresh, docs)
    func = fresh.function(fresh.find("math_utils.c", "add"))

    assert result.applied == 5
    assert result.discarded == 0
    assert func.is_documented is True
    assert func.description == "Adds two integers."
    assert func.parameters == "a: left operand; b: right operand"
    assert func.return_value == "The sum a + b."
    assert func.example == "int s = add(1, 2);  /* s == 3 */"
    assert func.notes == "Overflow is undefined behaviour."

    # Same name in the header stays untouched.
    header_add = fresh.function(fresh.find("math_utils.h", "add"))
    assert header_add.is_documented is False


def test_saved_file_layout(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    catalog = scan_directory(root, ScanConfig())
    _document_add(catalog)
    save_documentation(catalog, docs)

    lines = docs.read_text(encoding="utf-8").splitlines()
    assert lines[:3] == [
        "# Project Documentation",
        "# Auto-generated - do not edit the function signatures",
        "",
    ]
    assert lines[3:] == [
        "FUNCTION: add",
        "FILE: math_utils.c",
        "LINE: 4",
        "SIGNATURE: int add(int a, int b)",
        "DESCRIPTION: Adds two integers.",
        "PARAMETERS: a: left operand; b: right operand",
        "RETURN: The sum a + b.",
        "EXAMPLE: int s = add(1, 2);  /* s == 3 */",
        "NOTES: Overflow is undefined behaviour.",
        "---",
    ]


def test_only_documented_functions_are_saved(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    catalog = scan_directory(root, ScanConfig())
    twice = catalog.function(catalog.find("math_utils.c", "twice"))
    twice.apply_edit("notes", "notes without a description")

    assert save_documentation(catalog, docs) == 0
    assert "FUNCTION:" not in docs.read_text(encoding="utf-8")


def test_multiline_values_are_flattened(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    catalog = scan_directory(root, ScanConfig())
    run = catalog.function(catalog.find("math_utils.c", "run"))
    run.apply_edit("description", "first line\nsecond line")
    save_documentation(catalog, docs)

    fresh = scan_directory(root, ScanConfig())
    load_documentation(fresh, docs)
    assert fresh.function(fresh.find("math_utils.c", "run")).description == "first line second line"


def test_stale_entries_are_discarded(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    docs.write_text(
        "# Project Documentation\n\n"
        "FUNCTION: removed_fn\n"
        "FILE: math_utils.c\n"
        "DESCRIPTION: gone\n"
        "NOTES: gone too\n"
        "---\n"
        "FUNCTION: twice\n"
        "FILE: math_utils.c\n"
        "DESCRIPTION: Doubles x.\n"
        "---\n",
        encoding="utf-8",
    )
    catalog = scan_directory(root, ScanConfig())
    before = catalog.total_functions
    result = load_documentation(catalog, docs)

    assert result.discarded == 2
    assert result.applied == 1
    assert catalog.total_functions == before
    assert catalog.find("math_utils.c", "removed_fn") is None
    assert catalog.function(catalog.find("math_utils.c", "twice")).description == "Doubles x."


def test_separator_clears_current_keys(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    docs.write_text(
        "FUNCTION: twice\n"
        "FILE: math_utils.c\n"
        "---\n"
        "DESCRIPTION: orphan line after separator\n",
        encoding="utf-8",
    )
    catalog = scan_directory(root, ScanConfig())
    result = load_documentation(catalog, docs)
    assert result.applied == 0
    assert catalog.documented_functions == 0


def test_fields_without_description_do_not_mark_documented(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    docs.write_text("FUNCTION: run\nFILE: math_utils.c\nNOTES: only notes\n---\n", encoding="utf-8")
    catalog = scan_directory(root, ScanConfig())
    load_documentation(catalog, docs)
    run = catalog.function(catalog.find("math_utils.c", "run"))
    assert run.notes == "only notes"
    assert run.is_documented is False


def test_missing_store_is_a_no_op(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    catalog = scan_directory(root, ScanConfig())
    result = load_documentation(catalog, root / ".project_docs.txt")
    assert (result.applied, result.discarded) == (0, 0)


def test_save_overwrites_previous_content(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    docs = root / ".project_docs.txt"
    docs.write_text("stale content\n", encoding="utf-8")
    catalog = scan_directory(root, ScanConfig())
    save_documentation(catalog, docs)
    assert "stale content" not in docs.read_text(encoding="utf-8")


def test_write_failure_raises_doc_store_error(tmp_path: Path):
    root = copy_sample_project(tmp_path)
    catalog = scan_directory(root, ScanConfig())
    with pytest.raises(DocStoreError):
        save_documentation(catalog, root / "no_such_dir" / ".project_docs.txt")
