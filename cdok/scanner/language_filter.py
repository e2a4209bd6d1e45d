from __future__ import annotations

C_EXTENSIONS = (".c", ".h")


def is_c_file(filename: str) -> bool:
    # Case-sensitive on purpose: "X.C" and "x.H" are not picked up.
    return len(filename) > 2 and filename.endswith(C_EXTENSIONS)


def is_header(filename: str) -> bool:
    return len(filename) > 2 and filename.endswith(".h")
