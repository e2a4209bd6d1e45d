from __future__ import annotations


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _name_span(signature: str) -> tuple[int, int] | None:
    """Return the [start, end) span of the identifier right before the first '('."""
    paren = signature.find("(")
    if paren <= 0:
        return None
    end = paren
    while end > 0 and signature[end - 1] in " \t":
        end -= 1
    start = end
    while start > 0 and _is_ident_char(signature[start - 1]):
        start -= 1
    if start >= end:
        return None
    return start, end


def extract_function_name(signature: str) -> str | None:
    span = _name_span(signature)
    if span is None:
        return None
    start, end = span
    return signature[start:end]


def extract_return_type(signature: str) -> str:
    if "(" not in signature:
        return "void"
    span = _name_span(signature)
    if span is None:
        return "int"
    # Pointer markers before the name stay with the type: "char *get(" -> "char *".
    return_type = signature[: span[0]].strip()
    return return_type or "int"
