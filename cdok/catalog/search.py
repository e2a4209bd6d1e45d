from __future__ import annotations

from cdok.catalog.model import Catalog, FunctionRef


def perform_search(catalog: Catalog, term: str) -> list[FunctionRef]:
    if not term:
        return []
    return [
        ref
        for ref, func in catalog.iter_functions()
        if term in func.name or term in func.description or term in func.signature
    ]


def find_undocumented(catalog: Catalog) -> list[FunctionRef]:
    return [ref for ref, func in catalog.iter_functions() if not func.is_documented]
