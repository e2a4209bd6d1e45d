from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

# (file index, function index) into a Catalog. Only valid until the next rescan.
FunctionRef = tuple[int, int]

DOC_FIELDS = ("description", "parameters", "return_value", "example", "notes")


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str = ""
    is_pointer: bool = False
    is_array: bool = False
    is_const: bool = False
    description: str = "Parameter"

    @property
    def display_type(self) -> str:
        return "".join(
            [
                "const " if self.is_const else "",
                self.type,
                "*" if self.is_pointer else "",
                "[]" if self.is_array else "",
            ]
        )


@dataclass
class Function:
    name: str
    signature: str
    filename: str
    line_number: int
    return_type: str = "int"
    params: list[Parameter] = field(default_factory=list)
    description: str = ""
    parameters: str = ""
    return_value: str = ""
    example: str = ""
    notes: str = ""
    is_documented: bool = False

    @property
    def param_count(self) -> int:
        return len(self.params)

    def apply_edit(self, field_name: str, value: str) -> bool:
        """Set one documentation field; empty input keeps the current value.

        Only a non-empty description marks the function as documented.
        """
        if field_name not in DOC_FIELDS:
            raise ValueError(f"Unknown documentation field: {field_name}")
        if not value:
            return False
        setattr(self, field_name, value)
        if field_name == "description":
            self.is_documented = True
        return True


@dataclass
class SourceFile:
    filename: str
    path: Path
    functions: list[Function] = field(default_factory=list)

    @property
    def function_count(self) -> int:
        return len(self.functions)

    @property
    def documented_count(self) -> int:
        return sum(1 for f in self.functions if f.is_documented)


@dataclass
class Catalog:
    root: Path
    files: list[SourceFile] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_functions(self) -> int:
        return sum(f.function_count for f in self.files)

    @property
    def documented_functions(self) -> int:
        return sum(f.documented_count for f in self.files)

    def function(self, ref: FunctionRef) -> Function:
        file_idx, func_idx = ref
        return self.files[file_idx].functions[func_idx]

    def iter_functions(self) -> Iterator[tuple[FunctionRef, Function]]:
        for i, source in enumerate(self.files):
            for j, func in enumerate(source.functions):
                yield (i, j), func

    def find(self, filename: str, name: str) -> FunctionRef | None:
        # First file with the name wins, then first function within it.
        for i, source in enumerate(self.files):
            if source.filename != filename:
                continue
            for j, func in enumerate(source.functions):
                if func.name == name:
                    return (i, j)
            return None
        return None
