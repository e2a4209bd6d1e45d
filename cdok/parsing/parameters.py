from __future__ import annotations

from cdok.catalog.model import Parameter

DEFAULT_MAX_PARAMS = 20

_NAME_HINTS = (
    (("count", "size", "len"), "Size/count parameter"),
    (("buffer", "buf"), "Buffer for data storage"),
    (("filename", "file"), "File path or name"),
    (("callback", "cb"), "Callback function"),
)


def describe_parameter(name: str, type_: str, is_pointer: bool) -> str:
    for needles, description in _NAME_HINTS:
        if any(n in name for n in needles):
            return description
    if is_pointer and "char" in type_:
        return "String parameter"
    if is_pointer:
        return "Pointer parameter"
    return "Parameter"


def parse_parameter(text: str) -> Parameter:
    """Parse one comma-separated chunk such as ``const char *name`` or ``int buf[16]``.

    The last whitespace token is the name; everything before it is the type.
    A parameter without a usable name comes back with ``name == ""``.
    """
    raw = text.strip()
    is_const = False
    if raw.startswith("const "):
        is_const = True
        raw = raw[len("const ") :].strip()

    tokens = raw.split()
    if not tokens:
        return Parameter(name="", is_const=is_const, description="")

    candidate = tokens[-1]
    is_pointer = candidate.startswith("*")
    name = candidate.lstrip("*")
    is_array = False
    bracket = name.find("[")
    if bracket != -1:
        is_array = True
        name = name[:bracket]

    # "char* p" and "char * p" carry the star on the type side.
    if any("*" in tok for tok in tokens[:-1]):
        is_pointer = True
    type_ = " ".join(tok.replace("*", "") for tok in tokens[:-1] if tok.replace("*", ""))

    return Parameter(
        name=name,
        type=type_,
        is_pointer=is_pointer,
        is_array=is_array,
        is_const=is_const,
        description=describe_parameter(name, type_, is_pointer),
    )


def parse_function_parameters(signature: str, max_params: int = DEFAULT_MAX_PARAMS) -> list[Parameter]:
    start = signature.find("(")
    end = signature.rfind(")")
    if start == -1 or end == -1 or end <= start + 1:
        return []

    inner = signature[start + 1 : end].strip()
    if not inner or inner == "void":
        return []

    # No nesting awareness: a function-pointer parameter with commas is mis-split.
    params: list[Parameter] = []
    for chunk in inner.split(","):
        if len(params) >= max_params:
            break
        param = parse_parameter(chunk)
        if param.name:
            params.append(param)
    return params


def generate_parameter_documentation(params: list[Parameter]) -> str:
    if not params:
        return "No parameters"
    return "; ".join(f"@param {p.name} ({p.display_type}) - {p.description}" for p in params)
