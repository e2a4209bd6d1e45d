from __future__ import annotations

from cdok.parsing.parameters import (
    describe_parameter,
    generate_parameter_documentation,
    parse_function_parameters,
    parse_parameter,
)
from cdok.parsing.signature import extract_function_name, extract_return_type


def test_simple_int_function():
    sig = "int add(int a, int b)"
    assert extract_function_name(sig) == "add"
    assert extract_return_type(sig) == "int"
    params = parse_function_parameters(sig)
    assert [p.name for p in params] == ["a", "b"]
    assert all(p.type == "int" for p in params)


def test_void_parameter_list():
    sig = "void run(void)"
    assert extract_function_name(sig) == "run"
    assert extract_return_type(sig) == "void"
    assert parse_function_parameters(sig) == []
    assert parse_function_parameters("void tick()") == []


def test_pointer_return_and_const_pointer_parameter():
    sig = "char *get_name(const char *id)"
    assert extract_function_name(sig) == "get_name"
    assert extract_return_type(sig) == "char *"
    (param,) = parse_function_parameters(sig)
    assert param.name == "id"
    assert param.is_const is True
    assert param.is_pointer is True
    assert param.is_array is False
    assert param.type == "char"
    assert param.description == "String parameter"


def test_name_extraction_failures():
    assert extract_function_name("(void)cast(x)") is None
    assert extract_function_name("no parens here") is None
    assert extract_function_name("*(p)") is None


def test_space_before_paren_is_skipped():
    assert extract_function_name("int   spaced (int x)") == "spaced"
    assert extract_return_type("int   spaced (int x)") == "int"


def test_return_type_defaults():
    assert extract_return_type("main(argc, argv)") == "int"
    assert extract_return_type("no parens") == "void"
    assert extract_return_type("static unsigned long hash(const char *s)") == "static unsigned long"


def test_array_and_pointer_parameters():
    param = parse_parameter("int values[16]")
    assert param.name == "values"
    assert param.is_array is True
    assert param.is_pointer is False

    param = parse_parameter("void ** out")
    assert param.name == "out"
    assert param.is_pointer is True
    assert param.description == "Pointer parameter"


def test_parameter_cap_drops_extras():
    sig = "int many(" + ", ".join(f"int p{i}" for i in range(25)) + ")"
    params = parse_function_parameters(sig, max_params=20)
    assert len(params) == 20
    assert params[-1].name == "p19"


def test_function_pointer_parameter_is_mis_split():
    # Known limitation: commas inside a function pointer type split the parameter.
    params = parse_function_parameters("void each(int (*cb)(int, int), void *ctx)")
    assert len(params) == 3


def test_auto_descriptions():
    assert describe_parameter("count", "size_t", False) == "Size/count parameter"
    assert describe_parameter("max_len", "int", False) == "Size/count parameter"
    assert describe_parameter("rx_buf", "uint8_t", True) == "Buffer for data storage"
    assert describe_parameter("file_path", "char", True) == "File path or name"
    # First match wins: "filename" contains "len".
    assert describe_parameter("filename", "char", True) == "Size/count parameter"
    assert describe_parameter("on_done_cb", "handler_t", False) == "Callback function"
    assert describe_parameter("name", "char", True) == "String parameter"
    assert describe_parameter("node", "struct node", True) == "Pointer parameter"
    assert describe_parameter("flags", "int", False) == "Parameter"


def test_generated_parameter_documentation_is_single_line():
    params = parse_function_parameters("int copy(char *dst, const char *src, size_t len)")
    doc = generate_parameter_documentation(params)
    assert "\n" not in doc
    assert doc.startswith("@param dst (char*) - String parameter")
    assert "@param src (const char*) - String parameter" in doc
    assert "@param len (size_t) - Size/count parameter" in doc
    assert generate_parameter_documentation([]) == "No parameters"


def test_star_attached_to_type_token():
    param = parse_parameter("const char* path")
    assert param.name == "path"
    assert param.is_const is True
    assert param.is_pointer is True
    assert param.type == "char"
    assert param.display_type == "const char*"
    assert param.description == "String parameter"

    param = parse_parameter("void * ctx")
    assert (param.type, param.is_pointer) == ("void", True)
