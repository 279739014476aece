import ast
import io
import sys
import types

import msgpack
import pytest

from nvimlink.apigen import (
    ApiMetadata,
    Function,
    Parameter,
    UiEventSpec,
    Version,
    generate_functions,
    generate_uievents,
    main,
    to_pascal_case,
)

METADATA = {
    "version": {
        "major": 0,
        "minor": 10,
        "patch": 0,
        "api_level": 12,
        "api_compatible": 0,
        "api_prerelease": False,
        "prerelease": False,
    },
    "functions": [
        {
            "name": "nvim_buf_line_count",
            "since": 1,
            "parameters": [["Buffer", "buffer"]],
            "return_type": "Integer",
            "method": True,
        },
        {
            "name": "nvim_put",
            "since": 6,
            "parameters": [
                ["ArrayOf(String)", "lines"],
                ["String", "type"],
                ["Boolean", "after"],
                ["Boolean", "follow"],
            ],
            "return_type": "void",
            "method": False,
        },
        {
            "name": "nvim_old_call",
            "since": 1,
            "deprecated_since": 2,
            "parameters": [],
            "return_type": "void",
            "method": False,
        },
    ],
    "ui_events": [
        {
            "name": "grid_resize",
            "since": 5,
            "parameters": [["Integer", "grid"], ["Integer", "width"], ["Integer", "height"]],
        },
        {"name": "flush", "since": 1, "parameters": []},
        {
            "name": "option_set",
            "since": 4,
            "parameters": [["String", "name"], ["Object", "value"]],
        },
    ],
    "ui_options": ["rgb", "ext_cmdline"],
    "types": {
        "Buffer": {"id": 0, "prefix": "nvim_buf_"},
        "Window": {"id": 1, "prefix": "nvim_win_"},
        "Tabpage": {"id": 2, "prefix": "nvim_tabpage_"},
    },
    "error_types": {"Exception": {"id": 0}, "Validation": {"id": 1}},
}


@pytest.fixture
def metadata():
    return ApiMetadata.from_value(METADATA)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("grid_line", "GridLine"),
        ("msg_showcmd", "MsgShowcmd"),
        ("win_float_pos", "WinFloatPos"),
        ("flush", "Flush"),
    ],
)
def test_to_pascal_case(name, expected):
    assert to_pascal_case(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [("type", "type_"), ("str", "string"), ("fn", "fn"), ("lambda", "lambda_"), ("buffer", "buffer")],
)
def test_parameter_python_name(name, expected):
    assert Parameter("String", name).python_name() == expected


def test_parameter_decodes_from_array():
    param = Parameter.from_value(["Integer", "grid"])
    assert (param.type, param.name) == ("Integer", "grid")


def test_metadata_decoding(metadata):
    assert metadata.version == Version(0, 10, 0, 12, 0, False)
    assert [f.name for f in metadata.functions] == [
        "nvim_buf_line_count",
        "nvim_put",
        "nvim_old_call",
    ]
    assert metadata.functions[2].deprecated_since == 2
    assert metadata.functions[0].deprecated_since is None
    assert metadata.types.window.prefix == "nvim_win_"
    assert metadata.error_types.validation.id == 1
    assert metadata.ui_options == ["rgb", "ext_cmdline"]


def test_metadata_must_be_a_map():
    with pytest.raises(ValueError):
        ApiMetadata.from_value([1, 2, 3])


def test_deprecated_function_is_skipped(metadata):
    assert metadata.functions[2].to_source() is None


def test_function_source(metadata):
    source = metadata.functions[0].to_source()
    tree = ast.parse("class A:\n" + source)
    method = tree.body[0].body[0]
    assert isinstance(method, ast.AsyncFunctionDef)
    assert method.name == "nvim_buf_line_count"
    assert [arg.arg for arg in method.args.args] == ["self", "buffer"]
    assert "decode=_i64" in source


def test_void_function_uses_void_call(metadata):
    source = metadata.functions[1].to_source()
    assert "self._void(" in source
    assert "decode=" not in source
    method = ast.parse("class A:\n" + source).body[0].body[0]
    assert [arg.arg for arg in method.args.args] == ["self", "lines", "type_", "after", "follow"]


def test_unknown_param_type_raises():
    function = Function("nvim_x", 1, None, [Parameter("Mystery", "a")], "void", False)
    with pytest.raises(ValueError):
        function.to_source()


def test_unknown_return_type_raises():
    function = Function("nvim_x", 1, None, [], "Mystery", False)
    with pytest.raises(ValueError):
        function.to_source()


def test_ui_attach_options_are_passed_through():
    function = Function(
        "nvim_ui_attach",
        1,
        None,
        [Parameter("Integer", "width"), Parameter("Integer", "height"), Parameter("Dictionary", "options")],
        "void",
        False,
    )
    assert "options: UiOptions" in function.to_source()


def test_generate_functions_module(metadata):
    tree = ast.parse(generate_functions(metadata))
    classes = [node for node in tree.body if isinstance(node, ast.ClassDef)]
    assert [cls.name for cls in classes] == ["NeovimApi"]
    names = [
        node.name for node in classes[0].body if isinstance(node, ast.AsyncFunctionDef)
    ]
    assert names == ["nvim_buf_line_count", "nvim_put"]


def test_ui_event_struct(metadata):
    event = metadata.ui_events[0]
    tree = ast.parse(event.to_source())
    cls = tree.body[0]
    assert cls.name == to_pascal_case(event.name)
    assert [stmt.target.id for stmt in cls.body] == ["grid", "width", "height"]


def test_ui_event_without_struct(metadata):
    flush, option_set = metadata.ui_events[1], metadata.ui_events[2]
    assert flush.to_source() is None
    assert option_set.has_manual_type()
    assert option_set.to_source() is None
    assert not metadata.ui_events[0].has_manual_type()


def test_ui_event_field_override():
    event = UiEventSpec([Parameter("Array", "data")], "grid_line", 5)
    assert "data: list[GridLineData]" in event.to_source()


def test_decode_entries(metadata):
    entries = [event.decode_entry() for event in metadata.ui_events]
    assert entries[1] == '    "flush": None,'
    assert entries[0] == '    "grid_resize": GridResize.from_value,'
    assert entries[2] == '    "option_set": OptionSet.from_value,'


def test_generate_uievents_module(metadata):
    tree = ast.parse(generate_uievents(metadata))
    class_names = [node.name for node in tree.body if isinstance(node, ast.ClassDef)]
    assert class_names == ["GridResize"]
    table = [node for node in tree.body if isinstance(node, ast.AnnAssign)][-1]
    keys = [key.value for key in table.value.keys]
    assert keys == ["grid_resize", "flush", "option_set"]


def _stdin(monkeypatch):
    data = msgpack.packb(METADATA, use_bin_type=True)
    monkeypatch.setattr(sys, "stdin", types.SimpleNamespace(buffer=io.BytesIO(data)))


def test_main_functions(monkeypatch, capsys):
    _stdin(monkeypatch)
    assert main(["functions"]) == 0
    out = capsys.readouterr().out
    assert "async def nvim_buf_line_count(" in out
    assert "nvim_old_call" not in out


def test_main_uievents(monkeypatch, capsys):
    _stdin(monkeypatch)
    assert main(["uievents"]) == 0
    assert "class GridResize(Record):" in capsys.readouterr().out


def test_main_usage(monkeypatch, capsys):
    _stdin(monkeypatch)
    assert main(["other"]) == 1
    assert "functions|uievents" in capsys.readouterr().err