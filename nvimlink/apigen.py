"""Generate the typed API and UI event modules from Neovim's API metadata."""

from __future__ import annotations

import keyword
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import msgpack

from .types import Record

_USAGE = "Usage: apigen functions|uievents"


def to_pascal_case(name: str) -> str:
    """Turn ``snake_case`` into ``PascalCase``."""
    out = []
    upper = False
    for index, ch in enumerate(name):
        if index == 0:
            out.append(ch.upper())
            continue
        if ch == "_":
            upper = True
            continue
        out.append(ch.upper() if upper else ch)
        upper = False
    return "".join(out)


@dataclass(frozen=True)
class _ApiType:
    annotation: str
    argument: str
    decoder: Optional[str]


_API_TYPES: dict[str, _ApiType] = {
    "Boolean": _ApiType("bool", "{}", "_bool"),
    "Integer": _ApiType("int", "{}", "_i64"),
    "Float": _ApiType("float", "float({})", "_float"),
    "String": _ApiType("str", "{}", "_str"),
    "void": _ApiType("None", "{}", None),
    "Window": _ApiType("Window", "{}", "Window.from_value"),
    "Tabpage": _ApiType("Tabpage", "{}", "Tabpage.from_value"),
    "Buffer": _ApiType("Buffer", "{}", "Buffer.from_value"),
    "ArrayOf(Integer, 2)": _ApiType("tuple[int, int]", "list({})", "_pair"),
    "ArrayOf(String)": _ApiType("list[str]", "list({})", "_str_list"),
    "ArrayOf(Integer)": _ApiType("list[int]", "list({})", "_list_of(_i64)"),
    "ArrayOf(Buffer)": _ApiType("list[Buffer]", "list({})", "_list_of(Buffer.from_value)"),
    "ArrayOf(Dictionary)": _ApiType("list[Any]", "list({})", "_array"),
    "ArrayOf(Tabpage)": _ApiType("list[Tabpage]", "list({})", "_list_of(Tabpage.from_value)"),
    "ArrayOf(Window)": _ApiType("list[Window]", "list({})", "_list_of(Window.from_value)"),
    "Array": _ApiType("list[Any]", "list({})", "_array"),
    "Dictionary": _ApiType("Any", "{}", None),
    "Object": _ApiType("Any", "{}", None),
    "LuaRef": _ApiType("Any", "{}", None),
}

_FIELD_TYPES: dict[str, str] = {
    "Boolean": "bool",
    "Integer": "int",
    "Float": "float",
    "String": "str",
    "void": "Any",
    "Window": "Window",
    "Tabpage": "Tabpage",
    "Buffer": "Buffer",
    "ArrayOf(Integer, 2)": "list[int]",
    "ArrayOf(String)": "list[str]",
    "ArrayOf(Integer)": "list[int]",
    "ArrayOf(Buffer)": "list[Buffer]",
    "ArrayOf(Dictionary)": "list[Any]",
    "ArrayOf(Tabpage)": "list[Tabpage]",
    "ArrayOf(Window)": "list[Window]",
    "Array": "list[Any]",
    "Dictionary": "Any",
    "Object": "Any",
    "LuaRef": "Any",
}

_FIELD_OVERRIDES: dict[tuple[str, str], str] = {
    ("grid_line", "data"): "list[GridLineData]",
    ("hl_attr_define", "rgb_attrs"): "HlAttr",
    ("hl_attr_define", "cterm_attrs"): "HlAttr",
    ("mode_info_set", "cursor_styles"): "list[ModeInfo]",
    ("popupmenu_show", "items"): "list[PopupmenuItem]",
    ("tabline_update", "tabs"): "list[TablineTab]",
    ("tabline_update", "buffers"): "list[TablineBuffer]",
    ("cmdline_show", "content"): "list[CmdlineContent]",
    ("cmdline_block_show", "lines"): "list[list[CmdlineContent]]",
    ("cmdline_block_append", "lines"): "list[CmdlineContent]",
    ("msg_show", "content"): "list[MsgShowContent]",
    ("msg_history_show", "entries"): "list[MsgHistoryShowEntry]",
}

_RENAMES = {"type": "type_", "str": "string"}


def _identifier(name: str) -> str:
    if not name.isidentifier():
        raise ValueError(f"failed to parse name {name!r}")
    return name


@dataclass
class Parameter(Record):
    """A parameter of an API function or UI event: ``[type, name]``."""

    type: str
    name: str

    def python_name(self) -> str:
        """The name used for this parameter in generated code."""
        name = _RENAMES.get(self.name, self.name)
        if keyword.iskeyword(name):
            name += "_"
        return _identifier(name)


@dataclass
class Function(Record):
    """An API function as described by the metadata."""

    name: str
    since: int
    deprecated_since: Optional[int]
    parameters: list[Parameter]
    return_type: str
    method: bool

    def _param_type(self, param: Parameter) -> _ApiType:
        if (self.name, param.name) == ("nvim_ui_attach", "options"):
            return _ApiType("UiOptions", "{}", None)
        try:
            return _API_TYPES[param.type]
        except KeyError:
            raise ValueError(f"unsupported function param type {param.type!r}") from None

    def _return_type(self) -> _ApiType:
        try:
            return _API_TYPES[self.return_type]
        except KeyError:
            raise ValueError(
                f"unsupported function output type {self.return_type!r}"
            ) from None

    def to_source(self) -> Optional[str]:
        """Source of the method calling this function; ``None`` if deprecated."""
        if self.deprecated_since is not None:
            return None

        name = _identifier(self.name)
        signature = ["self"]
        arguments = [f'"{name}"']
        for param in self.parameters:
            spec = self._param_type(param)
            python_name = param.python_name()
            signature.append(f"{python_name}: {spec.annotation}")
            arguments.append(spec.argument.format(python_name))

        output = self._return_type()
        if self.return_type == "void":
            call = f"self._void({', '.join(arguments)})"
        else:
            if output.decoder is not None:
                arguments.append(f"decode={output.decoder}")
            call = f"self._call({', '.join(arguments)})"

        return (
            f"    async def {name}({', '.join(signature)}) -> Awaitable[{output.annotation}]:\n"
            f"        return await {call}\n"
        )


@dataclass
class UiEventSpec(Record):
    """A UI event as described by the metadata."""

    parameters: list[Parameter]
    name: str
    since: int

    @property
    def class_name(self) -> str:
        return _identifier(to_pascal_case(self.name))

    def has_manual_type(self) -> bool:
        """Whether the event's argument type is written by hand."""
        return self.name == "option_set"

    def _field_type(self, param: Parameter) -> str:
        override = _FIELD_OVERRIDES.get((self.name, param.name))
        if override is not None:
            return override
        try:
            return _FIELD_TYPES[param.type]
        except KeyError:
            raise ValueError(f"unsupported uievent field type {param.type!r}") from None

    def to_source(self) -> Optional[str]:
        """Source of the argument record class, if the event needs one."""
        if not self.parameters or self.has_manual_type():
            return None
        lines = ["@dataclass", f"class {self.class_name}(Record):"]
        for param in self.parameters:
            field_name = param.name
            if keyword.iskeyword(field_name):
                field_name += "_"
            lines.append(f"    {_identifier(field_name)}: {self._field_type(param)}")
        return "\n".join(lines) + "\n"

    def decode_entry(self) -> str:
        """The entry of this event in the decoder table."""
        if not self.parameters:
            return f'    "{self.name}": None,'
        return f'    "{self.name}": {self.class_name}.from_value,'


@dataclass
class Version(Record):
    major: int
    minor: int
    patch: int
    api_level: int
    api_compatible: int
    api_prerelease: bool


@dataclass
class ExtType(Record):
    id: int
    prefix: str


@dataclass
class Types:
    buffer: ExtType
    window: ExtType
    tabpage: ExtType

    @classmethod
    def from_value(cls, value: Any) -> "Types":
        if not isinstance(value, dict):
            raise ValueError(f"cannot decode Types from {value!r}")
        try:
            return cls(
                ExtType.from_value(value["Buffer"]),
                ExtType.from_value(value["Window"]),
                ExtType.from_value(value["Tabpage"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}` in Types") from None


@dataclass
class ExtErrorType(Record):
    id: int


@dataclass
class ErrorTypes:
    exception: ExtErrorType
    validation: ExtErrorType

    @classmethod
    def from_value(cls, value: Any) -> "ErrorTypes":
        if not isinstance(value, dict):
            raise ValueError(f"cannot decode ErrorTypes from {value!r}")
        try:
            return cls(
                ExtErrorType.from_value(value["Exception"]),
                ExtErrorType.from_value(value["Validation"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}` in ErrorTypes") from None


@dataclass
class ApiMetadata(Record):
    """The API metadata Neovim reports with ``--api-info``."""

    version: Version
    functions: list[Function]
    ui_events: list[UiEventSpec]
    ui_options: list[str]
    types: Types
    error_types: ErrorTypes

    @classmethod
    def from_value(cls, value: Any) -> "ApiMetadata":
        if not isinstance(value, dict):
            raise ValueError(f"API metadata must be a map, got {type(value).__name__}")
        return super().from_value(value)


_FUNCTIONS_HEADER = '''"""Typed Neovim API calls."""

from __future__ import annotations

from typing import Any, Awaitable

from .api_buffer import BufferApi, _array, _bool, _i64, _list_of, _pair, _str, _str_list
from .types import Buffer, Tabpage, UiOptions, Window


def _float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a float, got {value!r}")
    return float(value)


class NeovimApi(BufferApi):
    """Typed wrappers around the Neovim API."""

'''

_UIEVENTS_HEADER = '''"""Argument records and decoders of Neovim's UI events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .types import (
    Buffer,
    CmdlineContent,
    GridLineData,
    HlAttr,
    ModeInfo,
    MsgHistoryShowEntry,
    MsgShowContent,
    OptionSet,
    PopupmenuItem,
    Record,
    TablineBuffer,
    TablineTab,
    Tabpage,
    Window,
)

Decoder = Callable[[Any], Any]
'''


def generate_functions(metadata: ApiMetadata) -> str:
    """Source of a module with a method for every non-deprecated function."""
    methods = [
        source
        for source in (function.to_source() for function in metadata.functions)
        if source is not None
    ]
    return _FUNCTIONS_HEADER + "\n".join(methods)


def generate_uievents(metadata: ApiMetadata) -> str:
    """Source of a module with the UI event records and their decoder table."""
    structs = [
        source
        for source in (event.to_source() for event in metadata.ui_events)
        if source is not None
    ]
    entries = [event.decode_entry() for event in metadata.ui_events]
    parts = [_UIEVENTS_HEADER]
    parts.extend(f"\n\n{struct}" for struct in structs)
    parts.append("\n\n_EVENTS: dict[str, Optional[Decoder]] = {\n")
    parts.append("".join(f"{entry}\n" for entry in entries))
    parts.append("}\n")
    return "".join(parts)


_GENERATORS: dict[str, Callable[[ApiMetadata], str]] = {
    "functions": generate_functions,
    "uievents": generate_uievents,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read msgpack API metadata from stdin and print the generated module."""
    argv = list(sys.argv[1:] if argv is None else argv)
    command = argv[0] if argv else None

    data = sys.stdin.buffer.read()
    metadata = ApiMetadata.from_value(msgpack.unpackb(data, raw=False))

    generator = _GENERATORS.get(command) if command is not None else None
    if generator is None:
        print(_USAGE, file=sys.stderr)
        return 1
    print(generator(metadata))
    return 0


if __name__ == "__main__":
    sys.exit(main())