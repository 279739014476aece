"""Value types exchanged with Neovim and the decoding of their msgpack form."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ForwardRef, Optional, Union, get_args, get_origin

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_U64_MAX = (1 << 64) - 1

_UNSIGNED = {"unsigned": True}

Decoder = Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


def _decode_int(value: Any, unsigned: bool = False) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    low, high = (0, _U64_MAX) if unsigned else (_I64_MIN, _I64_MAX)
    if not low <= value <= high:
        raise ValueError(f"integer out of range: {value}")
    return value


def _decode_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a float, got {value!r}")
    return float(value)


def _decode_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _decode_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _as_i64(value: Any) -> Optional[int]:
    """Return ``value`` if it is an integer that fits in 64 signed bits."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if _I64_MIN <= value <= _I64_MAX else None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _known_types() -> dict[str, Any]:
    """Names that may appear in string annotations of decoded records."""
    names: dict[str, Any] = {
        "int": int,
        "str": str,
        "bool": bool,
        "float": float,
        "Any": Any,
        "None": type(None),
        "NoneType": type(None),
        "Window": Window,
        "Buffer": Buffer,
        "Tabpage": Tabpage,
        "GridLineData": GridLineData,
        "CursorShape": CursorShape,
        "OptionSet": OptionSet,
    }
    names.update(Record._registry)
    return names


def _split_top_level(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in text:
        if ch == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        current.append(ch)
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def _union(members: list[Any]) -> Any:
    return Union[tuple(members)]


def _resolve(annotation: str) -> Any:
    """Turn a string annotation into the type it names."""
    text = annotation.strip().strip("'\"").strip()
    alternatives = _split_top_level(text, "|")
    if len(alternatives) > 1:
        return _union([_resolve(item) for item in alternatives])
    if text.startswith("typing."):
        text = text[len("typing."):]
    if text.endswith("]") and "[" in text:
        head, _, inner = text.partition("[")
        head = head.strip()
        args = [_resolve(item) for item in _split_top_level(inner[:-1], ",")]
        if head == "Optional" and len(args) == 1:
            return Optional[args[0]]
        if head == "Union":
            return _union(args)
        if head in ("list", "List") and len(args) == 1:
            return list[args[0]]
        raise TypeError(f"unsupported annotation: {annotation!r}")
    try:
        return _known_types()[text]
    except KeyError:
        raise TypeError(f"unknown type name {text!r}") from None


def _decoder_for(tp: Any, unsigned: bool = False) -> Decoder:
    if isinstance(tp, str):
        tp = _resolve(tp)
    elif isinstance(tp, ForwardRef):
        tp = _resolve(tp.__forward_arg__)

    if tp is Any:
        return _identity

    origin = get_origin(tp)
    if origin is Union:
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) != 1:
            raise TypeError(f"unsupported union type: {tp!r}")
        inner = _decoder_for(members[0], unsigned)
        return lambda value: None if value is None else inner(value)

    if origin is list:
        (item_type,) = get_args(tp)
        item_decoder = _decoder_for(item_type, unsigned)

        def decode_list(value: Any) -> list:
            if not isinstance(value, (list, tuple)):
                raise ValueError(f"expected an array, got {value!r}")
            return [item_decoder(item) for item in value]

        return decode_list

    if tp is bool:
        return _decode_bool
    if tp is int:
        return functools.partial(_decode_int, unsigned=unsigned)
    if tp is float:
        return _decode_float
    if tp is str:
        return _decode_str

    from_value = getattr(tp, "from_value", None)
    if callable(from_value):
        return from_value
    raise TypeError(f"no decoder for type {tp!r}")


@functools.lru_cache(maxsize=None)
def _field_decoders(cls: type) -> tuple[tuple[str, bool, Decoder], ...]:
    specs = []
    for spec in fields(cls):
        hint = spec.type
        if isinstance(hint, str):
            hint = _resolve(hint)
        optional = get_origin(hint) is Union and type(None) in get_args(hint)
        decoder = _decoder_for(hint, spec.metadata.get("unsigned", False))
        specs.append((spec.name, optional, decoder))
    return tuple(specs)


class Record:
    """Base for dataclasses decoded from a msgpack array or map.

    An array supplies every field in declaration order; a map supplies
    fields by name, unknown keys are ignored and missing optional fields
    become ``None``.
    """

    _registry: dict[str, type] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        Record._registry[cls.__name__] = cls

    @classmethod
    def from_value(cls, value: Any) -> Any:
        decoders = _field_decoders(cls)
        name = cls.__name__

        if isinstance(value, dict):
            kwargs = {}
            for field_name, optional, decode in decoders:
                if field_name in value:
                    kwargs[field_name] = decode(value[field_name])
                elif optional:
                    kwargs[field_name] = None
                else:
                    raise ValueError(f"missing field `{field_name}` in {name}")
            return cls(**kwargs)

        if isinstance(value, (list, tuple)):
            if len(value) != len(decoders):
                raise ValueError(
                    f"invalid length {len(value)}, expected {len(decoders)} "
                    f"elements for {name}"
                )
            return cls(
                **{
                    field_name: decode(item)
                    for (field_name, _, decode), item in zip(decoders, value)
                }
            )

        raise ValueError(f"cannot decode {name} from {value!r}")


class ShowTabline(enum.Enum):
    """When the tabline is shown; ``NEVER`` is the default."""

    NEVER = 0
    MORE_THAN_ONE = 1
    ALWAYS = 2


@dataclass
class OptionSet:
    """A UI option change.

    ``value`` is a ``str`` for ``guifont``, an ``int`` for ``linespace``, a
    :class:`ShowTabline` for ``showtabline`` and ``None`` for any other option.
    """

    name: str
    value: Any = None

    KNOWN = ("guifont", "linespace", "showtabline")

    @property
    def known(self) -> bool:
        return self.name in self.KNOWN

    @classmethod
    def from_value(cls, value: Any) -> "OptionSet":
        items = value if isinstance(value, (list, tuple)) else ()
        name = _as_str(items[0]) if items else None
        if name is None:
            raise ValueError("bad name")
        raw = items[1] if len(items) > 1 else None

        if name == "linespace":
            linespace = _as_i64(raw)
            if linespace is None:
                raise ValueError("missing field `value`")
            return cls(name, linespace)
        if name == "guifont":
            font = _as_str(raw)
            if font is None:
                raise ValueError("missing field `value`")
            return cls(name, font)
        if name == "showtabline":
            number = _as_i64(raw)
            if number is None:
                raise ValueError("missing field `value`")
            try:
                return cls(name, ShowTabline(number))
            except ValueError:
                raise ValueError(f"unexpected showtabline value: {number}") from None
        return cls(name)


@dataclass
class UiOptions:
    """Options passed to ``nvim_ui_attach``."""

    rgb: bool = False
    override: bool = False
    ext_cmdline: bool = False
    ext_hlstate: bool = False
    ext_linegrid: bool = False
    ext_messages: bool = False
    ext_multigrid: bool = False
    ext_popupmenu: bool = False
    ext_tabline: bool = False
    ext_termcolors: bool = False
    stdin_fd: Optional[int] = None

    def to_msgpack(self) -> dict[str, Any]:
        """Return the options as a map; ``stdin_fd`` is left out when unset."""
        return {
            spec.name: getattr(self, spec.name)
            for spec in fields(self)
            if not (spec.name == "stdin_fd" and self.stdin_fd is None)
        }


@dataclass
class HlAttr(Record):
    """Highlight attributes as sent by Neovim; colors are 24-bit integers."""

    foreground: Optional[int] = None
    background: Optional[int] = None
    special: Optional[int] = None
    reverse: Optional[bool] = None
    italic: Optional[bool] = None
    bold: Optional[bool] = None
    strikethrough: Optional[bool] = None
    underline: Optional[bool] = None
    underdouble: Optional[bool] = None
    undercurl: Optional[bool] = None
    underdotted: Optional[bool] = None
    underdashed: Optional[bool] = None
    blend: Optional[int] = None

    @classmethod
    def from_value(cls, value: Any) -> "HlAttr":
        """Decode highlight attributes from a msgpack map or array."""
        return super().from_value(value)


@dataclass
class GridLineData:
    """One cell run of a ``grid_line`` event: text, highlight id and repeat count."""

    text: str = ""
    hl_id: Optional[int] = None
    repeat: Optional[int] = None

    @classmethod
    def from_value(cls, value: Any) -> "GridLineData":
        items = value if isinstance(value, (list, tuple)) else ()
        text = items[0] if items else None
        if not isinstance(text, str):
            raise ValueError(f"bad text field: {text!r}")
        hl_id = _as_i64(items[1]) if len(items) > 1 else None
        repeat = _as_i64(items[2]) if len(items) > 2 else None
        return cls(text, hl_id, repeat)


class CursorShape(enum.Enum):
    """Shape of the cursor; ``BLOCK`` is the default."""

    BLOCK = "block"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def from_value(cls, value: Any) -> "CursorShape":
        if not isinstance(value, str):
            raise ValueError("missing value for cursor shape")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown cursor shape: {value}") from None


@dataclass
class ModeInfo(Record):
    """Cursor style for one editor mode."""

    cursor_shape: Optional[CursorShape] = None
    cell_percentage: Optional[int] = field(default=None, metadata=_UNSIGNED)
    blinkwait: Optional[int] = field(default=None, metadata=_UNSIGNED)
    blinkon: Optional[int] = field(default=None, metadata=_UNSIGNED)
    blinkoff: Optional[int] = field(default=None, metadata=_UNSIGNED)
    attr_id: Optional[int] = field(default=None, metadata=_UNSIGNED)
    attr_id_lm: Optional[int] = field(default=None, metadata=_UNSIGNED)
    short_name: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "ModeInfo":
        """Decode a mode's cursor style from a msgpack map or array."""
        return super().from_value(value)


@dataclass
class CmdlineContent(Record):
    hl_id: int
    text: str


@dataclass(frozen=True)
class _Handle:
    """An opaque remote object handle, kept as the raw msgpack value."""

    value: Any

    @classmethod
    def from_value(cls, value: Any) -> Any:
        return cls(value)


class Window(_Handle):
    """A window handle."""

    def to_msgpack(self) -> Any:
        return self.value


class Buffer(_Handle):
    """A buffer handle."""

    def to_msgpack(self) -> Any:
        return self.value


class Tabpage(_Handle):
    """A tabpage handle."""

    def to_msgpack(self) -> Any:
        return self.value


@dataclass
class TablineTab(Record):
    name: str
    tab: Tabpage


@dataclass
class TablineBuffer(Record):
    name: str
    buffer: Buffer


@dataclass
class PopupmenuItem(Record):
    word: str
    kind: str
    menu: str
    info: str


@dataclass
class MsgShowContent(Record):
    attr_id: int
    text_chunk: str


@dataclass
class MsgHistoryShowContent(Record):
    attr_id: int
    text_chunk: str


@dataclass
class MsgHistoryShowEntry(Record):
    kind: str
    content: list[MsgHistoryShowContent]