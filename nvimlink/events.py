"""Front-end events requested from Neovim through ``{"fn": ..., "args": ...}`` maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from .types import Record


class EventDecodeError(ValueError):
    """Raised when a value does not describe a known front-end event."""


@dataclass
class EchoRepeat(Record):
    """Echo ``msg`` back ``times`` times."""

    msg: str
    times: int = field(metadata={"unsigned": True})


@dataclass
class GtkDebugger:
    """Open the interactive toolkit debugger."""


@dataclass
class CursorBlinkTransition:
    value: float


@dataclass
class CursorPositionTransition:
    value: float


@dataclass
class ScrollTransition:
    value: float


GnvimEvent = Union[
    EchoRepeat,
    GtkDebugger,
    CursorBlinkTransition,
    CursorPositionTransition,
    ScrollTransition,
]


def _float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EventDecodeError(f"expected a number, got {value!r}")
    return float(value)


def _echo_repeat(args: Any) -> EchoRepeat:
    try:
        return EchoRepeat.from_value(args)
    except (ValueError, TypeError) as exc:
        raise EventDecodeError(str(exc)) from exc


def _gtk_debugger(args: Any) -> GtkDebugger:
    if args is not None:
        raise EventDecodeError(f"gtk_debugger takes no arguments, got {args!r}")
    return GtkDebugger()


_DECODERS: dict[str, Callable[[Any], GnvimEvent]] = {
    "echo_repeat": _echo_repeat,
    "gtk_debugger": _gtk_debugger,
    "cursor_blink_transition": lambda args: CursorBlinkTransition(_float(args)),
    "cursor_position_transition": lambda args: CursorPositionTransition(_float(args)),
    "scroll_transition": lambda args: ScrollTransition(_float(args)),
}

_NEEDS_ARGS = {name for name in _DECODERS if name != "gtk_debugger"}


def parse_gnvim_event(value: Any) -> GnvimEvent:
    """Decode a ``{"fn": name, "args": args}`` map into an event."""
    if not isinstance(value, dict):
        raise EventDecodeError(f"expected a map, got {value!r}")
    if "fn" not in value:
        raise EventDecodeError("missing field `fn`")
    name = value["fn"]
    if not isinstance(name, str) or name not in _DECODERS:
        raise EventDecodeError(f"unknown variant {name!r}")
    if name in _NEEDS_ARGS and "args" not in value:
        raise EventDecodeError("missing field `args`")
    return _DECODERS[name](value.get("args"))