"""Decoding of the UI events carried by Neovim's ``redraw`` notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .types import OptionSet
from .uievent_types import (
    CmdlineBlockAppend,
    CmdlineBlockShow,
    CmdlineHide,
    CmdlinePos,
    CmdlineShow,
    CmdlineSpecialChar,
    CursorGoto,
    DefaultColorsSet,
    GridClear,
    GridCursorGoto,
    GridDestroy,
    GridLine,
    GridResize,
    GridScroll,
    HighlightSet,
    HlAttrDefine,
    HlGroupSet,
    ModeChange,
    ModeInfoSet,
    MsgHistoryShow,
    MsgRuler,
    MsgSetPos,
    MsgShow,
    MsgShowcmd,
    MsgShowmode,
    PopupmenuSelect,
    PopupmenuShow,
    Put,
    Resize,
    Screenshot,
    Scroll,
    SetIcon,
    SetScrollRegion,
    SetTitle,
    TablineUpdate,
    UpdateBg,
    UpdateFg,
    UpdateSp,
    WildmenuSelect,
    WildmenuShow,
    WinClose,
    WinExternalPos,
    WinExtmark,
    WinFloatPos,
    WinHide,
    WinPos,
    WinViewport,
)

Decoder = Callable[[Any], Any]


class UiEventDecodeError(ValueError):
    """Raised when a redraw batch cannot be decoded into a UI event."""


# Event name -> decoder of one argument tuple; ``None`` marks events without
# arguments.
_EVENTS: dict[str, Optional[Decoder]] = {
    "mode_info_set": ModeInfoSet.from_value,
    "update_menu": None,
    "busy_start": None,
    "busy_stop": None,
    "mouse_on": None,
    "mouse_off": None,
    "mode_change": ModeChange.from_value,
    "bell": None,
    "visual_bell": None,
    "flush": None,
    "suspend": None,
    "set_title": SetTitle.from_value,
    "set_icon": SetIcon.from_value,
    "screenshot": Screenshot.from_value,
    "option_set": OptionSet.from_value,
    "update_fg": UpdateFg.from_value,
    "update_bg": UpdateBg.from_value,
    "update_sp": UpdateSp.from_value,
    "resize": Resize.from_value,
    "clear": None,
    "eol_clear": None,
    "cursor_goto": CursorGoto.from_value,
    "highlight_set": HighlightSet.from_value,
    "put": Put.from_value,
    "set_scroll_region": SetScrollRegion.from_value,
    "scroll": Scroll.from_value,
    "default_colors_set": DefaultColorsSet.from_value,
    "hl_attr_define": HlAttrDefine.from_value,
    "hl_group_set": HlGroupSet.from_value,
    "grid_resize": GridResize.from_value,
    "grid_clear": GridClear.from_value,
    "grid_cursor_goto": GridCursorGoto.from_value,
    "grid_line": GridLine.from_value,
    "grid_scroll": GridScroll.from_value,
    "grid_destroy": GridDestroy.from_value,
    "win_pos": WinPos.from_value,
    "win_float_pos": WinFloatPos.from_value,
    "win_external_pos": WinExternalPos.from_value,
    "win_hide": WinHide.from_value,
    "win_close": WinClose.from_value,
    "msg_set_pos": MsgSetPos.from_value,
    "win_viewport": WinViewport.from_value,
    "win_extmark": WinExtmark.from_value,
    "popupmenu_show": PopupmenuShow.from_value,
    "popupmenu_hide": None,
    "popupmenu_select": PopupmenuSelect.from_value,
    "tabline_update": TablineUpdate.from_value,
    "cmdline_show": CmdlineShow.from_value,
    "cmdline_pos": CmdlinePos.from_value,
    "cmdline_special_char": CmdlineSpecialChar.from_value,
    "cmdline_hide": CmdlineHide.from_value,
    "cmdline_block_show": CmdlineBlockShow.from_value,
    "cmdline_block_append": CmdlineBlockAppend.from_value,
    "cmdline_block_hide": None,
    "wildmenu_show": WildmenuShow.from_value,
    "wildmenu_select": WildmenuSelect.from_value,
    "wildmenu_hide": None,
    "msg_show": MsgShow.from_value,
    "msg_clear": None,
    "msg_showcmd": MsgShowcmd.from_value,
    "msg_showmode": MsgShowmode.from_value,
    "msg_ruler": MsgRuler.from_value,
    "msg_history_show": MsgHistoryShow.from_value,
    "msg_history_clear": None,
}


@dataclass
class UiEvent:
    """One UI event with the batch of argument records it carried.

    Events that take no arguments have an empty ``args`` list.
    """

    name: str
    args: list = field(default_factory=list)

    def __str__(self) -> str:
        return self.name


def decode_ui_event(value: Any) -> UiEvent:
    """Decode one ``[name, args...]`` batch of a redraw notification."""
    if not isinstance(value, (list, tuple)) or not value:
        raise UiEventDecodeError(f"failed to decode message {value!r}")
    name = value[0]
    if not isinstance(name, str):
        raise UiEventDecodeError(f"failed to decode message {value!r}")
    if len(value) < 2:
        raise UiEventDecodeError(f"missing parameters for event {name!r}")

    first = value[1]
    params = None if isinstance(first, (list, tuple)) and not first else list(value[1:])

    if name not in _EVENTS:
        raise UiEventDecodeError(f"unknown ui event {name!r}")
    decoder = _EVENTS[name]

    if decoder is None:
        if params is not None:
            raise UiEventDecodeError(f"unexpected parameters for event {name!r}")
        return UiEvent(name)

    if params is None:
        raise UiEventDecodeError(f"missing parameters for event {name!r}")
    try:
        args = [decoder(item) for item in params]
    except (ValueError, TypeError, KeyError, IndexError) as exc:
        raise UiEventDecodeError(f"failed to decode {name!r}: {exc}") from exc
    return UiEvent(name, args)


def decode_redraw_params(params: Any) -> list[UiEvent]:
    """Decode the params of a ``redraw`` notification into UI events."""
    if not isinstance(params, (list, tuple)):
        raise UiEventDecodeError(f"Invalid params type: {params!r}")
    return [decode_ui_event(batch) for batch in params]