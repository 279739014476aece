"""Argument records of the UI events that Neovim sends in ``redraw``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import (
    Buffer,
    CmdlineContent,
    GridLineData,
    HlAttr,
    ModeInfo,
    MsgHistoryShowEntry,
    MsgShowContent,
    PopupmenuItem,
    Record,
    TablineBuffer,
    TablineTab,
    Tabpage,
    Window,
)


@dataclass
class ModeInfoSet(Record):
    enabled: bool
    cursor_styles: list[ModeInfo]


@dataclass
class ModeChange(Record):
    mode: str
    mode_idx: int


@dataclass
class SetTitle(Record):
    title: str


@dataclass
class SetIcon(Record):
    icon: str


@dataclass
class Screenshot(Record):
    path: str


@dataclass
class UpdateFg(Record):
    fg: int


@dataclass
class UpdateBg(Record):
    bg: int


@dataclass
class UpdateSp(Record):
    sp: int


@dataclass
class Resize(Record):
    width: int
    height: int


@dataclass
class CursorGoto(Record):
    row: int
    col: int


@dataclass
class HighlightSet(Record):
    attrs: Any


@dataclass
class Put(Record):
    str: str


@dataclass
class SetScrollRegion(Record):
    top: int
    bot: int
    left: int
    right: int


@dataclass
class Scroll(Record):
    count: int


@dataclass
class DefaultColorsSet(Record):
    rgb_fg: int
    rgb_bg: int
    rgb_sp: int
    cterm_fg: int
    cterm_bg: int


@dataclass
class HlAttrDefine(Record):
    id: int
    rgb_attrs: HlAttr
    cterm_attrs: HlAttr
    info: list[Any]


@dataclass
class HlGroupSet(Record):
    name: str
    id: int


@dataclass
class GridResize(Record):
    grid: int
    width: int
    height: int


@dataclass
class GridClear(Record):
    grid: int


@dataclass
class GridCursorGoto(Record):
    grid: int
    row: int
    col: int


@dataclass
class GridLine(Record):
    grid: int
    row: int
    col_start: int
    data: list[GridLineData]
    wrap: bool


@dataclass
class GridScroll(Record):
    grid: int
    top: int
    bot: int
    left: int
    right: int
    rows: int
    cols: int


@dataclass
class GridDestroy(Record):
    grid: int


@dataclass
class WinPos(Record):
    grid: int
    win: Window
    startrow: int
    startcol: int
    width: int
    height: int


@dataclass
class WinFloatPos(Record):
    grid: int
    win: Window
    anchor: str
    anchor_grid: int
    anchor_row: float
    anchor_col: float
    focusable: bool
    zindex: int


@dataclass
class WinExternalPos(Record):
    grid: int
    win: Window


@dataclass
class WinHide(Record):
    grid: int


@dataclass
class WinClose(Record):
    grid: int


@dataclass
class MsgSetPos(Record):
    grid: int
    row: int
    scrolled: bool
    sep_char: str


@dataclass
class WinViewport(Record):
    grid: int
    win: Window
    topline: int
    botline: int
    curline: int
    curcol: int
    line_count: int
    scroll_delta: int


@dataclass
class WinExtmark(Record):
    grid: int
    win: Window
    ns_id: int
    mark_id: int
    row: int
    col: int


@dataclass
class PopupmenuShow(Record):
    items: list[PopupmenuItem]
    selected: int
    row: int
    col: int
    grid: int


@dataclass
class PopupmenuSelect(Record):
    selected: int


@dataclass
class TablineUpdate(Record):
    current: Tabpage
    tabs: list[TablineTab]
    current_buffer: Buffer
    buffers: list[TablineBuffer]


@dataclass
class CmdlineShow(Record):
    content: list[CmdlineContent]
    pos: int
    firstc: str
    prompt: str
    indent: int
    level: int


@dataclass
class CmdlinePos(Record):
    pos: int
    level: int


@dataclass
class CmdlineSpecialChar(Record):
    c: str
    shift: bool
    level: int


@dataclass
class CmdlineHide(Record):
    level: int


@dataclass
class CmdlineBlockShow(Record):
    lines: list[list[CmdlineContent]]


@dataclass
class CmdlineBlockAppend(Record):
    lines: list[CmdlineContent]


@dataclass
class WildmenuShow(Record):
    items: list[Any]


@dataclass
class WildmenuSelect(Record):
    selected: int


@dataclass
class MsgShow(Record):
    kind: str
    content: list[MsgShowContent]
    replace_last: bool


@dataclass
class MsgShowcmd(Record):
    content: list[Any]


@dataclass
class MsgShowmode(Record):
    content: list[Any]


@dataclass
class MsgRuler(Record):
    content: list[Any]


@dataclass
class MsgHistoryShow(Record):
    entries: list[MsgHistoryShowEntry]