"""Colors and highlight attributes used when drawing the editor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from .types import HlAttr as NvimHlAttr


class HlGroup(enum.Enum):
    """Highlight groups the front end draws with."""

    MSG_SEPARATOR = "MsgSeparator"
    PMENU = "Pmenu"
    PMENU_SEL = "PmenuSel"
    PMENU_SBAR = "PmenuSbar"
    PMENU_THUMB = "PmenuThumb"
    TAB_LINE = "TabLine"
    TAB_LINE_FILL = "TabLineFill"
    TAB_LINE_SEL = "TabLineSel"
    MENU = "Menu"


def _channel_byte(channel: float) -> int:
    # Truncates like a float-to-byte cast; the epsilon absorbs rounding error
    # from the division in ``from_i64``.
    return min(255, int(max(0.0, channel * 255.0) + 1e-6))


@dataclass(frozen=True)
class Color:
    """An RGBA color with channels in ``0.0..=1.0``; opaque black by default."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0

    @classmethod
    def from_i64(cls, value: int) -> "Color":
        """Build an opaque color from a ``0xRRGGBB`` integer."""
        return cls(
            ((value >> 16) & 255) / 255.0,
            ((value >> 8) & 255) / 255.0,
            (value & 255) / 255.0,
            1.0,
        )

    def as_hex(self) -> str:
        """Return the color as ``rrggbb`` without a leading ``#``."""
        return "{:02x}{:02x}{:02x}".format(
            _channel_byte(self.red),
            _channel_byte(self.green),
            _channel_byte(self.blue),
        )


def _color(value: Optional[int]) -> Optional[Color]:
    return None if value is None else Color.from_i64(value)


@dataclass(frozen=True)
class HlAttr:
    """Highlight attributes with the colors turned into :class:`Color`."""

    foreground: Optional[Color] = None
    background: Optional[Color] = None
    special: Optional[Color] = None
    reverse: Optional[bool] = None
    italic: Optional[bool] = None
    bold: Optional[bool] = None
    strikethrough: Optional[bool] = None
    underline: Optional[bool] = None
    underlineline: Optional[bool] = None
    undercurl: Optional[bool] = None
    underdot: Optional[bool] = None
    underdash: Optional[bool] = None
    blend: Optional[Color] = None

    @classmethod
    def from_nvim(cls, attr: NvimHlAttr) -> "HlAttr":
        """Convert the attributes Neovim sent."""
        return cls(
            foreground=_color(attr.foreground),
            background=_color(attr.background),
            special=_color(attr.special),
            reverse=attr.reverse,
            italic=attr.italic,
            bold=attr.bold,
            strikethrough=attr.strikethrough,
            underline=attr.underline,
            underlineline=attr.underdouble,
            undercurl=attr.undercurl,
            underdot=attr.underdotted,
            underdash=attr.underdashed,
            blend=_color(attr.blend),
        )


@dataclass
class Colors:
    """Default colors, defined highlights and the group-to-highlight map."""

    fg: Color = field(default_factory=Color)
    bg: Color = field(default_factory=Color)
    sp: Color = field(default_factory=Color)
    hls: dict[int, HlAttr] = field(default_factory=dict)
    hl_groups: dict[HlGroup, int] = field(default_factory=dict)

    def get_hl(self, hl: int) -> "Highlight":
        """Return the highlight with id ``hl``, falling back to the defaults."""
        return Highlight(self, self.hls.get(hl))

    def set_hl_group(self, group: HlGroup, hl_id: int) -> None:
        self.hl_groups[group] = hl_id

    def get_hl_group(self, group: HlGroup) -> "Highlight":
        """Return the highlight assigned to ``group``, if any."""
        hl_id = self.hl_groups.get(group)
        return Highlight(self, None if hl_id is None else self.hls.get(hl_id))


_MARKUP_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39;",
    '"': "&quot;",
}


def _is_restricted(code: int) -> bool:
    return (
        0x1 <= code <= 0x8
        or code in (0xB, 0xC)
        or 0xE <= code <= 0x1F
        or 0x7F <= code <= 0x84
        or 0x86 <= code <= 0x9F
    )


def _markup_escape(text: str) -> str:
    parts = []
    for ch in text:
        if ch in _MARKUP_ESCAPES:
            parts.append(_MARKUP_ESCAPES[ch])
        elif _is_restricted(ord(ch)):
            parts.append(f"&#x{ord(ch):x};")
        else:
            parts.append(ch)
    return "".join(parts)


@dataclass
class Highlight:
    """A highlight resolved against a :class:`Colors` set."""

    colors: Colors
    hl_attr: Optional[HlAttr] = None

    def _flag(self, name: str) -> bool:
        return bool(self.hl_attr is not None and getattr(self.hl_attr, name))

    def _attr_color(self, name: str) -> Optional[Color]:
        return None if self.hl_attr is None else getattr(self.hl_attr, name)

    def _pick(self, name: str, default: Color) -> Color:
        value = self._attr_color(name)
        return default if value is None else value

    def fg(self) -> Color:
        """Foreground color, swapped with the background when reversed."""
        if self._flag("reverse"):
            return self._pick("background", self.colors.bg)
        return self._pick("foreground", self.colors.fg)

    def bg(self) -> Color:
        """Background color, swapped with the foreground when reversed."""
        if self._flag("reverse"):
            return self._pick("foreground", self.colors.fg)
        return self._pick("background", self.colors.bg)

    def sp(self) -> Color:
        """Special color used for underlines and strikethrough."""
        return self._pick("special", self.colors.sp)

    def pango_markup(self, text: str) -> str:
        """Wrap ``text`` in a Pango ``<span>`` carrying this highlight."""
        weight = "bold" if self._flag("bold") else "normal"
        if self._flag("undercurl"):
            underline = "error"
        elif self._flag("underline"):
            underline = "single"
        elif self._flag("underlineline"):
            underline = "double"
        else:
            underline = "none"
        strikethrough = "true" if self._flag("strikethrough") else "false"
        fontstyle = "italic" if self._flag("italic") else "normal"

        fg = self.fg().as_hex()
        bg = self.bg().as_hex()
        sp = self.sp().as_hex()
        indent = "\n            "
        return (
            "<span"
            f'{indent}foreground="#{fg}"'
            f'{indent}background="#{bg}"'
            f'{indent}underline_color="#{sp}"'
            f'{indent}strikethrough_color="#{sp}"'
            f'{indent}weight="{weight}"'
            f'{indent}font_style="{fontstyle}"'
            f'{indent}strikethrough="{strikethrough}"'
            f'{indent}underline="{underline}">{_markup_escape(text)}</span>'
        )