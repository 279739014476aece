import pytest

from nvimlink.colors import Color, Colors, Highlight, HlAttr, HlGroup
from nvimlink.types import HlAttr as NvimHlAttr


@pytest.mark.parametrize("value", [0x000000, 0xFFFFFF, 0x112233, 0xABCDEF, 0x7F0080])
def test_color_hex_round_trip(value):
    assert Color.from_i64(value).as_hex() == f"{value:06x}"


def test_default_color_is_opaque_black():
    color = Color()
    assert color.as_hex() == "000000"
    assert color.alpha == 1.0


def test_from_i64_ignores_high_bits():
    assert Color.from_i64(0x1_00_A0B0C0).as_hex() == Color.from_i64(0xA0B0C0).as_hex()


def test_hl_attr_from_nvim_maps_fields():
    attr = HlAttr.from_nvim(
        NvimHlAttr(foreground=0x102030, underdouble=True, underdotted=True, bold=True)
    )
    assert attr.foreground.as_hex() == "102030"
    assert attr.background is None
    assert attr.underlineline is True
    assert attr.underdot is True
    assert attr.bold is True


def test_missing_highlight_uses_defaults():
    colors = Colors(fg=Color.from_i64(0xABCDEF), bg=Color.from_i64(0x010203))
    hl = colors.get_hl(42)
    assert hl.hl_attr is None
    assert hl.fg() == colors.fg
    assert hl.bg() == colors.bg
    assert hl.sp() == colors.sp


def test_highlight_uses_attr_colors():
    fg = Color.from_i64(0x112233)
    colors = Colors(hls={1: HlAttr(foreground=fg)})
    hl = colors.get_hl(1)
    assert hl.fg() == fg
    assert hl.bg() == colors.bg


def test_reverse_swaps_colors():
    fg = Color.from_i64(0x112233)
    bg = Color.from_i64(0x445566)
    colors = Colors(hls={3: HlAttr(foreground=fg, background=bg, reverse=True)})
    hl = colors.get_hl(3)
    assert hl.fg() == bg
    assert hl.bg() == fg


def test_reverse_falls_back_to_swapped_defaults():
    colors = Colors(
        fg=Color.from_i64(0x0000FF),
        bg=Color.from_i64(0x00FF00),
        hls={2: HlAttr(reverse=True)},
    )
    hl = colors.get_hl(2)
    assert hl.fg() == colors.bg
    assert hl.bg() == colors.fg


def test_hl_group_lookup():
    special = Color.from_i64(0x998877)
    colors = Colors(hls={7: HlAttr(special=special)})
    assert colors.get_hl_group(HlGroup.PMENU).hl_attr is None
    colors.set_hl_group(HlGroup.PMENU, 7)
    assert colors.get_hl_group(HlGroup.PMENU).sp() == special
    assert colors.hl_groups == {HlGroup.PMENU: 7}


def test_hl_group_with_undefined_highlight():
    colors = Colors()
    colors.set_hl_group(HlGroup.TAB_LINE, 5)
    assert colors.get_hl_group(HlGroup.TAB_LINE).hl_attr is None


def test_pango_markup_attributes():
    fg = Color.from_i64(0x123456)
    hl = Highlight(Colors(), HlAttr(foreground=fg, bold=True, undercurl=True, italic=True))
    markup = hl.pango_markup("text")
    assert markup.startswith("<span")
    assert f'foreground="#{fg.as_hex()}"' in markup
    assert 'weight="bold"' in markup
    assert 'underline="error"' in markup
    assert 'font_style="italic"' in markup
    assert 'strikethrough="false"' in markup
    assert markup.endswith(">text</span>")


def test_pango_markup_defaults():
    markup = Highlight(Colors()).pango_markup("x")
    assert 'weight="normal"' in markup
    assert 'underline="none"' in markup
    assert 'font_style="normal"' in markup


def test_pango_markup_underline_precedence():
    single = Highlight(Colors(), HlAttr(underline=True, underlineline=True))
    double = Highlight(Colors(), HlAttr(underlineline=True, strikethrough=True))
    assert 'underline="single"' in single.pango_markup("a")
    assert 'underline="double"' in double.pango_markup("a")
    assert 'strikethrough="true"' in double.pango_markup("a")


def test_pango_markup_escapes_text():
    markup = Highlight(Colors()).pango_markup("a <b> & 'c'")
    assert markup.endswith(">a &lt;b&gt; &amp; &#39;c&#39;</span>")