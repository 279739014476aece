import msgpack
import pytest

from nvimlink.types import (
    Buffer,
    CmdlineContent,
    CursorShape,
    GridLineData,
    HlAttr,
    MsgShowContent,
    PopupmenuItem,
    TablineBuffer,
    TablineTab,
    Tabpage,
    Window,
)
from nvimlink.uievent_types import (
    CmdlineBlockShow,
    CmdlineShow,
    DefaultColorsSet,
    GridClear,
    GridDestroy,
    GridLine,
    HlAttrDefine,
    HlGroupSet,
    ModeChange,
    ModeInfoSet,
    MsgHistoryShow,
    MsgShow,
    PopupmenuShow,
    Put,
    TablineUpdate,
    WinClose,
    WinFloatPos,
    WinHide,
    WinPos,
    WinViewport,
)

WIN = msgpack.ExtType(1, b"\x03")


def test_grid_line():
    event = GridLine.from_value([1, 2, 0, [["a", 1, 3], [" "]], False])
    assert event.grid == 1
    assert event.row == 2
    assert event.data == [GridLineData("a", 1, 3), GridLineData(" ")]
    assert event.wrap is False


def test_hl_attr_define():
    event = HlAttrDefine.from_value([5, {"foreground": 255, "bold": True}, {}, []])
    assert event.id == 5
    assert event.rgb_attrs.foreground == 255
    assert event.rgb_attrs.bold is True
    assert event.cterm_attrs == HlAttr()
    assert event.info == []


def test_mode_info_set():
    event = ModeInfoSet.from_value(
        [True, [{"cursor_shape": "block", "name": "normal"}, {"name": "insert"}]]
    )
    assert event.enabled is True
    assert event.cursor_styles[0].cursor_shape is CursorShape.BLOCK
    assert event.cursor_styles[1].name == "insert"
    assert event.cursor_styles[1].cursor_shape is None


def test_mode_change():
    assert ModeChange.from_value(["normal", 0]) == ModeChange("normal", 0)


def test_win_pos_keeps_handle():
    event = WinPos.from_value([2, WIN, 0, 0, 80, 24])
    assert event.win == Window(WIN)
    assert (event.width, event.height) == (80, 24)


def test_win_float_pos_converts_integers_to_float():
    event = WinFloatPos.from_value([3, WIN, "NW", 1, 2, 4, True, 50])
    assert event.anchor_row == 2.0
    assert isinstance(event.anchor_col, float)
    assert event.focusable is True


def test_win_viewport_requires_all_fields():
    with pytest.raises(ValueError):
        WinViewport.from_value([1, WIN, 0, 10, 5, 0, 100])
    event = WinViewport.from_value([1, WIN, 0, 10, 5, 0, 100, -2])
    assert event.scroll_delta == -2


def test_tabline_update():
    tab = msgpack.ExtType(2, b"\x01")
    buf = msgpack.ExtType(0, b"\x01")
    event = TablineUpdate.from_value(
        [tab, [{"tab": tab, "name": "one"}], buf, [{"buffer": buf, "name": "a.txt"}]]
    )
    assert event.current == Tabpage(tab)
    assert event.tabs == [TablineTab("one", Tabpage(tab))]
    assert event.current_buffer == Buffer(buf)
    assert event.buffers == [TablineBuffer("a.txt", Buffer(buf))]


def test_popupmenu_show():
    event = PopupmenuShow.from_value([[["foo", "v", "", ""]], -1, 3, 4, 1])
    assert event.items == [PopupmenuItem("foo", "v", "", "")]
    assert event.selected == -1


def test_cmdline_show_and_block():
    show = CmdlineShow.from_value([[[0, "echo"]], 4, ":", "", 0, 1])
    assert show.content == [CmdlineContent(0, "echo")]
    assert show.firstc == ":"
    block = CmdlineBlockShow.from_value([[[[0, "a"]], [[1, "b"]]]])
    assert block.lines == [[CmdlineContent(0, "a")], [CmdlineContent(1, "b")]]


def test_msg_show_and_history():
    show = MsgShow.from_value(["echo", [[0, "hello"]], False])
    assert show.content == [MsgShowContent(0, "hello")]
    history = MsgHistoryShow.from_value([[["echo", [[0, "old"]]]]])
    assert history.entries[0].content[0].text_chunk == "old"


def test_put_and_hl_group_set():
    assert Put.from_value(["x"]).str == "x"
    assert HlGroupSet.from_value(["Pmenu", 7]) == HlGroupSet("Pmenu", 7)


def test_default_colors_set_rejects_bool():
    with pytest.raises(ValueError):
        DefaultColorsSet.from_value([0, 0, True, 0, 0])


@pytest.mark.parametrize("cls", [GridClear, GridDestroy, WinHide, WinClose])
def test_single_grid_events(cls):
    assert cls.from_value([7]).grid == 7
    with pytest.raises(ValueError):
        cls.from_value(["7"])