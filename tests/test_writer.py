import msgpack
import pytest

from nvimlink.message import Notification, Request, Response
from nvimlink.writer import RpcWriter, WriteError, encode


class _Sink:
    def __init__(self):
        self.data = bytearray()
        self.drained = 0

    def write(self, data):
        self.data.extend(data)

    async def drain(self):
        self.drained += 1


class _BrokenSink:
    def write(self, data):
        raise BrokenPipeError("pipe closed")

    async def drain(self):
        pass


class _Ext:
    def to_msgpack(self):
        return msgpack.ExtType(0, b"\x01")


def _unpack(data):
    return msgpack.unpackb(bytes(data), raw=False)


def test_encode_notification_wire_bytes():
    assert encode(Notification("a", [])) == b"\x93\x02\xa1a\x90"


def test_encode_request_matches_layout():
    got = encode(Request(5, "foobar", {"foo": 2, "bar": 3}))
    assert got == msgpack.packb([0, 5, "foobar", {"foo": 2, "bar": 3}])


def test_encode_plain_value():
    assert _unpack(encode([1, "x"])) == [1, "x"]


def test_encode_uses_to_msgpack_hook():
    data = encode(Request(1, "m", [_Ext()]))
    assert _unpack(data) == [0, 1, "m", [msgpack.ExtType(0, b"\x01")]]


def test_encode_unserializable_raises():
    with pytest.raises(WriteError):
        encode(Request(1, "m", [object()]))


@pytest.mark.asyncio
async def test_write_request():
    sink = _Sink()
    await RpcWriter(sink).write_request(3, "nvim_input", ("abc",))
    assert _unpack(sink.data) == [0, 3, "nvim_input", ["abc"]]
    assert sink.drained == 1


@pytest.mark.asyncio
async def test_write_response():
    sink = _Sink()
    await RpcWriter(sink).write_response(9, None, None)
    assert _unpack(sink.data) == Response(9).to_list()


@pytest.mark.asyncio
async def test_write_notification():
    sink = _Sink()
    await RpcWriter(sink).write_notification("redraw", [["flush"]])
    assert _unpack(sink.data) == [2, "redraw", [["flush"]]]


@pytest.mark.asyncio
async def test_write_message_appends():
    sink = _Sink()
    writer = RpcWriter(sink)
    await writer.write_message(Notification("a", []))
    await writer.write_message(Notification("b", []))
    unpacker = msgpack.Unpacker(raw=False)
    unpacker.feed(bytes(sink.data))
    assert list(unpacker) == [[2, "a", []], [2, "b", []]]
    assert sink.drained == 2


@pytest.mark.asyncio
async def test_write_io_error():
    with pytest.raises(WriteError):
        await RpcWriter(_BrokenSink()).write(b"data")