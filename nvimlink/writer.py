"""Writing msgpack-RPC messages to an asynchronous stream."""

from __future__ import annotations

from typing import Any

import msgpack

from .message import Notification, Request, Response


class WriteError(Exception):
    """Raised when a message cannot be encoded or written."""


def _default(obj: Any) -> Any:
    to_msgpack = getattr(obj, "to_msgpack", None)
    if callable(to_msgpack):
        return to_msgpack()
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def encode(message: Any) -> bytes:
    """Encode a message, or any msgpack-serializable value, into bytes."""
    to_list = getattr(message, "to_list", None)
    value = to_list() if callable(to_list) else message
    try:
        return msgpack.packb(value, default=_default, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise WriteError(f"failed to encode message: {exc}") from exc


class RpcWriter:
    """Writes RPC messages to a stream offering ``write`` and ``drain``."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream

    async def write_request(self, msgid: int, method: str, params: Any) -> None:
        await self.write_message(Request(msgid, method, params))

    async def write_response(self, msgid: int, error: Any, result: Any) -> None:
        await self.write_message(Response(msgid, error, result))

    async def write_notification(self, method: str, params: Any) -> None:
        await self.write_message(Notification(method, params))

    async def write_message(self, message: Any) -> None:
        await self.write(encode(message))

    async def write(self, data: bytes) -> None:
        """Write all of ``data`` and flush the stream."""
        try:
            self.stream.write(data)
            await self.stream.drain()
        except OSError as exc:
            raise WriteError(f"failed to write message: {exc}") from exc