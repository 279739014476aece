"""Reading msgpack-RPC messages from an asynchronous stream."""

from __future__ import annotations

from typing import Any

import msgpack

from .message import Message, MessageDecodeError, decode_message

_CHUNK_SIZE = 8192


class ReadError(Exception):
    """Raised when reading or decoding a message fails."""


class RpcReader:
    """Reads RPC messages from a stream offering an async ``read(n)``."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream
        self._unpacker = msgpack.Unpacker(raw=False, strict_map_key=False)

    def into_inner(self) -> Any:
        """Return the underlying stream."""
        return self._stream

    async def _fill_buffer(self) -> None:
        try:
            data = await self._stream.read(_CHUNK_SIZE)
        except OSError as exc:
            raise ReadError(f"failed to read: {exc}") from exc
        if not data:
            raise ReadError("Read zero bytes")
        self._unpacker.feed(data)

    async def recv(self) -> Message:
        """Read the next complete message, reading more data as needed."""
        while True:
            try:
                value = next(self._unpacker)
            except StopIteration:
                await self._fill_buffer()
                continue
            except (ValueError, msgpack.exceptions.UnpackException) as exc:
                raise ReadError(f"failed to decode msgpack data: {exc}") from exc

            try:
                return decode_message(value)
            except MessageDecodeError as exc:
                raise ReadError(str(exc)) from exc