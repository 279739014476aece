"""Msgpack-RPC message types: requests, responses and notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

_U32_MAX = 0xFFFFFFFF


class MessageDecodeError(ValueError):
    """Raised when a decoded msgpack value is not a valid RPC message."""


@dataclass
class Request:
    """A request message: ``[0, msgid, method, params]``."""

    TYPE: ClassVar[int] = 0

    msgid: int
    method: str
    params: Any

    def to_list(self) -> list:
        """Return the wire layout of the message."""
        return [self.TYPE, self.msgid, self.method, self.params]


@dataclass
class Response:
    """A response message: ``[1, msgid, error, result]``."""

    TYPE: ClassVar[int] = 1

    msgid: int
    error: Any = None
    result: Any = None

    def to_list(self) -> list:
        """Return the wire layout of the message."""
        return [self.TYPE, self.msgid, self.error, self.result]


@dataclass
class Notification:
    """A notification message: ``[2, method, params]``."""

    TYPE: ClassVar[int] = 2

    method: str
    params: Any

    def to_list(self) -> list:
        """Return the wire layout of the message."""
        return [self.TYPE, self.method, self.params]


Message = Union[Request, Response, Notification]


def _msgid(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise MessageDecodeError(f"invalid msgid: {value!r}")
    return value


def _method(value: Any) -> str:
    if not isinstance(value, str):
        raise MessageDecodeError(f"invalid method name: {value!r}")
    return value


def _expect_len(value: list | tuple, length: int) -> None:
    if len(value) != length:
        raise MessageDecodeError(
            f"expected {length} elements in message, got {len(value)}"
        )


def decode_message(value: Any) -> Message:
    """Turn a decoded msgpack array into a request, response or notification."""
    if not isinstance(value, (list, tuple)) or not value:
        raise MessageDecodeError(f"message must be a non-empty array: {value!r}")

    kind = value[0]
    if kind == Request.TYPE and not isinstance(kind, bool):
        _expect_len(value, 4)
        return Request(_msgid(value[1]), _method(value[2]), value[3])
    if kind == Response.TYPE and not isinstance(kind, bool):
        _expect_len(value, 4)
        return Response(_msgid(value[1]), value[2], value[3])
    if kind == Notification.TYPE and not isinstance(kind, bool):
        _expect_len(value, 3)
        return Notification(_method(value[1]), value[2])
    raise MessageDecodeError(f"unknown message type: {kind!r}")