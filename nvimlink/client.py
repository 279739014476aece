"""An RPC client that sends requests and routes responses back to callers."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from .message import Response
from .writer import RpcWriter

_U32_MASK = 0xFFFFFFFF


class CallError(Exception):
    """Base class for failures of an RPC call."""


class CallCancelled(CallError):
    """The pending call was cancelled before a response arrived."""


class MissingResult(CallError):
    """The response carried neither an error nor a result."""


class ErrorResponse(CallError):
    """The remote end answered with an error value."""

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value


class DecodeResultError(CallError):
    """The result could not be decoded into the expected type."""


class HandleError(Exception):
    """Base class for failures to deliver a response."""

    def __init__(self, response: Response) -> None:
        super().__init__(response)
        self.response = response


class CallerMissing(HandleError):
    """No pending call matches the response's msgid."""


class CallerDropped(HandleError):
    """The pending call was abandoned, so the response cannot be delivered."""


class Client:
    """Issues requests through an :class:`RpcWriter` and tracks pending calls."""

    def __init__(self, writer: RpcWriter) -> None:
        self.writer = writer
        self._msgid_counter = 0
        self._callbacks: dict[int, asyncio.Future] = {}

    def next_msgid(self) -> int:
        """Return a fresh message id."""
        msgid = self._msgid_counter
        self._msgid_counter = (msgid + 1) & _U32_MASK
        return msgid

    async def write(self, msgid: int, method: str, args: Any) -> None:
        await self.writer.write_request(msgid, method, args)

    async def call(
        self,
        method: str,
        args: Any,
        decode: Optional[Callable[[Any], Any]] = None,
        void: bool = False,
    ) -> Awaitable[Any]:
        """Send a request and return an awaitable for its decoded result.

        ``decode`` converts the raw result; ``void`` marks a call whose
        missing result is acceptable and yields ``None``.
        """
        msgid = self.next_msgid()
        future = asyncio.get_running_loop().create_future()
        self._callbacks[msgid] = future
        try:
            await self.write(msgid, method, args)
        except BaseException:
            self._callbacks.pop(msgid, None)
            raise
        return self._await_response(future, decode, void)

    @staticmethod
    async def _await_response(
        future: asyncio.Future,
        decode: Optional[Callable[[Any], Any]],
        void: bool,
    ) -> Any:
        try:
            response: Response = await asyncio.shield(future)
        except asyncio.CancelledError:
            if future.cancelled():
                raise CallCancelled() from None
            future.cancel()
            raise

        if response.error is not None:
            raise ErrorResponse(response.error)

        if response.result is None:
            if void:
                return None
            raise MissingResult()

        if decode is None:
            return response.result
        try:
            return decode(response.result)
        except (TypeError, ValueError, KeyError, IndexError) as exc:
            raise DecodeResultError(str(exc)) from exc

    def handle_response(self, response: Response) -> None:
        """Deliver a response to the call waiting for it."""
        future = self._callbacks.pop(response.msgid, None)
        if future is None:
            raise CallerMissing(response)
        if future.done():
            raise CallerDropped(response)
        future.set_result(response)