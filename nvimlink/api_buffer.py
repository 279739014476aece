"""Neovim API calls for autocommands, buffers, commands, extmarks and options."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from .client import Client
from .types import Buffer, Window

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1

Decoder = Callable[[Any], Any]


def _i64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    if not _I64_MIN <= value <= _I64_MAX:
        raise ValueError(f"integer out of range: {value}")
    return value


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _unit(value: Any) -> None:
    if value is not None:
        raise ValueError(f"expected nil, got {value!r}")
    return None


def _array(value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected an array, got {value!r}")
    return list(value)


def _list_of(item: Decoder) -> Decoder:
    def decode(value: Any) -> list:
        return [item(entry) for entry in _array(value)]

    return decode


def _pair(value: Any) -> tuple[int, int]:
    items = _array(value)
    if len(items) != 2:
        raise ValueError(f"expected 2 elements, got {len(items)}")
    return _i64(items[0]), _i64(items[1])


_str_list = _list_of(_str)
_i64_list = _list_of(_i64)


class BufferApi:
    """Typed wrappers around Neovim API functions.

    Each method sends its request and returns an awaitable for the decoded
    result, so ``pending = await api.nvim_buf_line_count(buf)`` writes the
    request and ``await pending`` waits for the answer.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    async def _call(
        self,
        method: str,
        *args: Any,
        decode: Optional[Decoder] = None,
        void: bool = False,
    ) -> Awaitable[Any]:
        return await self.client.call(method, list(args), decode, void)

    async def _void(self, method: str, *args: Any) -> Awaitable[None]:
        return await self._call(method, *args, decode=_unit, void=True)

    # Autocommands.

    async def nvim_get_autocmds(self, opts: Any) -> Awaitable[list]:
        return await self._call("nvim_get_autocmds", opts, decode=_array)

    async def nvim_create_autocmd(self, event: Any, opts: Any) -> Awaitable[int]:
        return await self._call("nvim_create_autocmd", event, opts, decode=_i64)

    async def nvim_del_autocmd(self, id: int) -> Awaitable[None]:
        return await self._void("nvim_del_autocmd", id)

    async def nvim_clear_autocmds(self, opts: Any) -> Awaitable[None]:
        return await self._void("nvim_clear_autocmds", opts)

    async def nvim_create_augroup(self, name: str, opts: Any) -> Awaitable[int]:
        return await self._call("nvim_create_augroup", name, opts, decode=_i64)

    async def nvim_del_augroup_by_id(self, id: int) -> Awaitable[None]:
        return await self._void("nvim_del_augroup_by_id", id)

    async def nvim_del_augroup_by_name(self, name: str) -> Awaitable[None]:
        return await self._void("nvim_del_augroup_by_name", name)

    async def nvim_exec_autocmds(self, event: Any, opts: Any) -> Awaitable[None]:
        return await self._void("nvim_exec_autocmds", event, opts)

    # Buffers.

    async def nvim_buf_line_count(self, buffer: Buffer) -> Awaitable[int]:
        return await self._call("nvim_buf_line_count", buffer, decode=_i64)

    async def nvim_buf_attach(
        self, buffer: Buffer, send_buffer: bool, opts: Any
    ) -> Awaitable[bool]:
        return await self._call(
            "nvim_buf_attach", buffer, send_buffer, opts, decode=_bool
        )

    async def nvim_buf_detach(self, buffer: Buffer) -> Awaitable[bool]:
        return await self._call("nvim_buf_detach", buffer, decode=_bool)

    async def nvim_buf_get_lines(
        self, buffer: Buffer, start: int, end: int, strict_indexing: bool
    ) -> Awaitable[list[str]]:
        return await self._call(
            "nvim_buf_get_lines", buffer, start, end, strict_indexing, decode=_str_list
        )

    async def nvim_buf_set_lines(
        self,
        buffer: Buffer,
        start: int,
        end: int,
        strict_indexing: bool,
        replacement: list[str],
    ) -> Awaitable[None]:
        return await self._void(
            "nvim_buf_set_lines", buffer, start, end, strict_indexing, list(replacement)
        )

    async def nvim_buf_set_text(
        self,
        buffer: Buffer,
        start_row: int,
        start_col: int,
        end_row: int,
        end_col: int,
        replacement: list[str],
    ) -> Awaitable[None]:
        return await self._void(
            "nvim_buf_set_text",
            buffer,
            start_row,
            start_col,
            end_row,
            end_col,
            list(replacement),
        )

    async def nvim_buf_get_text(
        self,
        buffer: Buffer,
        start_row: int,
        start_col: int,
        end_row: int,
        end_col: int,
        opts: Any,
    ) -> Awaitable[list[str]]:
        return await self._call(
            "nvim_buf_get_text",
            buffer,
            start_row,
            start_col,
            end_row,
            end_col,
            opts,
            decode=_str_list,
        )

    async def nvim_buf_get_offset(self, buffer: Buffer, index: int) -> Awaitable[int]:
        return await self._call("nvim_buf_get_offset", buffer, index, decode=_i64)

    async def nvim_buf_get_var(self, buffer: Buffer, name: str) -> Awaitable[Any]:
        return await self._call("nvim_buf_get_var", buffer, name)

    async def nvim_buf_get_changedtick(self, buffer: Buffer) -> Awaitable[int]:
        return await self._call("nvim_buf_get_changedtick", buffer, decode=_i64)

    async def nvim_buf_get_keymap(self, buffer: Buffer, mode: str) -> Awaitable[list]:
        return await self._call("nvim_buf_get_keymap", buffer, mode, decode=_array)

    async def nvim_buf_set_keymap(
        self, buffer: Buffer, mode: str, lhs: str, rhs: str, opts: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_buf_set_keymap", buffer, mode, lhs, rhs, opts)

    async def nvim_buf_del_keymap(
        self, buffer: Buffer, mode: str, lhs: str
    ) -> Awaitable[None]:
        return await self._void("nvim_buf_del_keymap", buffer, mode, lhs)

    async def nvim_buf_set_var(
        self, buffer: Buffer, name: str, value: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_buf_set_var", buffer, name, value)

    async def nvim_buf_del_var(self, buffer: Buffer, name: str) -> Awaitable[None]:
        return await self._void("nvim_buf_del_var", buffer, name)

    async def nvim_buf_get_name(self, buffer: Buffer) -> Awaitable[str]:
        return await self._call("nvim_buf_get_name", buffer, decode=_str)

    async def nvim_buf_set_name(self, buffer: Buffer, name: str) -> Awaitable[None]:
        return await self._void("nvim_buf_set_name", buffer, name)

    async def nvim_buf_is_loaded(self, buffer: Buffer) -> Awaitable[bool]:
        return await self._call("nvim_buf_is_loaded", buffer, decode=_bool)

    async def nvim_buf_delete(self, buffer: Buffer, opts: Any) -> Awaitable[None]:
        return await self._void("nvim_buf_delete", buffer, opts)

    async def nvim_buf_is_valid(self, buffer: Buffer) -> Awaitable[bool]:
        return await self._call("nvim_buf_is_valid", buffer, decode=_bool)

    async def nvim_buf_del_mark(self, buffer: Buffer, name: str) -> Awaitable[bool]:
        return await self._call("nvim_buf_del_mark", buffer, name, decode=_bool)

    async def nvim_buf_set_mark(
        self, buffer: Buffer, name: str, line: int, col: int, opts: Any
    ) -> Awaitable[bool]:
        return await self._call(
            "nvim_buf_set_mark", buffer, name, line, col, opts, decode=_bool
        )

    async def nvim_buf_get_mark(
        self, buffer: Buffer, name: str
    ) -> Awaitable[tuple[int, int]]:
        return await self._call("nvim_buf_get_mark", buffer, name, decode=_pair)

    async def nvim_buf_call(self, buffer: Buffer, fun: Any) -> Awaitable[Any]:
        return await self._call("nvim_buf_call", buffer, fun)

    # Commands.

    async def nvim_parse_cmd(self, string: str, opts: Any) -> Awaitable[Any]:
        return await self._call("nvim_parse_cmd", string, opts)

    async def nvim_cmd(self, cmd: Any, opts: Any) -> Awaitable[str]:
        return await self._call("nvim_cmd", cmd, opts, decode=_str)

    async def nvim_create_user_command(
        self, name: str, command: Any, opts: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_create_user_command", name, command, opts)

    async def nvim_del_user_command(self, name: str) -> Awaitable[None]:
        return await self._void("nvim_del_user_command", name)

    async def nvim_buf_create_user_command(
        self, buffer: Buffer, name: str, command: Any, opts: Any
    ) -> Awaitable[None]:
        return await self._void(
            "nvim_buf_create_user_command", buffer, name, command, opts
        )

    async def nvim_buf_del_user_command(
        self, buffer: Buffer, name: str
    ) -> Awaitable[None]:
        return await self._void("nvim_buf_del_user_command", buffer, name)

    async def nvim_get_commands(self, opts: Any) -> Awaitable[Any]:
        return await self._call("nvim_get_commands", opts)

    async def nvim_buf_get_commands(self, buffer: Buffer, opts: Any) -> Awaitable[Any]:
        return await self._call("nvim_buf_get_commands", buffer, opts)

    async def nvim_get_option_info(self, name: str) -> Awaitable[Any]:
        return await self._call("nvim_get_option_info", name)

    # Namespaces, extmarks and highlights.

    async def nvim_create_namespace(self, name: str) -> Awaitable[int]:
        return await self._call("nvim_create_namespace", name, decode=_i64)

    async def nvim_get_namespaces(self) -> Awaitable[Any]:
        return await self._call("nvim_get_namespaces")

    async def nvim_buf_get_extmark_by_id(
        self, buffer: Buffer, ns_id: int, id: int, opts: Any
    ) -> Awaitable[list[int]]:
        return await self._call(
            "nvim_buf_get_extmark_by_id", buffer, ns_id, id, opts, decode=_i64_list
        )

    async def nvim_buf_get_extmarks(
        self, buffer: Buffer, ns_id: int, start: Any, end: Any, opts: Any
    ) -> Awaitable[list]:
        return await self._call(
            "nvim_buf_get_extmarks", buffer, ns_id, start, end, opts, decode=_array
        )

    async def nvim_buf_set_extmark(
        self, buffer: Buffer, ns_id: int, line: int, col: int, opts: Any
    ) -> Awaitable[int]:
        return await self._call(
            "nvim_buf_set_extmark", buffer, ns_id, line, col, opts, decode=_i64
        )

    async def nvim_buf_del_extmark(
        self, buffer: Buffer, ns_id: int, id: int
    ) -> Awaitable[bool]:
        return await self._call("nvim_buf_del_extmark", buffer, ns_id, id, decode=_bool)

    async def nvim_buf_add_highlight(
        self,
        buffer: Buffer,
        ns_id: int,
        hl_group: str,
        line: int,
        col_start: int,
        col_end: int,
    ) -> Awaitable[int]:
        return await self._call(
            "nvim_buf_add_highlight",
            buffer,
            ns_id,
            hl_group,
            line,
            col_start,
            col_end,
            decode=_i64,
        )

    async def nvim_buf_clear_namespace(
        self, buffer: Buffer, ns_id: int, line_start: int, line_end: int
    ) -> Awaitable[None]:
        return await self._void(
            "nvim_buf_clear_namespace", buffer, ns_id, line_start, line_end
        )

    async def nvim_set_decoration_provider(self, ns_id: int, opts: Any) -> Awaitable[None]:
        return await self._void("nvim_set_decoration_provider", ns_id, opts)

    # Options.

    async def nvim_get_option_value(self, name: str, opts: Any) -> Awaitable[Any]:
        return await self._call("nvim_get_option_value", name, opts)

    async def nvim_set_option_value(
        self, name: str, value: Any, opts: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_set_option_value", name, value, opts)

    async def nvim_get_all_options_info(self) -> Awaitable[Any]:
        return await self._call("nvim_get_all_options_info")

    async def nvim_get_option_info2(self, name: str, opts: Any) -> Awaitable[Any]:
        return await self._call("nvim_get_option_info2", name, opts)

    async def nvim_set_option(self, name: str, value: Any) -> Awaitable[None]:
        return await self._void("nvim_set_option", name, value)

    async def nvim_get_option(self, name: str) -> Awaitable[Any]:
        return await self._call("nvim_get_option", name)

    async def nvim_buf_get_option(self, buffer: Buffer, name: str) -> Awaitable[Any]:
        return await self._call("nvim_buf_get_option", buffer, name)

    async def nvim_buf_set_option(
        self, buffer: Buffer, name: str, value: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_buf_set_option", buffer, name, value)

    async def nvim_win_get_option(self, window: Window, name: str) -> Awaitable[Any]:
        return await self._call("nvim_win_get_option", window, name)

    async def nvim_win_set_option(
        self, window: Window, name: str, value: Any
    ) -> Awaitable[None]:
        return await self._void("nvim_win_set_option", window, name, value)