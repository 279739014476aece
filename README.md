# nvimlink

nvimlink talks to an embedded Neovim over msgpack-RPC. It provides:

- the three RPC message kinds (`Request`, `Response` and `Notification` in
  `nvimlink.message`), plus `decode_message`, which turns a decoded msgpack
  value into one of them;
- an asynchronous `RpcWriter` (`nvimlink.writer`) and `RpcReader`
  (`nvimlink.reader`) that put messages on a byte stream and read them back;
- a `Client` (`nvimlink.client`) that numbers requests, keeps track of which
  call is waiting for which reply, and routes each `Response` back to its
  caller through `handle_response`;
- `BufferApi` (`nvimlink.api_buffer`), typed wrappers for the Neovim API
  functions that deal with autocommands, buffers, user commands, namespaces,
  extmarks and options;
- decoding of `redraw` notifications into `UiEvent` objects with
  `decode_redraw_params` (`nvimlink.uievents`). The argument records live in
  `nvimlink.uievent_types`, and the value types they use (`HlAttr`,
  `ModeInfo`, `GridLineData`, `UiOptions`, `Window`, `Buffer`, `Tabpage`, ...)
  live in `nvimlink.types`;
- helpers for a front end:
  - `Arguments` and `parse_arguments` (`nvimlink.arguments`) build the
    `nvim --embed` command line;
  - `Colors`, `Highlight` and `Color` (`nvimlink.colors`) resolve highlights
    and produce Pango markup;
  - `parse_gnvim_event` (`nvimlink.events`) decodes the front end's own
    `{"fn": ..., "args": ...}` events;
- `nvimlink-apigen`, a command that generates binding source from Neovim's API
  metadata.

## Installing

```
pip install .
```

The only runtime dependency is `msgpack`. To run the test suite with `pytest`,
install the `test` extra.

## Talking to Neovim

The writer sends requests and the reader yields every incoming message. You
hand replies to the client, which resolves the call that was waiting for them.
Every call goes through two awaits. The first writes the request and gives
back an awaitable. The second waits for the decoded result.

```python
import asyncio

from nvimlink.api_buffer import BufferApi
from nvimlink.client import Client
from nvimlink.message import Response
from nvimlink.reader import RpcReader
from nvimlink.types import Buffer
from nvimlink.writer import RpcWriter


async def run():
    proc = await asyncio.create_subprocess_exec(
        "nvim", "--embed", "--headless",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
    )
    client = Client(RpcWriter(proc.stdin))
    reader = RpcReader(proc.stdout)
    api = BufferApi(client)

    lines = await api.nvim_buf_line_count(Buffer(0))
    argv = await client.call("nvim_get_vvar", ["argv"])

    for _ in range(2):
        message = await reader.recv()
        if isinstance(message, Response):
            client.handle_response(message)

    print(await lines, await argv)


asyncio.run(run())
```

`Client.call(method, args, decode=None, void=False)` sends any API function by
name:

- `decode` converts the raw result. If it raises, you get `DecodeResultError`.
- `void=True` accepts a reply that has no result and yields `None`.

These exceptions are raised:

- `ErrorResponse` when a reply carries an error. Its `value` attribute holds
  the error.
- `MissingResult` when a reply has no result and the call expects one.
- `CallerMissing` from `handle_response` when nobody is waiting for the reply's
  id.
- `CallerDropped` from `handle_response` when the waiting call was already
  abandoned.

## UI events

To attach as a UI, send `UiOptions`:

```python
from nvimlink.types import UiOptions

pending = await client.call(
    "nvim_ui_attach",
    [80, 24, UiOptions(rgb=True, ext_linegrid=True)],
    void=True,
)
```

After that, Neovim sends `Notification` messages with the method `redraw`. Pass
their `params` to `decode_redraw_params` to get a list of `UiEvent` objects:

- Each `UiEvent` has a `name` and an `args` list of decoded records, such as
  `GridLine` or `HlAttrDefine`.
- `str(event)` gives the event's wire name, such as `grid_line` or `flush`.
- Data that cannot be decoded raises `UiEventDecodeError`.

## Generating API bindings

`nvimlink-apigen` reads Neovim's msgpack API metadata (the output of
`nvim --api-info`) on standard input. It prints Python source for either the
API functions or the UI event types:

```
nvim --api-info | nvimlink-apigen functions
nvim --api-info | nvimlink-apigen uievents
```

The `functions` output defines a `NeovimApi` class:

- it extends `BufferApi`;
- it has one method for every API function that is not deprecated.

Any other argument prints a usage line to standard error and exits with
status 1.

## What is not included

- **Typed wrappers for the other API functions.** The package has typed
  wrappers only for the functions listed under `BufferApi`. Windows, tabpages,
  UI attachment, global variables, input, highlights and the rest have none.
  Call them by name with `Client.call`, or generate a `NeovimApi` module with
  `nvimlink-apigen functions`.
- **Starting Neovim.** `parse_arguments` builds the command line but does not
  start it.
- **A user interface.** The package does not draw a window or run a UI loop.