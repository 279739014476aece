"""Command-line arguments of the editor front end."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

DEFAULT_NVIM = "nvim"
DEFAULT_RUNTIME_PATH = "/usr/local/share/gnvim/runtime"
RUNTIME_PATH_ENV = "GNVIM_RUNTIME_PATH"


@dataclass
class Arguments:
    """Parsed arguments: the Neovim binary, runtime path, files and extra args."""

    nvim: str = DEFAULT_NVIM
    rtp: str = DEFAULT_RUNTIME_PATH
    files: list[str] = field(default_factory=list)
    nvim_args: list[str] = field(default_factory=list)
    stdin_fd: Optional[int] = None

    def nvim_cmd_args(self) -> list[str]:
        """Return the command line that starts an embedded Neovim."""
        return [
            self.nvim,
            "--embed",
            "--cmd",
            f"let &rtp.=',{self.rtp}'",
            *self.nvim_args,
            *self.files,
        ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        usage="%(prog)s [OPTIONS] [FILES]... [-- ARGS...]",
    )
    parser.add_argument("--nvim", metavar="BIN", default=DEFAULT_NVIM, help="Neovim binary.")
    parser.add_argument(
        "--rtp",
        metavar="DIR",
        default=None,
        help=f"Path to the runtime files [env: {RUNTIME_PATH_ENV}].",
    )
    parser.add_argument("files", metavar="FILES", nargs="*", help="Files to open.")
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Arguments:
    """Parse ``argv``; everything after ``--`` is passed on to Neovim.

    When standard input is not a terminal, it is duplicated so that Neovim
    can read from it.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if "--" in argv:
        split = argv.index("--")
        own, nvim_args = argv[:split], argv[split + 1 :]
    else:
        own, nvim_args = argv, []

    namespace = _build_parser().parse_intermixed_args(own)
    rtp = namespace.rtp
    if rtp is None:
        rtp = os.environ.get(RUNTIME_PATH_ENV, DEFAULT_RUNTIME_PATH)

    args = Arguments(
        nvim=namespace.nvim,
        rtp=rtp,
        files=list(namespace.files),
        nvim_args=nvim_args,
    )
    if not os.isatty(0):
        args.stdin_fd = dup_stdin()
    return args


def dup_stdin() -> Optional[int]:
    """Duplicate standard input into an inheritable descriptor, or ``None``."""
    if os.name != "posix":
        print("ERR: stdin pipe not supported on this platform")
        return None
    try:
        fd = os.dup(0)
    except OSError:
        print("ERR: couldn't duplicate stdin")
        return None
    try:
        os.set_inheritable(fd, True)
    except OSError:
        print("ERR: couldn't set fdflags")
        os.close(fd)
        return None
    return fd