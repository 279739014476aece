"""Msgpack-RPC client, UI event decoding and typed API calls for Neovim."""

__version__ = "0.1.0"