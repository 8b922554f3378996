"""Adapters - I/O implementations of ports."""

from .json_storage import JsonTaskStorage, StorageError

__all__ = [
    "JsonTaskStorage",
    "StorageError",
]
