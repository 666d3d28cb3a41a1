"""to_vfile: Create virtual files from paths and read or write them on disk."""

from .config import ReadOptions, WriteOptions, read_options, write_options
from .context import current_executor, use_executor
from .core import (
    aread,
    awrite,
    read,
    read_sync,
    resolve_path,
    to_vfile,
    write,
    write_sync,
)
from .vfile import VFile, is_buffer

__all__ = [
    "aread",
    "awrite",
    "current_executor",
    "is_buffer",
    "read",
    "read_options",
    "read_sync",
    "ReadOptions",
    "resolve_path",
    "to_vfile",
    "use_executor",
    "VFile",
    "write",
    "write_options",
    "write_sync",
    "WriteOptions",
]
