"""Create virtual files from descriptions and read or write them on disk.

Every operation comes in a blocking form (``read_sync``/``write_sync``)
and a non-blocking form (``read``/``write``) which either calls a
``callback(error, file)`` or returns a ``concurrent.futures.Future``.
``aread``/``awrite`` wrap the non-blocking form for asyncio callers.
"""

from __future__ import annotations

import asyncio
import logging
import os
import os.path
from collections.abc import Callable, Mapping
from concurrent.futures import Future
from functools import partial
from typing import Any, Union

from .config import FLAGS, ReadOptions, WriteOptions, read_options, write_options
from .context import current_executor
from .vfile import VFile, Value, is_buffer

logger = logging.getLogger(__name__)

Description = Union[str, bytes, bytearray, memoryview, os.PathLike, Mapping, VFile, None]
Callback = Callable[[Union[BaseException, None], Union[VFile, None]], Any]


def to_vfile(description: Description = None) -> VFile:
    """Create a virtual file from a description.

    Strings, buffers and path-like objects are used as the path. A VFile
    is returned as-is (same object). Anything else is passed to ``VFile``.

    Args:
        description: Path, buffer, mapping of VFile fields, VFile, or None.

    Returns:
        The virtual file.

    Raises:
        ValueError: If a mapping holds unknown or invalid fields.
        TypeError: If the description cannot be turned into a VFile.
    """
    if isinstance(description, VFile):
        return description
    if isinstance(description, str):
        description = {"path": description}
    elif is_buffer(description):
        description = {"path": os.fsdecode(bytes(description))}
    elif isinstance(description, os.PathLike):
        description = {"path": os.fspath(description)}
    return VFile(description)


def resolve_path(file: VFile) -> str:
    """Return the absolute location of ``file`` on disk.

    Raises:
        TypeError: If the file has no path, or ``cwd`` is not a string.
    """
    if file.path is None:
        raise TypeError("Cannot resolve a VFile without a path")
    return os.path.abspath(os.path.join(file.cwd, file.path))


# -----------------------------------------------------------------------------
# Blocking I/O
# -----------------------------------------------------------------------------


def _encode(value: Value | None, encoding: str) -> bytes:
    # A missing or empty value writes an empty file.
    if not value:
        return b""
    if isinstance(value, str):
        return value.encode(encoding)
    if is_buffer(value):
        return bytes(value)
    raise TypeError(f"Cannot write a value of type {type(value).__name__}")


def _read_into(file: VFile, options: ReadOptions) -> VFile:
    path = resolve_path(file)
    logger.debug("Reading %s (flag=%s)", path, options.flag)
    flags = FLAGS[options.flag]
    with open(path, "rb", opener=lambda p, _: os.open(p, flags)) as f:
        content = f.read()
    file.value = content.decode(options.encoding) if options.encoding else content
    return file


def _write_from(file: VFile, options: WriteOptions) -> VFile:
    path = resolve_path(file)
    data = _encode(file.value, options.encoding)
    logger.debug("Writing %d bytes to %s (flag=%s)", len(data), path, options.flag)
    flags = FLAGS[options.flag]
    with open(path, "wb", opener=lambda p, _: os.open(p, flags, options.mode)) as f:
        f.write(data)
    return file


def read_sync(description: Description, options: Any = None) -> VFile:
    """Create a virtual file and read its content from disk.

    Args:
        description: Anything ``to_vfile`` accepts.
        options: Encoding name, mapping, or ReadOptions.

    Returns:
        The file, with ``value`` set to the content read.

    Raises:
        OSError: If the file cannot be read.
    """
    file = to_vfile(description)
    return _read_into(file, read_options(options))


def write_sync(description: Description, options: Any = None) -> VFile:
    """Create a virtual file and write its ``value`` to disk.

    Args:
        description: Anything ``to_vfile`` accepts.
        options: Encoding name, mapping, or WriteOptions.

    Returns:
        The same file, unchanged.

    Raises:
        OSError: If the file cannot be written.
    """
    file = to_vfile(description)
    return _write_from(file, write_options(options))


# -----------------------------------------------------------------------------
# Non-blocking I/O
# -----------------------------------------------------------------------------


def _invoke(callback: Callback, error: BaseException | None, file: VFile | None) -> None:
    try:
        callback(error, file)
    except Exception:
        logger.exception("Callback %r raised", callback)


def _settle(job: Callable[[], VFile], callback: Callback) -> None:
    try:
        file = job()
    except Exception as error:
        logger.debug("File operation failed: %s", error)
        _invoke(callback, error, None)
    else:
        _invoke(callback, None, file)


def _dispatch(job: Callable[[], VFile], callback: Callback | None) -> Future | None:
    executor = current_executor()
    if callback is None:
        return executor.submit(job)
    executor.submit(_settle, job, callback)
    return None


def read(
    description: Description,
    options: Any = None,
    callback: Callback | None = None,
) -> Future | None:
    """Create a virtual file and read its content from disk, in the background.

    Can be called as ``read(d, options, callback)``, ``read(d, callback)``
    or ``read(d, options)``. With a callback, it is called once with
    ``(None, file)`` or ``(error, None)`` from a worker thread and None is
    returned. Without one, a Future resolving to the file is returned.

    An exception raised by the callback itself is logged to this module's
    logger and then dropped; it is not re-raised or passed to the callback
    a second time.
    """
    file = to_vfile(description)
    if callback is None and callable(options):
        callback, options = options, None
    return _dispatch(partial(_read_into, file, read_options(options)), callback)


def write(
    description: Description,
    options: Any = None,
    callback: Callback | None = None,
) -> Future | None:
    """Create a virtual file and write its ``value`` to disk, in the background.

    Same calling conventions as ``read``; the file is passed on unchanged.
    """
    file = to_vfile(description)
    if callback is None and callable(options):
        callback, options = options, None
    return _dispatch(partial(_write_from, file, write_options(options)), callback)


async def aread(description: Description, options: Any = None) -> VFile:
    """Awaitable version of ``read``."""
    job = partial(_read_into, to_vfile(description), read_options(options))
    return await asyncio.wrap_future(_dispatch(job, None))


async def awrite(description: Description, options: Any = None) -> VFile:
    """Awaitable version of ``write``."""
    job = partial(_write_from, to_vfile(description), write_options(options))
    return await asyncio.wrap_future(_dispatch(job, None))
