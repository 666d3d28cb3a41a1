"""Options for reading and writing files.

Provides options dataclasses and coercion functions turning the loose
shapes callers pass (an encoding name, a mapping, or None) into them.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

# Descriptors are always opened in binary mode (no-op outside Windows).
_O_BINARY = getattr(os, "O_BINARY", 0)

# fopen-style flags mapped onto os.open() flags.
_FOPEN_FLAGS: dict[str, int] = {
    "r": os.O_RDONLY,
    "rs+": os.O_RDWR | getattr(os, "O_SYNC", 0),
    "r+": os.O_RDWR,
    "w": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "wx": os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_EXCL,
    "w+": os.O_RDWR | os.O_CREAT | os.O_TRUNC,
    "wx+": os.O_RDWR | os.O_CREAT | os.O_TRUNC | os.O_EXCL,
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "ax": os.O_WRONLY | os.O_CREAT | os.O_APPEND | os.O_EXCL,
    "as": os.O_WRONLY | os.O_CREAT | os.O_APPEND | getattr(os, "O_SYNC", 0),
    "a+": os.O_RDWR | os.O_CREAT | os.O_APPEND,
    "ax+": os.O_RDWR | os.O_CREAT | os.O_APPEND | os.O_EXCL,
    "as+": os.O_RDWR | os.O_CREAT | os.O_APPEND | getattr(os, "O_SYNC", 0),
}

FLAGS: dict[str, int] = {
    flag: bits | _O_BINARY for flag, bits in _FOPEN_FLAGS.items()
}


def _check_flag(flag: str) -> None:
    if flag not in FLAGS:
        raise ValueError(
            f"Unsupported flag: {flag!r}. Use one of {sorted(FLAGS)}."
        )


@dataclass(frozen=True)
class ReadOptions:
    """Options for reading a file.

    Attributes:
        encoding: Codec used to decode the content. None reads raw bytes.
        flag: fopen-style flag the file is opened with.
    """

    encoding: str | None = None
    flag: str = "r"

    def __post_init__(self) -> None:
        _check_flag(self.flag)


@dataclass(frozen=True)
class WriteOptions:
    """Options for writing a file.

    Attributes:
        encoding: Codec used to encode a ``str`` value. Buffers are
            written as-is.
        mode: Permission bits applied when the file is created, as an int
            or an octal string such as "644".
        flag: fopen-style flag the file is opened with.
    """

    encoding: str = "utf-8"
    mode: int | str = 0o666
    flag: str = "w"

    def __post_init__(self) -> None:
        _check_flag(self.flag)
        if isinstance(self.mode, str):
            try:
                object.__setattr__(self, "mode", int(self.mode, 8))
            except ValueError:
                raise ValueError(f"Invalid mode: {self.mode!r}") from None
        elif not isinstance(self.mode, int):
            raise TypeError(f"mode must be int or str, not {type(self.mode).__name__}")


def _coerce(cls: type, options: Any) -> Any:
    if options is None:
        return cls()
    if isinstance(options, cls):
        return options
    if isinstance(options, str):
        return cls(encoding=options)
    if isinstance(options, Mapping):
        known = {f.name for f in fields(cls)}
        unexpected = [key for key in options if key not in known]
        if unexpected:
            raise ValueError(f"Unexpected options: {unexpected}")
        # A None entry means "use the default", except for encoding where
        # None is meaningful when reading.
        kwargs = {
            key: value
            for key, value in options.items()
            if value is not None or (key == "encoding" and cls is ReadOptions)
        }
        return cls(**kwargs)
    raise TypeError(
        f"options must be an encoding name or a mapping, not {type(options).__name__}"
    )


def read_options(options: Any = None) -> ReadOptions:
    """Coerce ``options`` into ReadOptions.

    Args:
        options: None, an encoding name, a mapping with ``encoding`` and
            ``flag`` keys, or a ReadOptions.

    Returns:
        ReadOptions instance.

    Examples:
        >>> read_options("utf-8")
        ReadOptions(encoding='utf-8', flag='r')
        >>> read_options({"flag": "r+"})
        ReadOptions(encoding=None, flag='r+')
    """
    return _coerce(ReadOptions, options)


def write_options(options: Any = None) -> WriteOptions:
    """Coerce ``options`` into WriteOptions.

    Args:
        options: None, an encoding name, a mapping with ``encoding``,
            ``mode`` and ``flag`` keys, or a WriteOptions.

    Returns:
        WriteOptions instance.

    Examples:
        >>> write_options({"mode": "600", "flag": "wx"})
        WriteOptions(encoding='utf-8', mode=384, flag='wx')
    """
    return _coerce(WriteOptions, options)
