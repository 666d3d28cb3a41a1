"""Virtual file value holding a location and its content."""

from __future__ import annotations

import os
import os.path
from collections.abc import Mapping
from typing import Any, Union

Value = Union[str, bytes, bytearray, memoryview]

# Path related fields are applied in this order so that later ones can
# refine what earlier ones set (e.g. ``path`` then ``extname``).
_PATH_FIELDS = ("history", "path", "basename", "stem", "extname", "dirname")
_OTHER_FIELDS = ("cwd", "value", "data")


def is_buffer(value: Any) -> bool:
    """Return True if ``value`` is a raw binary buffer."""
    return isinstance(value, (bytes, bytearray, memoryview))


def _assert_part(part: str, name: str) -> None:
    if os.sep in part or (os.altsep and os.altsep in part):
        raise ValueError(
            f"`{name}` cannot be a path: did not expect `{os.sep}`"
        )


def _assert_non_empty(part: str | None, name: str) -> None:
    if not part:
        raise ValueError(f"`{name}` cannot be empty")


def _assert_path(path: str | None, name: str) -> None:
    if not path:
        raise ValueError(f"Setting `{name}` requires `path` to be set too")


class VFile:
    """A file: where it lives and what it holds.

    The content is never read or written here; see ``to_vfile.read_sync``
    and friends for that.

    Attributes:
        cwd: Base directory a relative ``path`` resolves against.
        value: In-memory content (``str`` or bytes-like), None until set.
        history: Every path the file has had, most recent last.
        data: Free-form storage for callers.
    """

    def __init__(self, options: Mapping[str, Any] | Value | None = None):
        """Create a virtual file.

        Args:
            options: None, a mapping of field names to values, or raw
                content used as ``value``.

        Raises:
            ValueError: If a field is unknown or a path field is invalid.
            TypeError: If ``options`` is of an unsupported type.
        """
        self.data: dict[str, Any] = {}
        self.history: list[str] = []
        self.cwd: str = os.getcwd()
        self.value: Value | None = None

        if options is None:
            return
        if isinstance(options, str) or is_buffer(options):
            self.value = options  # type: ignore[assignment]
            return
        if not isinstance(options, Mapping):
            raise TypeError(
                f"Cannot create a VFile from {type(options).__name__}"
            )

        unknown = [
            key for key in options if key not in _PATH_FIELDS + _OTHER_FIELDS
        ]
        if unknown:
            raise ValueError(f"Unexpected VFile fields: {unknown}")

        for key in _PATH_FIELDS:
            if options.get(key) is not None:
                if key == "history":
                    self.history = [os.fsdecode(p) for p in options[key]]
                else:
                    setattr(self, key, options[key])

        if options.get("cwd") is not None:
            self.cwd = os.fsdecode(options["cwd"])
        if "value" in options:
            self.value = options["value"]
        if options.get("data") is not None:
            self.data = dict(options["data"])

    # -------------------------------------------------------------------------
    # Path
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str | None:
        """Current path, or None if the file has no location."""
        return self.history[-1] if self.history else None

    @path.setter
    def path(self, path: str | bytes | os.PathLike) -> None:
        path = os.fsdecode(path)
        _assert_non_empty(path, "path")
        if self.path != path:
            self.history.append(path)

    @property
    def dirname(self) -> str | None:
        if self.path is None:
            return None
        return os.path.dirname(self.path)

    @dirname.setter
    def dirname(self, dirname: str) -> None:
        _assert_path(self.basename, "dirname")
        self.path = os.path.join(dirname or "", self.basename)

    @property
    def basename(self) -> str | None:
        if self.path is None:
            return None
        return os.path.basename(self.path)

    @basename.setter
    def basename(self, basename: str) -> None:
        _assert_non_empty(basename, "basename")
        _assert_part(basename, "basename")
        self.path = os.path.join(self.dirname or "", basename)

    @property
    def extname(self) -> str | None:
        if self.path is None:
            return None
        return os.path.splitext(self.path)[1]

    @extname.setter
    def extname(self, extname: str) -> None:
        _assert_part(extname or "", "extname")
        _assert_path(self.path, "extname")
        if extname:
            if not extname.startswith("."):
                raise ValueError("`extname` must start with `.`")
            if "." in extname[1:]:
                raise ValueError("`extname` cannot contain multiple dots")
        self.path = os.path.join(self.dirname or "", self.stem + (extname or ""))

    @property
    def stem(self) -> str | None:
        if self.path is None:
            return None
        return os.path.splitext(os.path.basename(self.path))[0]

    @stem.setter
    def stem(self, stem: str) -> None:
        _assert_non_empty(stem, "stem")
        _assert_part(stem, "stem")
        self.path = os.path.join(self.dirname or "", stem + (self.extname or ""))

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def to_string(self, encoding: str = "utf-8") -> str:
        """Return ``value`` as text, decoding buffers with ``encoding``."""
        if self.value is None:
            return ""
        if isinstance(self.value, str):
            return self.value
        return bytes(self.value).decode(encoding)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"VFile(path={self.path!r}, cwd={self.cwd!r})"
