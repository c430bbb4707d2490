"""Segmented path representation: ``Path`` and the ``Paths`` collection."""

from __future__ import annotations

import os
import re
from typing import Final, Iterable, Iterator, Literal, overload

Flavor = Literal["posix", "windows"]

POSIX_ROOT: Final = "/"
UNC_ROOT: Final = "\\\\"

# Root segments and their rendered prefix.
_ROOT_PREFIX: Final[dict[str, str]] = {POSIX_ROOT: "/", UNC_ROOT: "//"}
_SEPARATOR_RE: Final = re.compile(r"[/\\]")
_DJB2_MASK: Final = (1 << 64) - 1


def _default_flavor() -> Flavor:
    return "windows" if os.name == "nt" else "posix"


def _split_suffix(name: str) -> tuple[str, str]:
    """Split a file name into ``(stem, suffix)``.

    A leading dot does not start a suffix (``.bashrc`` has none), and
    neither does a trailing one.
    """
    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1:
        return name, ""
    return name[:dot], name[dot:]


def _check_name(segment: str) -> None:
    if not segment:
        raise ValueError("path segments must be non-empty strings")
    if "/" in segment:
        raise ValueError(f"segment {segment!r} contains a separator")


class Path:
    """An ordered sequence of owned, non-empty string segments.

    A path is built by :meth:`parse`, by joining, by copying or by
    derivation (:meth:`parent`, :meth:`parents`). The only mutation is
    :meth:`add_segment`; everything else returns a new ``Path``.

    The first segment may be a root marker (``/`` or ``\\\\``) produced by
    parsing an absolute string. No other segment holds a ``/``. A
    backslash is an ordinary filename character inside a segment, so
    ``Path(["a\\b"])`` is one segment even though :meth:`parse` would
    split the same text in two.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[str] = ()) -> None:
        self._segments: list[str] = []
        for segment in segments:
            self.add_segment(segment)

    @classmethod
    def parse(cls, text: str) -> Path:
        """Build a path by splitting *text* on ``/`` and ``\\``.

        Empty segments (doubled or trailing separators) are dropped. A
        leading separator becomes a root segment; a leading double
        separator becomes the UNC root.

        Args:
            text: Path string in POSIX or Windows form.

        Returns:
            Path: The parsed path.
        """
        path = cls()
        if text.startswith(("//", "\\\\")):
            path._segments.append(UNC_ROOT)
        elif text.startswith(("/", "\\")):
            path._segments.append(POSIX_ROOT)
        path._segments.extend(part for part in _SEPARATOR_RE.split(text) if part)
        return path

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._segments)

    @property
    def size(self) -> int:
        return len(self._segments)

    @property
    def has_root(self) -> bool:
        return bool(self._segments) and self._segments[0] in _ROOT_PREFIX

    @property
    def name(self) -> str:
        """The final segment, or ``""`` for an empty path."""
        if not self._segments or self.has_root and len(self._segments) == 1:
            return ""
        return self._segments[-1]

    @property
    def suffix(self) -> str:
        return _split_suffix(self.name)[1]

    @property
    def suffixes(self) -> list[str]:
        """All dot-suffixes of the final segment, in order.

        ``archive.tar.gz`` yields ``[".tar", ".gz"]``.
        """
        name = self.name
        if not name or name.endswith("."):
            return []
        return ["." + part for part in name.lstrip(".").split(".")[1:]]

    @property
    def stem(self) -> str:
        return _split_suffix(self.name)[0]

    def add_segment(self, segment: str) -> None:
        """Append one segment in place.

        Args:
            segment: Non-empty segment text. A root marker is accepted
                only as the first segment.

        Raises:
            ValueError: If the segment is empty or holds a ``/``, or a
                root marker follows other segments.
        """
        if segment in _ROOT_PREFIX:
            if self._segments:
                raise ValueError(f"root segment {segment!r} must come first")
        else:
            _check_name(segment)
        self._segments.append(segment)

    def copy(self) -> Path:
        path = Path()
        path._segments = list(self._segments)
        return path

    def child(self, name: str) -> Path:
        """Return a new path with *name* appended as one segment.

        *name* is a directory entry name and is never read as a root
        marker, so an entry literally called ``\\\\`` is kept as is.
        """
        _check_name(name)
        path = self.copy()
        path._segments.append(name)
        return path

    def join(self, other: Path) -> Path:
        """Return a new path with the segments of *other* appended.

        A rooted *other* replaces this path entirely.
        """
        if other.has_root:
            return other.copy()
        path = self.copy()
        path._segments.extend(other._segments)
        return path

    def parent(self) -> Path:
        """The logical parent of this path.

        A single relative segment yields ``.``, a lone root yields
        itself, and the empty path yields the empty path.
        """
        if not self._segments:
            return Path()
        if len(self._segments) == 1:
            return self.copy() if self.has_root else Path(["."])
        path = Path()
        path._segments = self._segments[:-1]
        return path

    def parents(self) -> Paths:
        """All logical ancestors, nearest first.

        ``a/b/c`` yields ``a/b``, ``a``, ``.``; ``/a/b`` yields ``/a``,
        ``/``. An empty or single-segment relative path yields ``[.]``.
        """
        result = Paths()
        if len(self._segments) <= 1:
            if not self.has_root:
                result.add(Path(["."]))
            return result

        current = self
        while True:
            current = current.parent()
            result.add(current)
            if len(current._segments) == 1 and (
                current.has_root or current._segments[0] == "."
            ):
                return result

    def with_suffix(self, suffix: str) -> Path:
        """Return a new path whose final segment carries *suffix*.

        An existing suffix is replaced, otherwise *suffix* is appended.
        An empty *suffix* removes the current one.

        Raises:
            ValueError: If the path has no name or *suffix* is invalid.
        """
        name = self.name
        if not name:
            raise ValueError(f"{self!r} has an empty name")
        if suffix and (
            not suffix.startswith(".") or suffix == "." or _SEPARATOR_RE.search(suffix)
        ):
            raise ValueError(f"invalid suffix {suffix!r}")
        path = self.copy()
        path._segments[-1] = _split_suffix(name)[0] + suffix
        return path

    def is_absolute(self, flavor: Flavor | None = None) -> bool:
        """Whether the path is absolute under *flavor* rules.

        POSIX: the path has a root segment (``/`` or ``//``). Windows:
        the first segment is a drive spec (``C:``) or the UNC prefix.

        Args:
            flavor: ``"posix"`` or ``"windows"``; defaults to the host.
        """
        rules = flavor or _default_flavor()
        if rules == "posix":
            return self.has_root
        if rules == "windows":
            if not self._segments or len(self._segments[0]) != 2:
                return False
            first = self._segments[0]
            if first[0].isascii() and first[0].isalpha() and first[1] == ":":
                return True
            return first == UNC_ROOT
        raise ValueError(f"unknown path flavor {flavor!r}")

    def is_relative_to(self, other: Path) -> bool:
        """Whether *other* is a leading part of this path."""
        if len(other._segments) > len(self._segments):
            return False
        return self._segments[: len(other._segments)] == other._segments

    def render(self) -> str:
        """Canonical string form: segments joined by ``/``.

        No trailing separator is emitted; the empty path renders as
        ``""``.
        """
        if not self._segments:
            return ""
        first = self._segments[0]
        if first in _ROOT_PREFIX:
            return _ROOT_PREFIX[first] + "/".join(self._segments[1:])
        return "/".join(self._segments)

    def djb2(self) -> int:
        """Bernstein hash over the UTF-8 segments, ``/`` after each."""
        value = 5381
        for segment in self._segments:
            for byte in segment.encode("utf-8"):
                value = (value * 33 + byte) & _DJB2_MASK
            value = (value * 33 + ord("/")) & _DJB2_MASK
        return value

    def __truediv__(self, other: Path | str) -> Path:
        if isinstance(other, str):
            other = Path.parse(other)
        return self.join(other)

    def __fspath__(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Path({self.render()!r})"

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return self.djb2()


class Paths:
    """An ordered, growable collection of ``Path`` values."""

    __slots__ = ("_items",)

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._items: list[Path] = list(paths)

    def add(self, path: Path) -> None:
        self._items.append(path)

    def extend(self, paths: Iterable[Path]) -> None:
        self._items.extend(paths)

    def pop(self, index: int) -> Path:
        """Remove and return the element at *index*.

        Trailing elements shift down by one, keeping their order.

        Raises:
            IndexError: If *index* is out of range.
        """
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def renders(self) -> list[str]:
        return [path.render() for path in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> Path: ...

    @overload
    def __getitem__(self, index: slice) -> Paths: ...

    def __getitem__(self, index: int | slice) -> Path | Paths:
        if isinstance(index, slice):
            return Paths(self._items[index])
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Paths):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Paths({self.renders()!r})"
