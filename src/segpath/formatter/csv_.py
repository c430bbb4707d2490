"""CSV output formatter for segglob.

Columns are described by ``CsvColumn`` values, so callers can add or
reorder columns by passing their own list to ``format_csv``.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Callable

from segpath.formatter.plain import Order, sort_paths
from segpath.path import Path, Paths


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes ``(path, root)`` and returns a string
            value. ``root`` is the walk root, useful for computing relative
            paths or depth.
    """

    name: str
    extract: Callable[[Path, Path], str]


def _extract_parent_dir(path: Path, root: Path) -> str:  # noqa: ARG001
    """Return the immediate parent directory name.

    For files directly under root this is the root's own name.
    """
    return path.parent().name


def _extract_filename(path: Path, root: Path) -> str:  # noqa: ARG001
    return path.name


def _extract_fullpath(path: Path, root: Path) -> str:  # noqa: ARG001
    return path.render()


def _extract_depth(path: Path, root: Path) -> str:
    return str(max(len(path) - len(root) - 1, 0))


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="parent_dir", extract=_extract_parent_dir),
    CsvColumn(name="filename", extract=_extract_filename),
    CsvColumn(name="fullpath", extract=_extract_fullpath),
    CsvColumn(name="depth", extract=_extract_depth),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        root_path: Walk root, used for ``depth``. Defaults to the empty
            path.
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
        order: Row order, or ``none`` to keep walk order.
    """

    root_path: Path | None = None
    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    order: Order = "none"


def format_csv(paths: Paths, options: CsvOptions | None = None) -> str:
    """Render walk results as CSV text.

    Output always starts with a header row; each following row is one
    matched file.

    Args:
        paths: Walk results.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()
    root = opts.root_path or Path()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([col.name for col in opts.columns])
    for path in sort_paths(paths, opts.order):
        writer.writerow([col.extract(path, root) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
