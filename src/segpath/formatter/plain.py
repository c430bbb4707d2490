"""Plain line-per-path output formatter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from segpath.path import Path, Paths

Order = Literal["none", "asc", "desc"]


def sort_paths(paths: Paths, order: Order) -> list[Path]:
    """Return *paths* in the requested order.

    ``none`` keeps walk order; ``asc``/``desc`` sort by rendered form.
    """
    if order == "none":
        return list(paths)
    return sorted(paths, key=lambda p: p.render(), reverse=order == "desc")


@dataclass(frozen=True, slots=True)
class PlainOptions:
    """Options for plain output.

    Attributes:
        root_path: When set, paths are printed relative to this root.
        order: Sort direction, or ``none`` to keep walk order.
    """

    root_path: Path | None = None
    order: Order = "none"


def _display(path: Path, root: Path | None) -> str:
    if root is None or not path.is_relative_to(root):
        return path.render()
    return Path(path.segments[len(root) :]).render()


def format_plain(paths: Paths, options: PlainOptions | None = None) -> str:
    """Render paths one per line.

    Args:
        paths: Walk results.
        options: Rendering options.

    Returns:
        str: Newline-joined paths, ``""`` when there are none.
    """
    opts = options or PlainOptions()
    return "\n".join(_display(p, opts.root_path) for p in sort_paths(paths, opts.order))
