"""Glob discovery over a directory tree using an explicit stack (DFS)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Protocol

from segpath import fs
from segpath.gitignore import load_gitignore_spec
from segpath.path import Path, Paths
from segpath.pattern import compile_pattern
from segpath.result import ErrorKind, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WalkOptions:
    """Options controlling walker behavior.

    Attributes:
        max_depth: Deepest directory level to descend into during a
            recursive walk. ``0`` lists the root only, ``None`` means
            unlimited.
        follow_symlinks: Whether symlinks to directories are descended
            into. They are never matched either way.
        gitignore: Whether entries ignored by ``<root>/.gitignore`` are
            skipped.
    """

    max_depth: int | None = None
    follow_symlinks: bool = False
    gitignore: bool = False


class DirectoryLister(Protocol):
    """Protocol for the filesystem side of a walk.

    Keeps traversal logic decoupled from the OS, so a walk can run over
    any tree-shaped source.
    """

    def is_directory(self, path: Path) -> bool: ...

    def list_directory(self, path: Path) -> list[fs.ListedEntry]: ...


class EntryFilter(Protocol):
    """Protocol for entry filtering.

    Keeps walker logic decoupled from matching strategy.
    """

    def should_exclude(self, name: str, is_dir: bool) -> bool: ...


class _NullFilter:
    """Default pass-through filter that excludes nothing."""

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return False


class OsLister:
    """Default lister backed by :mod:`segpath.fs`."""

    def is_directory(self, path: Path) -> bool:
        return fs.is_dir(path)

    def list_directory(self, path: Path) -> list[fs.ListedEntry]:
        return fs.list_directory(path)


def walk(
    root: Path | str,
    pattern: str,
    recursive: bool = False,
    options: WalkOptions | None = None,
    entry_filter: EntryFilter | None = None,
    lister: DirectoryLister | None = None,
) -> Result[Paths]:
    """Collect the files below *root* whose name matches *pattern*.

    Only non-directory entries are tested against the pattern.
    Directories are descended into when *recursive* is set and never
    appear in the result. Result order follows directory enumeration
    and is not sorted.

    Args:
        root: Directory to search.
        pattern: Wildcard pattern applied to each file's base name.
        recursive: Whether to descend into subdirectories.
        options: Walker options. Defaults to ``WalkOptions()``.
        entry_filter: Optional exclude filter implementation.
        lister: Filesystem collaborator. Defaults to ``OsLister``.

    Returns:
        Result[Paths]: Matching paths (``root`` joined with each entry
        name). On ``NOT_EXISTS`` (root is not a directory) or
        ``OS_ERROR`` (a directory could not be listed) the paths are
        empty; partial results are discarded.
    """
    walk_options = options or WalkOptions()
    active_filter = entry_filter or _NullFilter()
    active_lister = lister or OsLister()
    matcher = compile_pattern(pattern)

    if isinstance(root, str):
        root = Path.parse(root)

    if not active_lister.is_directory(root):
        logger.debug("Not a directory: %s", root)
        return Result(Paths(), ErrorKind.NOT_EXISTS)

    ignore_spec = load_gitignore_spec(root) if walk_options.gitignore else None

    # Real paths of visited directories, guarding symlink cycles.
    seen: set[str] = set()
    if walk_options.follow_symlinks:
        seen.add(os.path.realpath(root))

    results = Paths()

    # Stack items: (directory, its path relative to root with a trailing
    # "/", depth)
    stack: list[tuple[Path, str, int]] = [(root, "", 0)]

    while stack:
        current_dir, rel_dir, depth = stack.pop()

        try:
            entries = active_lister.list_directory(current_dir)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", current_dir, exc)
            return Result(Paths(), ErrorKind.OS_ERROR)

        for entry in entries:
            name = entry.name
            if name in (".", ".."):
                continue

            if active_filter.should_exclude(name, entry.is_dir):
                continue

            rel_path = rel_dir + name
            if ignore_spec is not None and ignore_spec.match_file(
                rel_path + "/" if entry.is_dir else rel_path
            ):
                continue

            if entry.is_dir:
                if not recursive:
                    continue
                if entry.is_symlink and not walk_options.follow_symlinks:
                    continue
                if walk_options.max_depth is not None and depth >= walk_options.max_depth:
                    continue
                child = current_dir.child(name)
                if walk_options.follow_symlinks:
                    real = os.path.realpath(child)
                    if real in seen:
                        logger.debug("Skipping already visited directory: %s", child)
                        continue
                    seen.add(real)
                stack.append((child, rel_path + "/", depth + 1))
                continue

            if matcher.matches(name):
                results.add(current_dir.child(name))

    return Result(results)


def glob(
    root: Path | str,
    pattern: str,
    options: WalkOptions | None = None,
    entry_filter: EntryFilter | None = None,
    lister: DirectoryLister | None = None,
) -> Result[Paths]:
    """Return files directly inside *root* matching *pattern*."""
    return walk(root, pattern, False, options, entry_filter, lister)


def rglob(
    root: Path | str,
    pattern: str,
    options: WalkOptions | None = None,
    entry_filter: EntryFilter | None = None,
    lister: DirectoryLister | None = None,
) -> Result[Paths]:
    """Return files anywhere below *root* matching *pattern*."""
    return walk(root, pattern, True, options, entry_filter, lister)
