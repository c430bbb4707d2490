"""Gitignore integration — load .gitignore patterns via pathspec."""

from __future__ import annotations

import logging

from pathspec import GitIgnoreSpec

from segpath import fs
from segpath.path import Path

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root.child(".gitignore")
    read = fs.read_text(gitignore_path)
    if read.value is None:
        logger.debug("Cannot read .gitignore: %s (%s)", gitignore_path, read.error.name)
        return None
    return GitIgnoreSpec.from_lines(read.value.splitlines())
