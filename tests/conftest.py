"""Shared fixtures for segpath tests."""

from __future__ import annotations

from pathlib import Path as FsPath

import pytest

from segpath.path import Path


@pytest.fixture
def glob_tree(tmp_path: FsPath) -> FsPath:
    """Create the basic glob test tree.

    Structure::

        root/
        ├── a.txt
        ├── b.md
        └── sub/
            └── c.txt
    """
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.md").write_text("b")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("c")
    return tmp_path


@pytest.fixture
def deep_tree(tmp_path: FsPath) -> FsPath:
    """Create a deeper tree with noise directories.

    Structure::

        root/
        ├── .gitignore          (*.log, build/)
        ├── README.md
        ├── build/
        │   └── out.txt
        ├── docs/
        │   ├── guide.txt
        │   └── notes.log
        ├── node_modules/
        │   └── pkg/
        │       └── index.txt
        └── src/
            ├── main.py
            └── pkg/
                ├── util.py
                └── deep/
                    └── leaf.txt
    """
    (tmp_path / ".gitignore").write_text("*.log\nbuild/\n")
    (tmp_path / "README.md").write_text("readme")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.txt").write_text("out")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.txt").write_text("guide")
    (tmp_path / "docs" / "notes.log").write_text("notes")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.txt").write_text("js")
    (tmp_path / "src" / "pkg" / "deep").mkdir(parents=True)
    (tmp_path / "src" / "main.py").write_text("main")
    (tmp_path / "src" / "pkg" / "util.py").write_text("util")
    (tmp_path / "src" / "pkg" / "deep" / "leaf.txt").write_text("leaf")
    return tmp_path


def as_path(fs_path: FsPath) -> Path:
    """Convert a ``pathlib`` path into a segmented ``Path``."""
    return Path.parse(str(fs_path))


def relative_renders(paths, root: FsPath) -> set[str]:
    """Rendered walk results relative to *root*, as a set."""
    prefix = as_path(root)
    return {"/".join(p.segments[len(prefix) :]) for p in paths}
