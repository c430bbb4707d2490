"""Tests for segpath.walker."""

from __future__ import annotations

import os
from pathlib import Path as FsPath

import pytest

from segpath.fs import ListedEntry
from segpath.path import Path
from segpath.result import ErrorKind
from segpath.walker import WalkOptions, glob, rglob, walk
from tests.conftest import as_path, relative_renders


class FakeLister:
    """In-memory directory tree keyed by rendered directory path."""

    def __init__(
        self, tree: dict[str, list[ListedEntry]], broken: set[str] | None = None
    ) -> None:
        self.tree = tree
        self.broken = broken or set()
        self.listed: list[str] = []

    def is_directory(self, path: Path) -> bool:
        return path.render() in self.tree

    def list_directory(self, path: Path) -> list[ListedEntry]:
        key = path.render()
        self.listed.append(key)
        if key in self.broken:
            raise PermissionError(13, "Permission denied", key)
        return self.tree[key]


def _fake_tree() -> dict[str, list[ListedEntry]]:
    return {
        "root": [
            ListedEntry("a.txt", False),
            ListedEntry("b.md", False),
            ListedEntry("sub", True),
        ],
        "root/sub": [
            ListedEntry("c.txt", False),
            ListedEntry("inner", True),
        ],
        "root/sub/inner": [ListedEntry("d.txt", False)],
    }


class TestGlobBasic:
    def test_glob_matches_top_level_files_only(self, glob_tree: FsPath) -> None:
        result = glob(as_path(glob_tree), "*.txt")
        assert result.ok
        assert relative_renders(result.value, glob_tree) == {"a.txt"}

    def test_rglob_descends(self, glob_tree: FsPath) -> None:
        result = rglob(as_path(glob_tree), "*.txt")
        assert result.ok
        assert relative_renders(result.value, glob_tree) == {"a.txt", "sub/c.txt"}

    def test_results_are_root_joined_paths(self, glob_tree: FsPath) -> None:
        root = as_path(glob_tree)
        result = glob(root, "a.txt")
        assert list(result.value) == [root.child("a.txt")]

    def test_accepts_string_root(self, glob_tree: FsPath) -> None:
        result = glob(str(glob_tree), "*.md")
        assert relative_renders(result.value, glob_tree) == {"b.md"}

    def test_no_matches_is_success(self, glob_tree: FsPath) -> None:
        result = rglob(as_path(glob_tree), "*.rs")
        assert result.ok
        assert len(result.value) == 0

    def test_directories_never_match(self, glob_tree: FsPath) -> None:
        result = rglob(as_path(glob_tree), "sub")
        assert result.ok
        assert len(result.value) == 0

    def test_star_matches_every_file(self, glob_tree: FsPath) -> None:
        result = rglob(as_path(glob_tree), "*")
        assert relative_renders(result.value, glob_tree) == {
            "a.txt",
            "b.md",
            "sub/c.txt",
        }

    def test_hidden_files_are_not_special(self, glob_tree: FsPath) -> None:
        (glob_tree / ".env").write_text("x")
        result = glob(as_path(glob_tree), "*")
        assert ".env" in relative_renders(result.value, glob_tree)

    def test_idempotent(self, deep_tree: FsPath) -> None:
        root = as_path(deep_tree)
        first = rglob(root, "*.txt")
        second = rglob(root, "*.txt")
        assert set(first.value) == set(second.value)

    @pytest.mark.skipif(os.name == "nt", reason="backslash is a separator")
    def test_backslash_file_name(self, glob_tree: FsPath) -> None:
        (glob_tree / "\\\\").write_text("x")
        result = glob(as_path(glob_tree), "*")
        assert result.ok
        assert len(result.value) == 3
        names = {path.name for path in result.value}
        assert names == {"a.txt", "b.md", "\\\\"}

    def test_deep_tree(self, deep_tree: FsPath) -> None:
        result = rglob(as_path(deep_tree), "*.py")
        assert relative_renders(result.value, deep_tree) == {
            "src/main.py",
            "src/pkg/util.py",
        }


class TestWalkErrors:
    def test_missing_root(self, tmp_path: FsPath) -> None:
        result = glob(as_path(tmp_path / "no_such_dir"), "*")
        assert result.error is ErrorKind.NOT_EXISTS
        assert len(result.value) == 0

    def test_missing_root_rglob(self, tmp_path: FsPath) -> None:
        result = rglob(as_path(tmp_path / "no_such_dir"), "*")
        assert result.error is ErrorKind.NOT_EXISTS
        assert not result.ok

    def test_file_root_is_not_exists(self, glob_tree: FsPath) -> None:
        result = glob(as_path(glob_tree / "a.txt"), "*")
        assert result.error is ErrorKind.NOT_EXISTS

    def test_root_listing_failure(self) -> None:
        lister = FakeLister(_fake_tree(), broken={"root"})
        result = walk(Path.parse("root"), "*", lister=lister)
        assert result.error is ErrorKind.OS_ERROR
        assert len(result.value) == 0

    def test_nested_failure_aborts_and_discards(self) -> None:
        lister = FakeLister(_fake_tree(), broken={"root/sub/inner"})
        result = rglob(Path.parse("root"), "*.txt", lister=lister)
        assert result.error is ErrorKind.OS_ERROR
        assert len(result.value) == 0

    def test_nested_failure_ignored_without_recursion(self) -> None:
        lister = FakeLister(_fake_tree(), broken={"root/sub"})
        result = glob(Path.parse("root"), "*.txt", lister=lister)
        assert result.ok
        assert result.value.renders() == ["root/a.txt"]

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="chmod does not restrict this user",
    )
    def test_unreadable_subdirectory_on_disk(self, glob_tree: FsPath) -> None:
        locked = glob_tree / "sub"
        locked.chmod(0o000)
        try:
            result = rglob(as_path(glob_tree), "*.txt")
        finally:
            locked.chmod(0o755)
        assert result.error is ErrorKind.OS_ERROR
        assert len(result.value) == 0


class TestWalkWithLister:
    def test_rglob_over_fake_tree(self) -> None:
        result = rglob(Path.parse("root"), "*.txt", lister=FakeLister(_fake_tree()))
        assert set(result.value.renders()) == {
            "root/a.txt",
            "root/sub/c.txt",
            "root/sub/inner/d.txt",
        }

    def test_dot_entries_skipped(self) -> None:
        tree = {
            "root": [
                ListedEntry(".", True),
                ListedEntry("..", True),
                ListedEntry("x.txt", False),
            ]
        }
        lister = FakeLister(tree)
        result = rglob(Path.parse("root"), "*", lister=lister)
        assert result.value.renders() == ["root/x.txt"]
        assert lister.listed == ["root"]

    def test_glob_lists_only_root(self) -> None:
        lister = FakeLister(_fake_tree())
        glob(Path.parse("root"), "*", lister=lister)
        assert lister.listed == ["root"]

    def test_very_deep_tree_does_not_recurse_natively(self) -> None:
        depth = 3000
        tree: dict[str, list[ListedEntry]] = {}
        key = "root"
        for _ in range(depth):
            tree[key] = [ListedEntry("d", True)]
            key += "/d"
        tree[key] = [ListedEntry("leaf.txt", False)]
        result = rglob(Path.parse("root"), "leaf.txt", lister=FakeLister(tree))
        assert result.ok
        assert len(result.value) == 1
        assert len(result.value[0]) == depth + 2


class TestWalkOptions:
    @pytest.mark.parametrize(
        ("max_depth", "expected"),
        [
            (0, {"root/a.txt"}),
            (1, {"root/a.txt", "root/sub/c.txt"}),
            (None, {"root/a.txt", "root/sub/c.txt", "root/sub/inner/d.txt"}),
        ],
    )
    def test_max_depth(self, max_depth: int | None, expected: set[str]) -> None:
        result = rglob(
            Path.parse("root"),
            "*.txt",
            options=WalkOptions(max_depth=max_depth),
            lister=FakeLister(_fake_tree()),
        )
        assert set(result.value.renders()) == expected

    def test_entry_filter_prunes_directories(self) -> None:
        class ExcludeSub:
            def should_exclude(self, name: str, is_dir: bool) -> bool:
                return is_dir and name == "sub"

        lister = FakeLister(_fake_tree())
        result = rglob(Path.parse("root"), "*.txt", entry_filter=ExcludeSub(), lister=lister)
        assert result.value.renders() == ["root/a.txt"]
        assert lister.listed == ["root"]

    def test_gitignore(self, deep_tree: FsPath) -> None:
        result = rglob(as_path(deep_tree), "*", options=WalkOptions(gitignore=True))
        found = relative_renders(result.value, deep_tree)
        assert "docs/notes.log" not in found
        assert "build/out.txt" not in found
        assert "docs/guide.txt" in found
        assert "src/pkg/deep/leaf.txt" in found

    def test_undecodable_gitignore_is_ignored(self, deep_tree: FsPath) -> None:
        (deep_tree / ".gitignore").write_bytes(b"\xff\xfe*.md\n")
        result = rglob(as_path(deep_tree), "*.md", options=WalkOptions(gitignore=True))
        assert result.ok
        assert relative_renders(result.value, deep_tree) == {"README.md"}

    def test_gitignore_off_by_default(self, deep_tree: FsPath) -> None:
        result = rglob(as_path(deep_tree), "*.log")
        assert relative_renders(result.value, deep_tree) == {"docs/notes.log"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_symlinked_directory_is_never_matched(self, glob_tree: FsPath) -> None:
        try:
            (glob_tree / "link").symlink_to(glob_tree / "sub", target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not permitted")
        result = glob(as_path(glob_tree), "*")
        assert result.ok
        assert relative_renders(result.value, glob_tree) == {"a.txt", "b.md"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_symlinked_directory_not_followed_by_default(self, glob_tree: FsPath) -> None:
        try:
            (glob_tree / "link").symlink_to(glob_tree / "sub", target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not permitted")
        result = rglob(as_path(glob_tree), "*")
        assert relative_renders(result.value, glob_tree) == {"a.txt", "b.md", "sub/c.txt"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_symlinked_file_matches(self, glob_tree: FsPath) -> None:
        try:
            (glob_tree / "alias.txt").symlink_to(glob_tree / "a.txt")
        except OSError:
            pytest.skip("symlinks not permitted")
        result = glob(as_path(glob_tree), "*.txt")
        assert relative_renders(result.value, glob_tree) == {"a.txt", "alias.txt"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_dangling_symlink_is_skipped(self, glob_tree: FsPath) -> None:
        try:
            (glob_tree / "dangling.txt").symlink_to(glob_tree / "missing")
        except OSError:
            pytest.skip("symlinks not permitted")
        result = rglob(as_path(glob_tree), "*.txt")
        assert result.ok
        assert relative_renders(result.value, glob_tree) == {"a.txt", "sub/c.txt"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_follow_symlinks_guards_cycles(self, glob_tree: FsPath) -> None:
        try:
            (glob_tree / "sub" / "loop").symlink_to(glob_tree, target_is_directory=True)
            (glob_tree / "alias").symlink_to(glob_tree / "sub", target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not permitted")
        result = rglob(
            as_path(glob_tree), "c.txt", options=WalkOptions(follow_symlinks=True)
        )
        assert result.ok
        # sub is reached once, through whichever of sub/ and alias/ comes first
        assert len(result.value) == 1
