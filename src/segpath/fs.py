"""OS collaborators: metadata predicates, directory listing, file I/O.

Every function takes a ``segpath.path.Path`` and renders it with
:func:`render` before handing it to the OS. Predicates return plain
booleans; operations that can fail in more than one way return a
``Result`` whose ``error`` tells the caller which.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from typing import Callable

from segpath.path import Path, Paths
from segpath.result import ErrorKind, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListedEntry:
    """A single entry returned by :func:`list_directory`.

    Attributes:
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
        is_symlink: Whether the entry itself is a symbolic link.
    """

    name: str
    is_dir: bool
    is_symlink: bool = False


def render(path: Path) -> str:
    """Return the string form of *path* used for OS calls."""
    return path.render()


def _mode_is(
    path: Path, test: Callable[[int], bool], follow_symlinks: bool = True
) -> bool:
    try:
        st = os.stat(render(path), follow_symlinks=follow_symlinks)
    except (OSError, ValueError):
        return False
    return test(st.st_mode)


def exists(path: Path) -> bool:
    return os.path.exists(render(path))


def is_dir(path: Path) -> bool:
    return _mode_is(path, stat.S_ISDIR)


def is_file(path: Path) -> bool:
    return _mode_is(path, stat.S_ISREG)


def is_symlink(path: Path) -> bool:
    return _mode_is(path, stat.S_ISLNK, follow_symlinks=False)


def is_mount(path: Path) -> bool:
    return os.path.ismount(render(path))


def is_block_device(path: Path) -> bool:
    return _mode_is(path, stat.S_ISBLK)


def is_char_device(path: Path) -> bool:
    return _mode_is(path, stat.S_ISCHR)


def is_socket(path: Path) -> bool:
    return _mode_is(path, stat.S_ISSOCK)


def is_fifo(path: Path) -> bool:
    return _mode_is(path, stat.S_ISFIFO)


def list_directory(path: Path) -> list[ListedEntry]:
    """List the entries of directory *path*.

    ``.`` and ``..`` are never returned. Entry types are taken from the
    link target, so a symlink to a directory is reported as a directory
    with ``is_symlink`` set. Entries whose target cannot be stat-ed,
    such as dangling symlinks, are skipped.

    Args:
        path: Directory to list.

    Returns:
        list[ListedEntry]: Entries in OS enumeration order.

    Raises:
        OSError: If the directory cannot be opened or read.
    """
    entries: list[ListedEntry] = []
    with os.scandir(render(path)) as dir_iter:
        for dir_entry in dir_iter:
            try:
                entry_is_dir = stat.S_ISDIR(dir_entry.stat().st_mode)
                entry_is_symlink = dir_entry.is_symlink()
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue
            entries.append(ListedEntry(dir_entry.name, entry_is_dir, entry_is_symlink))
    return entries


def listdir(path: Path) -> Result[Paths]:
    """Return the full paths of every entry inside directory *path*."""
    if not is_dir(path):
        return Result(Paths(), ErrorKind.NOT_EXISTS)
    try:
        entries = list_directory(path)
    except OSError as exc:
        logger.warning("Cannot list %s: %s", render(path), exc)
        return Result(Paths(), ErrorKind.OS_ERROR)
    return Result(Paths(path.child(entry.name) for entry in entries))


def cwd() -> Result[Path]:
    try:
        return Result(Path.parse(os.getcwd()))
    except OSError as exc:
        logger.warning("getcwd failed: %s", exc)
        return Result(Path(["."]), ErrorKind.OS_ERROR)


def home() -> Result[Path]:
    home_dir = os.path.expanduser("~")
    if not home_dir or home_dir == "~":
        logger.warning("Failed to determine the home directory")
        return Result(Path(["."]), ErrorKind.OS_ERROR)
    return Result(Path.parse(home_dir))


def temp() -> Result[Path]:
    try:
        return Result(Path.parse(tempfile.gettempdir()))
    except OSError as exc:
        logger.warning("No usable temporary directory: %s", exc)
        return Result(Path([".", "tmp"]), ErrorKind.OS_ERROR)


def mkdir(path: Path) -> Result[bool]:
    """Create directory *path* together with any missing parents.

    An already existing directory counts as success.

    Returns:
        Result[bool]: ``EXISTS`` when a non-directory is in the way,
        ``OS_ERROR`` when the OS refuses.
    """
    if not path or is_dir(path):
        return Result(True)
    if exists(path):
        return Result(False, ErrorKind.EXISTS)
    try:
        os.makedirs(render(path), mode=0o755, exist_ok=True)
    except FileExistsError:
        logger.debug("mkdir blocked by an existing file: %s", render(path))
        return Result(False, ErrorKind.EXISTS)
    except OSError as exc:
        logger.warning("mkdir failed for %s: %s", render(path), exc)
        return Result(False, ErrorKind.OS_ERROR)
    return Result(True)


def touch(path: Path) -> Result[bool]:
    """Create an empty file at *path*, creating parent directories.

    Returns:
        Result[bool]: value ``True`` with ``EXISTS`` when the file was
        already there; value ``False`` on failure.
    """
    if not path:
        return Result(True)
    if len(path) > 1:
        made = mkdir(path.parent())
        if not made.value:
            return Result(False, made.error)
    if is_file(path):
        return Result(True, ErrorKind.EXISTS)
    try:
        with open(render(path), "xb"):
            pass
    except FileExistsError:
        return Result(False, ErrorKind.EXISTS)
    except OSError as exc:
        logger.warning("Cannot create %s: %s", render(path), exc)
        return Result(False, ErrorKind.OS_ERROR)
    return Result(True)


def unlink(path: Path) -> Result[bool]:
    """Delete the file or symlink at *path*."""
    if not os.path.lexists(render(path)):
        return Result(False, ErrorKind.NOT_EXISTS)
    try:
        os.remove(render(path))
    except OSError as exc:
        logger.warning("Cannot remove %s: %s", render(path), exc)
        return Result(False, ErrorKind.OS_ERROR)
    return Result(True)


def rmdir(path: Path, remove_contents: bool = False) -> Result[bool]:
    """Delete directory *path*.

    Args:
        path: Directory to delete.
        remove_contents: Delete everything below *path* first. Without
            it a non-empty directory is an ``OS_ERROR``.
    """
    if not exists(path):
        return Result(False, ErrorKind.NOT_EXISTS)
    try:
        if remove_contents:
            shutil.rmtree(render(path))
        else:
            os.rmdir(render(path))
    except OSError as exc:
        logger.warning("Cannot remove directory %s: %s", render(path), exc)
        return Result(False, ErrorKind.OS_ERROR)
    return Result(True)


def read_text(path: Path, encoding: str = "utf-8") -> Result[str | None]:
    if not exists(path):
        return Result(None, ErrorKind.NOT_EXISTS)
    try:
        with open(render(path), encoding=encoding) as fh:
            return Result(fh.read())
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", render(path), exc)
        return Result(None, ErrorKind.OS_ERROR)


def read_bytes(path: Path) -> Result[bytes | None]:
    if not exists(path):
        return Result(None, ErrorKind.NOT_EXISTS)
    try:
        with open(render(path), "rb") as fh:
            return Result(fh.read())
    except OSError as exc:
        logger.debug("Cannot read %s: %s", render(path), exc)
        return Result(None, ErrorKind.OS_ERROR)


def _write(path: Path, data: str | bytes, mode: str, encoding: str | None) -> Result[bool]:
    if not exists(path):
        touched = touch(path)
        if not touched.value:
            return Result(False, touched.error)
    try:
        with open(render(path), mode, encoding=encoding) as fh:
            fh.write(data)
    except OSError as exc:
        logger.warning("Cannot write %s: %s", render(path), exc)
        return Result(False, ErrorKind.OS_ERROR)
    return Result(True)


def write_text(path: Path, text: str, encoding: str = "utf-8") -> Result[bool]:
    """Write *text* to *path*, creating the file and its parents."""
    return _write(path, text, "w", encoding)


def write_bytes(path: Path, data: bytes) -> Result[bool]:
    """Write *data* to *path*, creating the file and its parents."""
    return _write(path, data, "wb", None)
