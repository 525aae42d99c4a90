"""
Filesystem enumeration for extstats.

`enumerate_tree()` yields one WalkEntry per entry below a root in depth-first
pre-order (a directory comes right before its contents). Entries are described
with lstat, so symlinks are reported as symlinks and never followed. Problems
with individual entries go to `on_error` and the walk continues.
"""

from __future__ import annotations

import ctypes
import logging
import os
import stat
from typing import Callable, Iterator, List, Optional, Tuple

from .models import FileKind, WalkEntry

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, OSError], None]

_INVALID_FILE_SIZE = 0xFFFFFFFF


def kind_of(mode: int) -> FileKind:
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat.S_ISREG(mode):
        return FileKind.REGULAR
    if stat.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat.S_ISBLK(mode):
        return FileKind.BLOCK_DEVICE
    if stat.S_ISCHR(mode):
        return FileKind.CHAR_DEVICE
    if stat.S_ISFIFO(mode):
        return FileKind.FIFO
    if stat.S_ISSOCK(mode):
        return FileKind.SOCKET
    return FileKind.UNKNOWN


def _windows_compressed_size(path: str) -> int:
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]
    fn = kernel32.GetCompressedFileSizeW
    fn.argtypes = [wintypes.LPCWSTR, ctypes.POINTER(wintypes.DWORD)]
    fn.restype = wintypes.DWORD

    high = wintypes.DWORD(0)
    low = fn(path, ctypes.byref(high))
    if low == _INVALID_FILE_SIZE and ctypes.get_last_error() != 0:  # type: ignore[attr-defined]
        return 0
    return (high.value << 32) | low


def size_on_disk(path: str, st: Optional[os.stat_result] = None) -> int:
    """
    Bytes actually allocated for `path`.

    Windows asks for the compressed size; elsewhere st_blocks * 512 is used,
    which matches `du`. The answer is advisory, so any failure gives 0.
    """
    try:
        if os.name == "nt":
            return _windows_compressed_size(path)
        if st is None:
            st = os.lstat(path)
        return int(getattr(st, "st_blocks", 0)) * 512
    except (OSError, AttributeError, ValueError) as e:
        logger.debug("size on disk unavailable for %s: %s", path, e)
        return 0


def describe(entry: os.DirEntry, depth: int) -> WalkEntry:
    """Stat one directory entry. Raises OSError when the entry cannot be read."""
    is_junction = getattr(entry, "is_junction", None)
    if is_junction is not None and is_junction():
        return WalkEntry(entry.path, entry.name, FileKind.JUNCTION, 0, 0, depth)

    st = entry.stat(follow_symlinks=False)
    kind = kind_of(st.st_mode)
    if kind is FileKind.DIRECTORY:
        return WalkEntry(entry.path, entry.name, kind, 0, 0, depth)
    return WalkEntry(entry.path, entry.name, kind, int(st.st_size), size_on_disk(entry.path, st), depth)


def _report(on_error: Optional[ErrorHandler], path: str, exc: OSError) -> None:
    logger.debug("skipping %s: %s", path, exc)
    if on_error is not None:
        on_error(path, exc)


def enumerate_tree(root: "os.PathLike[str] | str", on_error: Optional[ErrorHandler] = None) -> Iterator[WalkEntry]:
    """
    Lazily walk everything under `root` (the root itself is not yielded).

    Children of the root have depth 0. The sequence is forward-only: each
    directory is opened only when the walk reaches it.
    """
    root_s = os.fspath(root)
    try:
        top = os.scandir(root_s)
    except OSError as e:
        _report(on_error, root_s, e)
        return

    stack: List[Tuple[Iterator[os.DirEntry], str, int]] = [(top, root_s, 0)]
    try:
        while stack:
            it, dir_path, depth = stack[-1]
            try:
                entry = next(it)
            except StopIteration:
                it.close()
                stack.pop()
                continue
            except OSError as e:
                _report(on_error, dir_path, e)
                it.close()
                stack.pop()
                continue

            try:
                walk_entry = describe(entry, depth)
            except OSError as e:
                _report(on_error, entry.path, e)
                continue

            yield walk_entry

            if walk_entry.is_dir:
                try:
                    stack.append((os.scandir(entry.path), entry.path, depth + 1))
                except OSError as e:
                    _report(on_error, entry.path, e)
    finally:
        for it, _, _ in stack:
            it.close()
