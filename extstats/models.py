from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class FileKind(str, Enum):
    NONE = "none"
    NOT_FOUND = "not-found"
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    FIFO = "fifo"
    SOCKET = "socket"
    JUNCTION = "junction"
    UNKNOWN = "unknown"


def extension_of(path: str) -> str:
    """Extension used as an aggregation key. Case is preserved; dot-files and
    extension-less names give ""."""
    return os.path.splitext(os.path.basename(path))[1]


@dataclass(frozen=True)
class FileRecord:
    """A non-directory entry that was stat'ed successfully."""
    path: str
    kind: FileKind
    logical_size: int
    on_disk_size: int = 0

    @property
    def extension(self) -> str:
        return extension_of(self.path)


@dataclass(frozen=True)
class WalkEntry:
    """One enumerated filesystem entry, directories included."""
    path: str
    name: str
    kind: FileKind
    logical_size: int
    on_disk_size: int
    depth: int

    @property
    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def extension(self) -> str:
        return extension_of(self.path)

    def to_record(self) -> FileRecord:
        return FileRecord(self.path, self.kind, self.logical_size, self.on_disk_size)
