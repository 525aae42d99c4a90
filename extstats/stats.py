"""
Running statistics keyed by file kind and by extension.

`AccumulatorStore.add()` updates three buckets together: the kind bucket, the
extension bucket and the grand total. Once `snapshot()` has been taken the store
is sealed and further adds are rejected, so a report is always built from a
complete, unchanging set of numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .errors import check
from .models import FileKind

logger = logging.getLogger(__name__)


@dataclass
class Stats:
    count: int = 0
    size: int = 0
    on_disk: int = 0

    def add(self, logical_size: int, on_disk_size: int) -> None:
        self.count += 1
        self.size += logical_size
        self.on_disk += on_disk_size

    def average(self) -> int:
        """Mean logical size rounded half up. Only valid when count > 0."""
        check(self.count > 0, "average of an empty Stats")
        # Integer arithmetic keeps huge totals exact.
        return (2 * self.size + self.count) // (2 * self.count)

    def copy(self) -> "Stats":
        return Stats(self.count, self.size, self.on_disk)


class Metric(Enum):
    """The numeric columns a report can show for one Stats bucket."""
    SIZE = ("bytes", "size")
    AVERAGE = ("avg bytes", "avg size")
    ON_DISK = ("bytes on disk", "size on disk")

    def __init__(self, exact_header: str, short_header: str):
        self.exact_header = exact_header
        self.short_header = short_header

    def value_of(self, stats: Stats) -> int:
        if self is Metric.SIZE:
            return stats.size
        if self is Metric.AVERAGE:
            return stats.average()
        return stats.on_disk


METRICS: Tuple[Metric, ...] = (Metric.SIZE, Metric.AVERAGE, Metric.ON_DISK)


def _by_size_desc(items: Mapping) -> List[Tuple]:
    # sorted() is stable: equal totals keep first-seen order.
    return sorted(items.items(), key=lambda kv: kv[1].size, reverse=True)


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view handed to the reporter."""
    by_kind: Mapping[FileKind, Stats]
    by_ext: Mapping[str, Stats]
    total: Stats

    def extensions_by_size(self) -> List[Tuple[str, Stats]]:
        return _by_size_desc(self.by_ext)

    def kinds_by_size(self) -> List[Tuple[FileKind, Stats]]:
        return _by_size_desc(self.by_kind)


class AccumulatorStore:
    def __init__(self) -> None:
        self._by_kind: Dict[FileKind, Stats] = {}
        self._by_ext: Dict[str, Stats] = {}
        self._total = Stats()
        self._sealed = False

    @property
    def total(self) -> Stats:
        """Live grand total, for progress display while the scan runs."""
        return self._total

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, kind: FileKind, extension: str, logical_size: int, on_disk_size: int) -> None:
        # Validate everything first so a rejected add leaves all three buckets untouched.
        check(not self._sealed, "add() after snapshot()")
        check(logical_size >= 0 and on_disk_size >= 0,
              f"negative size: logical={logical_size} on_disk={on_disk_size}")

        kind_row = self._by_kind.get(kind)
        if kind_row is None:
            kind_row = self._by_kind[kind] = Stats()
        ext_row = self._by_ext.get(extension)
        if ext_row is None:
            ext_row = self._by_ext[extension] = Stats()

        self._total.add(logical_size, on_disk_size)
        ext_row.add(logical_size, on_disk_size)
        kind_row.add(logical_size, on_disk_size)

    def snapshot(self) -> StoreSnapshot:
        self._sealed = True
        logger.debug("store sealed: %d files, %d extensions, %d kinds",
                     self._total.count, len(self._by_ext), len(self._by_kind))
        return StoreSnapshot(
            by_kind=MappingProxyType({k: v.copy() for k, v in self._by_kind.items()}),
            by_ext=MappingProxyType({k: v.copy() for k, v in self._by_ext.items()}),
            total=self._total.copy(),
        )
