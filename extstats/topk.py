"""
Keep the largest files seen during a scan.

With a capacity the selector holds a min-heap of at most `capacity` records, so
memory stays bounded however many files are offered. Without one it buffers
everything and sorts once in `finalize()`. Both give the same membership.

Ties on size are broken by offer order: among equal sizes the earlier record
ranks first and is the last to be evicted.
"""

from __future__ import annotations

import heapq
import itertools
from typing import List, Optional, Tuple

from .errors import check
from .models import FileRecord

DEFAULT_TOP_COUNT = 500


class TopKSelector:
    def __init__(self, capacity: Optional[int] = DEFAULT_TOP_COUNT) -> None:
        if capacity is not None:
            check(capacity >= 0, f"negative top-k capacity: {capacity}")
        self.capacity = capacity
        self.offered = 0
        self._seq = itertools.count()
        # (size, -seq, record): the heap root is the smallest, latest-offered record.
        self._heap: List[Tuple[int, int, FileRecord]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, record: FileRecord) -> None:
        self.offered += 1
        item = (record.logical_size, -next(self._seq), record)
        if self.capacity is None:
            self._heap.append(item)
        elif len(self._heap) < self.capacity:
            heapq.heappush(self._heap, item)
        elif self._heap and item[:2] > self._heap[0][:2]:
            heapq.heapreplace(self._heap, item)

    def finalize(self, k: Optional[int] = None) -> List[FileRecord]:
        """Return the top `k` records (default: capacity), largest first."""
        if k is None:
            k = self.capacity if self.capacity is not None else len(self._heap)
        check(k >= 0, f"negative k: {k}")
        if self.capacity is not None:
            check(k <= self.capacity, f"k={k} exceeds retained capacity {self.capacity}")
        ranked = sorted(self._heap, key=lambda item: (item[0], item[1]), reverse=True)
        return [record for _, _, record in ranked[:k]]
