"""
Reporter: turns scan results into aligned, colored console text.

Everything is written through an OutputSurface; the reporter never opens a
console itself. Layout follows fixed-width columns:

  walk trace   short size (12) | exact size (25) | tab | indent | name
  tables       key (26) | count (8) | per metric: exact (18) + short (16)
  top listing  exact (16) | short (16) | path

Exact byte columns are gray; short size columns take their color from the
size palette applied to the value shown.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from .colors import Color, classify, kind_info
from .models import FileRecord, WalkEntry
from .sizes import bytes_str, size_str, size_strs
from .stats import METRICS, Stats, StoreSnapshot
from .surface import OutputSurface

logger = logging.getLogger(__name__)

KEY_WIDTH = 26
COUNT_WIDTH = 8
EXACT_WIDTH = 18
SHORT_WIDTH = 16
TRACE_SHORT_WIDTH = 12
TRACE_EXACT_WIDTH = 25
TOP_WIDTH = 16

DIR_PLACEHOLDER = "<DIR>"


def _prefix(key: str, count: str) -> str:
    return f"  {key:<{KEY_WIDTH}} {count:>{COUNT_WIDTH}}"


def table_header(key_header: str = "ext") -> str:
    header = _prefix(key_header, "count")
    for metric in METRICS:
        header += f" {metric.exact_header:>{EXACT_WIDTH}}"
        header += f" {metric.short_header:>{SHORT_WIDTH}}"
    return header


RULE = "-" * len(table_header())


def indent_for(depth: int, tab_size: int = 3) -> str:
    """Indentation for a trace line, with a '|' one tab before the name."""
    chars = [" "] * (tab_size * depth)
    if len(chars) >= tab_size:
        chars[len(chars) - tab_size] = "|"
    return "".join(chars)


class Reporter:
    def __init__(self, surface: OutputSurface, *, tab_size: int = 3, use_delims: bool = False) -> None:
        self.surface = surface
        self.tab_size = tab_size
        self.use_delims = use_delims

    # ---------------------------- live output ---------------------------------

    def echo_arguments(self, argv: Sequence[str]) -> None:
        for i, arg in enumerate(argv, 1):
            self.surface.paint(Color.WHITE, f"  [{i}]: {arg}", end="\n")

    def error(self, message: str) -> None:
        self.surface.paint(Color.RED, f"ERROR: {message}", end="\n")

    def trace_line(self, entry: WalkEntry) -> None:
        info = kind_info(entry.kind)
        if entry.is_dir:
            short, exact = "", DIR_PLACEHOLDER
            size_color = Color.GRAY
        else:
            exact, short = size_strs(entry.logical_size)
            size_color = classify(entry.logical_size)

        name = f"{info.prefix}{entry.name}{info.suffix}" if self.use_delims else entry.name

        self.surface.paint(
            size_color,
            f"{short:>{TRACE_SHORT_WIDTH}} {exact:>{TRACE_EXACT_WIDTH}}" + " " * self.tab_size,
        )
        self.surface.paint(Color.GRAY, indent_for(entry.depth, self.tab_size))
        self.surface.paint(info.color, name, end="\n")

    def summary_lines(self, current_path: str, total: Stats) -> List[Tuple[Color, str]]:
        return [
            (Color.WHITE, f"file: {current_path}"),
            (Color.WHITE, f"count: {total.count}"),
            (Color.WHITE, f"logical size: {size_str(total.size)} ({bytes_str(total.size)})"),
            (Color.CYAN, f"size on disk: {size_str(total.on_disk)} ({bytes_str(total.on_disk)})"),
        ]

    def draw_summary(self, base_row: int, current_path: str, total: Stats) -> None:
        """Redraw the four progress lines starting at `base_row`."""
        for offset, (color, text) in enumerate(self.summary_lines(current_path, total)):
            self.surface.paint_at((0, base_row + offset), color, text)

    # ---------------------------- final reports -------------------------------

    def _stats_rows(self, key_header: str, rows: Iterable[Tuple[str, Color, Stats]]) -> None:
        paint = self.surface.paint
        paint(Color.WHITE, "", end="\n")
        paint(Color.WHITE, table_header(key_header), end="\n")
        paint(Color.GRAY, RULE, end="\n")

        for key, key_color, stats in rows:
            paint(key_color, f"  {key:<{KEY_WIDTH}}")
            paint(Color.WHITE, f" {stats.count:>{COUNT_WIDTH}}")
            for metric in METRICS:
                value = metric.value_of(stats)
                exact, short = size_strs(value)
                paint(Color.GRAY, f" {exact:>{EXACT_WIDTH}}")
                paint(classify(value), f" {short:>{SHORT_WIDTH}}")
            self.surface.newline()

    def extension_table(self, snapshot: StoreSnapshot) -> None:
        rows = snapshot.extensions_by_size()
        logger.debug("extension table: %d rows", len(rows))
        self._stats_rows("ext", ((ext, Color.WHITE, stats) for ext, stats in rows))

    def kind_table(self, snapshot: StoreSnapshot) -> None:
        rows = snapshot.kinds_by_size()
        self._stats_rows("kind", ((kind.value, kind_info(kind).color, stats) for kind, stats in rows))

    def top_listing(self, records: Sequence[FileRecord], top_count: int) -> None:
        paint = self.surface.paint
        paint(Color.WHITE, "\n\n")
        paint(Color.WHITE, f"Top {top_count} files:", end="\n")
        paint(Color.WHITE, RULE, end="\n")
        for record in records:
            exact, short = size_strs(record.logical_size)
            paint(Color.GRAY, f"  {exact:>{TOP_WIDTH}}")
            paint(classify(record.logical_size), f" {short:>{TOP_WIDTH}}     ")
            paint(Color.WHITE, record.path, end="\n")

    def error_total(self, count: int) -> None:
        if count:
            self.surface.newline()
            self.surface.paint(Color.RED, f"{count} entries could not be read", end="\n")

    def final_report(self, snapshot: StoreSnapshot, records: Sequence[FileRecord], top_count: int) -> None:
        self.extension_table(snapshot)
        self.kind_table(snapshot)
        self.top_listing(records, top_count)
