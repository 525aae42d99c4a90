#!/usr/bin/env python3
"""
extstats CLI: walk one or more directories and report space by extension.

Usage:
    extstats [PATH ...] [-walk]

With no PATH the current directory is scanned. `-walk` (any case) prints a
colored line per entry as the walk proceeds; otherwise a four-line progress
panel is redrawn in place. Afterwards the totals-by-extension table, the
totals-by-kind table and the largest files are printed.

Environment:
    EXTSTATS_TOP        number of largest files to list (default 500)
    EXTSTATS_NO_PAUSE   skip the final "Press Enter" prompt
    EXTSTATS_DELIMS     show kind delimiters around names in the walk trace
    EXTSTATS_LOG_LEVEL  stdlib logging level for diagnostics on stderr
    EXTSTATS_DEBUG      open a post-mortem debugger on internal errors
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import List, Optional, Sequence, Tuple

from .config import Settings
from .errors import EXIT_INTERRUPTED, EXIT_USAGE, ExtStatsError, InvariantError, fatal
from .report import Reporter
from .stats import AccumulatorStore
from .surface import OutputSurface
from .topk import TopKSelector
from .walker import enumerate_tree

logger = logging.getLogger(__name__)

WALK_TOKEN = "-walk"


def strip_quotes(token: str) -> str:
    """Drop one leading and one trailing double quote, if present."""
    if token.startswith('"'):
        token = token[1:]
    if token.endswith('"'):
        token = token[:-1]
    return token


def parse_tokens(argv: Sequence[str]) -> Tuple[List[str], bool]:
    """
    Interpret raw arguments: strip surrounding quotes, recognise `-walk` in any
    case, and treat every other token as a target path.
    """
    targets: List[str] = []
    walk = False
    for raw in argv:
        token = strip_quotes(raw)
        if token.lower() == WALK_TOKEN:
            walk = True
        else:
            targets.append(token)
    if not targets:
        targets = [os.getcwd()]
    return targets, walk


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def run_scan(
    settings: Settings,
    reporter: Reporter,
    store: AccumulatorStore,
    top: TopKSelector,
) -> int:
    """Walk every target, feeding the store and the top-k selector. Returns the error count."""
    surface = reporter.surface
    live_panel = not settings.walk and surface.is_terminal
    base_row = surface.query_cursor()[1]
    errors = 0
    last_draw = 0.0

    def on_error(path: str, exc: OSError) -> None:
        nonlocal errors, base_row
        errors += 1
        reporter.error(f"{path}: {exc.strerror or exc}")
        # Keep the progress panel below the message instead of drawing over it.
        base_row = surface.query_cursor()[1]

    for root in settings.targets:
        logger.info("scanning %s", root)
        current = root
        for entry in enumerate_tree(root, on_error=on_error):
            current = entry.path
            if not entry.is_dir:
                store.add(entry.kind, entry.extension, entry.logical_size, entry.on_disk_size)
                top.offer(entry.to_record())

            if settings.walk:
                reporter.trace_line(entry)
            elif live_panel:
                now = time.monotonic()
                if now - last_draw >= settings.refresh_interval:
                    reporter.draw_summary(base_row, current, store.total)
                    last_draw = now
        if live_panel:
            reporter.draw_summary(base_row, current, store.total)

    logger.info("scan finished: %d files, %d errors", store.total.count, errors)
    return errors


def _acknowledge(surface: OutputSurface) -> None:
    try:
        surface.console.input("Press Enter to continue . . .")
    except (EOFError, KeyboardInterrupt):
        surface.newline()


def main(argv: Optional[Sequence[str]] = None, surface: Optional[OutputSurface] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    targets, walk = parse_tokens(argv)

    try:
        settings = Settings.from_env(targets=targets, walk=walk)
    except ExtStatsError as e:
        print(f"extstats: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(settings.log_level)
    logger.debug("settings: %s", settings)

    surface = surface if surface is not None else OutputSurface()
    reporter = Reporter(surface, tab_size=settings.tab_size, use_delims=settings.use_delims)
    store = AccumulatorStore()
    top = TopKSelector(settings.top_count)

    try:
        reporter.echo_arguments(argv)
        errors = run_scan(settings, reporter, store, top)

        surface.clear_screen()
        reporter.final_report(store.snapshot(), top.finalize(), settings.top_count)
        reporter.error_total(errors)
    except InvariantError as e:
        return fatal(e, debug=settings.debug)
    except KeyboardInterrupt:
        logger.warning("interrupted; partial results discarded")
        return EXIT_INTERRUPTED

    if settings.pause and sys.stdin.isatty():
        _acknowledge(surface)
    return 0


if __name__ == "__main__":
    sys.exit(main())
