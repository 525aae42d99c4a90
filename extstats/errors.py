"""
Error types for extstats.

Two families:
  - ExtStatsError: bad input or configuration; reported and the run stops with a usage code.
  - InvariantError: an internal contract was broken (bad color index, average of an
    empty bucket, ...). These are fatal; `fatal()` prints where the check failed and
    optionally opens a post-mortem debugger before the process exits.

Filesystem problems are not errors here: the walker reports them per entry and
the scan carries on.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_INTERNAL = 70
EXIT_INTERRUPTED = 130


class ExtStatsError(Exception):
    """Base error for user-facing failures."""


class InvariantError(ExtStatsError):
    def __init__(self, message: str, function: str = "?", filename: str = "?", lineno: int = 0):
        super().__init__(message)
        self.message = message
        self.function = function
        self.filename = filename
        self.lineno = lineno

    def diagnostic(self) -> str:
        return (
            f"ASSERTION FAILED in {self.function} "
            f"({os.path.basename(self.filename)}:{self.lineno}): {self.message}"
        )


def check(condition: bool, message: str) -> None:
    """Raise InvariantError tagged with the caller's location when `condition` is false."""
    if condition:
        return
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is not None:
            raise InvariantError(message, caller.f_code.co_name, caller.f_code.co_filename, caller.f_lineno)
        raise InvariantError(message)
    finally:
        del frame, caller


def fatal(exc: InvariantError, *, debug: bool = False, stream: Optional[TextIO] = None) -> int:
    """Emit the diagnostic for a broken invariant and return the exit status to use."""
    out = stream if stream is not None else sys.stderr
    logger.critical(exc.diagnostic())
    print(exc.diagnostic(), file=out)
    if debug:
        import pdb
        pdb.post_mortem(exc.__traceback__)
    return EXIT_INTERNAL
