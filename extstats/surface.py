"""
OutputSurface: the one place extstats writes to the terminal.

Wraps a rich Console and offers the small set of primitives the reporter needs:
paint colored text at the cursor, paint a full line at a (column, row) position,
clear the screen, and query the console size and cursor position. The cursor is
tracked from what this surface has written, and positioned writes move there
with relative cursor controls, so they keep working after the screen scrolls.
"""

from __future__ import annotations

import sys
from typing import Optional, Tuple

from rich.console import Console
from rich.control import Control
from rich.text import Text

from .colors import Color, rich_style


def make_console() -> Console:
    """Interactive terminals get a normal console; redirected output gets a wide, colorless one."""
    try:
        if sys.stdout.isatty():
            return Console(highlight=False)
    except (AttributeError, ValueError):
        pass
    return Console(width=200, force_terminal=False, no_color=True, highlight=False, soft_wrap=False)


def displayable(text: str) -> str:
    """
    Replace undecodable filename bytes (carried as lone surrogates by os.scandir)
    with U+FFFD so the text can be written to any UTF-8 stream.
    """
    try:
        return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    except UnicodeEncodeError:
        return text.encode("utf-8", "replace").decode("utf-8")


class OutputSurface:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else make_console()
        self._col = 0
        self._row = 0

    @property
    def is_terminal(self) -> bool:
        return self.console.is_terminal

    def query_size(self) -> Tuple[int, int]:
        size = self.console.size
        return size.width, size.height

    def query_cursor(self) -> Tuple[int, int]:
        return self._col, self._row

    def _advance(self, text: str) -> None:
        lines = text.split("\n")
        if len(lines) > 1:
            self._row += len(lines) - 1
            self._col = len(lines[-1])
        else:
            self._col += len(text)

    def paint(self, color: Color, text: str, end: str = "") -> None:
        """Write `text` in `color` at the cursor."""
        self.console.print(Text(displayable(text), style=rich_style(color)), end=end, soft_wrap=True, highlight=False)
        self._advance(text + end)

    def newline(self) -> None:
        self.console.print("", soft_wrap=True)
        self._advance("\n")

    def paint_at(self, position: Tuple[int, int], color: Color, text: str) -> None:
        """
        Overwrite the line at `position` with `text`, padded to the console
        width so that leftovers from a longer previous line are erased. The
        cursor ends at the start of the following line.
        """
        x, y = position
        if self.is_terminal:
            self.console.control(Control.move(x - self._col, y - self._row))
            self._col, self._row = x, y
        width = self.query_size()[0]
        pad = max(0, width - x - 1)
        self.paint(color, text[:pad].ljust(pad) if pad else text, end="\n")

    def clear_screen(self) -> None:
        if self.is_terminal:
            self.console.clear()
            self._col, self._row = 0, 0
