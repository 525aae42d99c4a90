"""
Display colors for extstats.

Sixteen named console colors, the size -> color palette used to tint every
size column, and the per-kind (prefix, suffix, color) table used by the walk
trace. Colors keep the classic console attribute order so that a Color is also
a valid 0..15 attribute index.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Sequence, Tuple

from .errors import check
from .models import FileKind
from .sizes import GB, KB, MB


class Color(IntEnum):
    BLACK = 0
    NAVY = 1
    FOREST = 2
    TEAL = 3
    MAROON = 4
    PURPLE = 5
    OCHRE = 6
    SILVER = 7
    GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15


# Console attribute -> rich/ANSI color name. The dark half maps onto the
# standard ANSI colors and the bright half onto their bright variants.
_RICH_NAMES: Dict[Color, str] = {
    Color.BLACK: "black",
    Color.NAVY: "blue",
    Color.FOREST: "green",
    Color.TEAL: "cyan",
    Color.MAROON: "red",
    Color.PURPLE: "magenta",
    Color.OCHRE: "yellow",
    Color.SILVER: "white",
    Color.GRAY: "bright_black",
    Color.BLUE: "bright_blue",
    Color.GREEN: "bright_green",
    Color.CYAN: "bright_cyan",
    Color.RED: "bright_red",
    Color.MAGENTA: "bright_magenta",
    Color.YELLOW: "bright_yellow",
    Color.WHITE: "bright_white",
}


def to_color(value: int) -> Color:
    """Validate a raw attribute index; anything outside 0..15 is a programming error."""
    check(isinstance(value, int) and 0 <= int(value) < 16, f"color index out of range: {value!r}")
    return Color(int(value))


def rich_style(color: int) -> str:
    return _RICH_NAMES[to_color(color)]


# (color, exclusive upper bound) pairs in ascending bound order, plus the
# catch-all color for everything at or above the last bound.
SizePalette = Tuple[Tuple[Color, int], ...]

SIZE_PALETTE: SizePalette = (
    (Color.TEAL, 1 * KB),
    (Color.FOREST, 1 * MB),
    (Color.OCHRE, 10 * MB),
    (Color.YELLOW, 50 * MB),
    (Color.MAROON, 100 * MB),
    (Color.RED, 1 * GB),
)
SIZE_FALLBACK = Color.MAGENTA


def classify(
    byte_count: int,
    thresholds: Sequence[Tuple[Color, int]] = SIZE_PALETTE,
    fallback: Color = SIZE_FALLBACK,
) -> Color:
    """
    Map a byte count to a display color.

    Returns the color of the first threshold whose bound is strictly greater
    than `byte_count`; sizes past every bound get `fallback`.
    """
    color: Optional[Color] = None
    for candidate, upper in thresholds:
        if byte_count < upper:
            color = candidate
            break
    if color is None:
        color = fallback
    return to_color(color)


@dataclass(frozen=True)
class KindInfo:
    prefix: str
    suffix: str
    color: Color


KIND_INFO: Dict[FileKind, KindInfo] = {
    FileKind.NONE: KindInfo("?", "?", Color.SILVER),
    FileKind.NOT_FOUND: KindInfo("?", "?", Color.RED),
    FileKind.REGULAR: KindInfo("", "", Color.WHITE),
    FileKind.DIRECTORY: KindInfo("<", ">", Color.CYAN),
    FileKind.SYMLINK: KindInfo("?", "?", Color.YELLOW),
    FileKind.BLOCK_DEVICE: KindInfo("?", "?", Color.MAGENTA),
    FileKind.CHAR_DEVICE: KindInfo("?", "?", Color.GRAY),
    FileKind.FIFO: KindInfo("?", "?", Color.FOREST),
    FileKind.SOCKET: KindInfo("?", "?", Color.TEAL),
    FileKind.UNKNOWN: KindInfo("?", "?", Color.FOREST),
    FileKind.JUNCTION: KindInfo("?", "?", Color.SILVER),
}


def kind_info(kind: FileKind) -> KindInfo:
    return KIND_INFO[kind]
