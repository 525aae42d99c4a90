"""
Size formatting helpers.

- bytes_str: exact byte count with comma-grouped thousands, e.g. "1,234,567 B".
- size_str: short form on a fixed KB/MB/GB ladder with two decimals, e.g. "1.00 MB".

Units are binary multiples (KB = 1024 bytes). These helpers decide the text
only; colors come from extstats.colors.
"""

from typing import Tuple

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30
TB = 1 << 40


def bytes_str(num_bytes: int) -> str:
    """
    Format an exact byte count.

    Examples:
        0 -> "0 B"
        1234567 -> "1,234,567 B"
    """
    return f"{int(num_bytes):,} B"


def size_str(num_bytes: int) -> str:
    """
    Format a byte count in KB below one MB, MB below one GB, and GB above.

    Examples:
        1023 -> "1.00 KB"
        1048576 -> "1.00 MB"
    """
    if num_bytes < MB:
        return f"{num_bytes / KB:.2f} KB"
    if num_bytes < GB:
        return f"{num_bytes / MB:.2f} MB"
    return f"{num_bytes / GB:.2f} GB"


def size_strs(num_bytes: int) -> Tuple[str, str]:
    """Return (exact, short) renderings of the same count."""
    return bytes_str(num_bytes), size_str(num_bytes)
