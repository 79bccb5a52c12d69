"""
Utility functions for romsift
"""

import re

_SIZE_RE = re.compile(r'^\s*([0-9]+(?:\.[0-9]+)?)\s*([KMGTP]?i?B?)\s*$', re.IGNORECASE)
_SIZE_UNITS = {'': 1, 'B': 1, 'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3, 'T': 1024 ** 4, 'P': 1024 ** 5}


def format_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            if unit == 'B':
                return f"{size_bytes} {unit}"
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} PB"


def parse_size(size: str) -> int:
    """
    Parse a listing size string ("1.5 MiB", "700K", "123") into bytes.

    Unparsable strings (including "-" used for directories) count as 0.
    """
    m = _SIZE_RE.match(size or '')
    if not m:
        return 0
    unit = m.group(2).upper()[:1]
    return int(float(m.group(1)) * _SIZE_UNITS.get(unit, 1))


def truncate_string(s: str, max_length: int, suffix: str = '...') -> str:
    """
    Truncate a string to max length.

    Args:
        s: String to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(s) <= max_length:
        return s
    return s[:max_length - len(suffix)] + suffix
