"""
Title grouping - releases of the same work share a normalized base title
"""

from typing import Dict, Iterable, List

from .models import FileEntry


def group_by_title(entries: Iterable[FileEntry]) -> Dict[str, List[FileEntry]]:
    """
    Group entries by casefolded base title.

    Groups appear in order of first occurrence, and entries keep their
    scrape order inside each group.
    """
    groups: Dict[str, List[FileEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.title_key, []).append(entry)
    return groups


def group_positions(entries: List[FileEntry]) -> Dict[str, List[int]]:
    """Same grouping as group_by_title, holding list positions instead of entries."""
    groups: Dict[str, List[int]] = {}
    for index, entry in enumerate(entries):
        groups.setdefault(entry.title_key, []).append(index)
    return groups
