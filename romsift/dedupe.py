"""
Priority dedupe - keep one preferred variant per title group
"""

import math
from typing import List, Sequence

from .models import FileEntry, DEDUPE_MODES, FILTER_CATEGORIES


def priority_rank(entry: FileEntry, priority_list: Sequence[str]) -> float:
    """
    Position in the priority list of the first listed tag on the entry.

    Tags are scanned Region first, then Language, then Other, each in name
    order. Entries with no listed tag rank last (infinity).
    """
    positions = {}
    for index, value in enumerate(priority_list):
        positions.setdefault(value.casefold(), index)

    for category in FILTER_CATEGORIES:
        for value in entry.tags_in(category):
            rank = positions.get(value.casefold())
            if rank is not None:
                return rank
    return math.inf


def dedupe_survivors(group: Sequence[FileEntry], dedupe_mode: str,
                     priority_list: Sequence[str]) -> List[int]:
    """Positions in `group` that survive deduplication, ascending."""
    if dedupe_mode not in DEDUPE_MODES:
        raise ValueError(f"Unknown dedupe mode: {dedupe_mode}")
    if dedupe_mode == 'all':
        return list(range(len(group)))
    if not group:
        return []

    best = min(
        range(len(group)),
        key=lambda i: (priority_rank(group[i], priority_list), -group[i].revision, i),
    )
    return [best]


def resolve_duplicates(group: Sequence[FileEntry], dedupe_mode: str,
                       priority_list: Sequence[str] = ()) -> List[FileEntry]:
    """
    Reduce a title group to its preferred entry.

    With dedupe_mode 'all' the group is returned unchanged. With 'priority'
    the winner is the entry with the best priority rank, then the highest
    revision, then the earliest position.
    """
    return [group[i] for i in dedupe_survivors(group, dedupe_mode, priority_list)]
