"""
Tag taxonomy - distinct tag values per category, for building filter choices
"""

from typing import Dict, Iterable, List, Set

from .models import FileEntry, FILTER_CATEGORIES


def build_taxonomy(entries: Iterable[FileEntry]) -> Dict[str, List[str]]:
    """
    Collect the distinct Region, Language and Other tag values of a listing.

    Revision tags are left out; they are selected through the revision mode,
    not by value. Each list is sorted case-insensitively.
    """
    found: Dict[str, Set[str]] = {category: set() for category in FILTER_CATEGORIES}
    for entry in entries:
        for tag in entry.tags:
            if tag.category in found:
                found[tag.category].add(tag.value)
    return {
        category: sorted(values, key=lambda v: (v.casefold(), v))
        for category, values in found.items()
    }


def count_tags(entries: Iterable[FileEntry]) -> Dict[str, Dict[str, int]]:
    """Number of entries carrying each tag value, per category."""
    counts: Dict[str, Dict[str, int]] = {category: {} for category in FILTER_CATEGORIES}
    for entry in entries:
        for tag in entry.tags:
            bucket = counts.get(tag.category)
            if bucket is not None:
                bucket[tag.value] = bucket.get(tag.value, 0) + 1
    return counts
