"""
Criteria filter - per-entry include/exclude rules on tags and name substrings
"""

from typing import FrozenSet, Iterable, List

from .models import FileEntry, FilterCriteria, FILTER_CATEGORIES


def _folded(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(v.casefold() for v in values)


def passes_criteria(entry: FileEntry, criteria: FilterCriteria) -> bool:
    """
    Decide whether a single entry survives the tag and string rules.

    Exclusion is checked first, so a value that is both included and
    excluded always drops the entry. An empty include set for a category
    places no restriction on that category.
    """
    for category in FILTER_CATEGORIES:
        values = _folded(entry.tags_in(category))

        excluded = _folded(criteria.exclude_tags.for_category(category))
        if values & excluded:
            return False

        included = _folded(criteria.include_tags.for_category(category))
        if included and not values & included:
            return False

    name = entry.name.casefold()
    if criteria.include_strings and not any(s.casefold() in name for s in criteria.include_strings):
        return False
    if any(s.casefold() in name for s in criteria.exclude_strings):
        return False

    return True


def filter_entries(entries: Iterable[FileEntry], criteria: FilterCriteria) -> List[FileEntry]:
    """Entries that pass the criteria, in their original order."""
    return [e for e in entries if passes_criteria(e, criteria)]
