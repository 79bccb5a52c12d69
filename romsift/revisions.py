"""
Revision selection within a title group
"""

from typing import Dict, FrozenSet, List, Sequence, Tuple

from .models import FileEntry, REVISION, REVISION_MODES


def revision_family(entry: FileEntry) -> FrozenSet[Tuple[str, str]]:
    """Key shared by entries that differ only in their revision markers."""
    return frozenset(
        (t.category, t.value.casefold()) for t in entry.tags if t.category != REVISION
    )


def revision_survivors(group: Sequence[FileEntry], rev_mode: str) -> List[int]:
    """Positions in `group` that survive the revision mode, ascending."""
    if rev_mode not in REVISION_MODES:
        raise ValueError(f"Unknown revision mode: {rev_mode}")
    if rev_mode == 'all':
        return list(range(len(group)))

    families: Dict[FrozenSet[Tuple[str, str]], List[int]] = {}
    for index, entry in enumerate(group):
        families.setdefault(revision_family(entry), []).append(index)

    pick = max if rev_mode == 'highest' else min
    keep = []
    for members in families.values():
        target = pick(group[i].revision for i in members)
        # ties are all kept; dedupe decides between them later
        keep.extend(i for i in members if group[i].revision == target)
    return sorted(keep)


def resolve_revisions(group: Sequence[FileEntry], rev_mode: str) -> List[FileEntry]:
    """
    Collapse each revision family of a title group.

    Args:
        group: Entries of one title group, in scrape order
        rev_mode: 'all', 'highest' or 'lowest'

    Returns:
        The kept entries, in their original relative order
    """
    return [group[i] for i in revision_survivors(group, rev_mode)]
