import math

import pytest

from romsift.dedupe import priority_rank, resolve_duplicates
from romsift.tagger import extract_entry


def _group(*names):
    return [extract_entry(n) for n in names]


def _names(entries):
    return [e.name for e in entries]


def test_priority_list_picks_preferred_region():
    group = _group('Game (USA).zip', 'Game (Europe).zip')

    result = resolve_duplicates(group, 'priority', ['Europe', 'USA'])

    assert _names(result) == ['Game (Europe).zip']


def test_all_mode_returns_group_unchanged():
    group = _group('Game (USA).zip', 'Game (Europe).zip')

    assert resolve_duplicates(group, 'all', ['Europe']) == group


def test_rank_uses_first_listed_tag_in_category_order():
    entry = extract_entry('Game (Japan) (En,Ja).zip')

    # Japan is not listed, so the first listed language decides
    assert priority_rank(entry, ['Ja', 'En']) == 1
    assert priority_rank(entry, ['En', 'Japan']) == 1
    assert priority_rank(entry, ['Japan', 'En']) == 0


def test_rank_of_unlisted_entry_is_infinite():
    assert priority_rank(extract_entry('Game (Korea).zip'), ['USA']) == math.inf
    assert priority_rank(extract_entry('Game (Korea).zip'), []) == math.inf


def test_rank_matches_case_insensitively():
    assert priority_rank(extract_entry('Game (USA).zip'), ['usa']) == 0


def test_equal_rank_prefers_highest_revision():
    group = _group('Game (USA).zip', 'Game (USA) (Rev 1).zip', 'Game (Europe) (Rev 3).zip')

    assert _names(resolve_duplicates(group, 'priority', ['USA'])) == ['Game (USA) (Rev 1).zip']


def test_remaining_ties_go_to_earliest_entry():
    group = _group('Game (Korea).zip', 'Game (Brazil).zip')

    assert _names(resolve_duplicates(group, 'priority', ['USA'])) == ['Game (Korea).zip']


def test_unmatched_priority_values_are_harmless():
    group = _group('Game (USA).zip', 'Game (Europe).zip')

    result = resolve_duplicates(group, 'priority', ['Atlantis', 'Europe'])

    assert _names(result) == ['Game (Europe).zip']


def test_other_tags_can_be_prioritised():
    group = _group('Game (USA).zip', 'Game (USA) (Virtual Console).zip')

    result = resolve_duplicates(group, 'priority', ['Virtual Console'])

    assert _names(result) == ['Game (USA) (Virtual Console).zip']


def test_empty_group_contributes_nothing():
    assert resolve_duplicates([], 'priority', ['USA']) == []


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        resolve_duplicates(_group('Game (USA).zip'), 'best', [])
