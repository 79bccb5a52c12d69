from romsift.grouping import group_by_title, group_positions
from romsift.tagger import extract_entry
from romsift.taxonomy import build_taxonomy, count_tags


def _entries(*names):
    return [extract_entry(n) for n in names]


def test_taxonomy_partitions_values_by_category():
    entries = _entries(
        'Game (USA, Europe) (En,Fr) (Rev 1).zip',
        'Other Game (Japan) (Ja) [!].zip',
        'Third (europe) (Unl).zip',
    )

    taxonomy = build_taxonomy(entries)

    assert taxonomy == {
        'Region': ['Europe', 'Japan', 'USA'],
        'Language': ['En', 'Fr', 'Ja'],
        'Other': ['!', 'Unl'],
    }


def test_taxonomy_leaves_out_revisions_and_handles_empty_input():
    assert build_taxonomy(_entries('Game (Proto 2).zip')) == {'Region': [], 'Language': [], 'Other': []}
    assert build_taxonomy([]) == {'Region': [], 'Language': [], 'Other': []}


def test_taxonomy_does_not_mutate_entries():
    entries = _entries('Game (USA).zip')
    before = [e.to_dict() for e in entries]

    build_taxonomy(entries)

    assert [e.to_dict() for e in entries] == before


def test_count_tags():
    counts = count_tags(_entries('A (USA).zip', 'B (USA, Japan).zip'))

    assert counts['Region'] == {'USA': 2, 'Japan': 1}


def test_group_by_title_keeps_order_and_every_entry():
    entries = _entries('B (USA).zip', 'A (Japan).zip', 'b (Europe).zip', 'A (USA).zip')

    groups = group_by_title(entries)

    assert list(groups) == ['b', 'a']
    assert [e.name for e in groups['b']] == ['B (USA).zip', 'b (Europe).zip']
    assert [e.name for e in groups['a']] == ['A (Japan).zip', 'A (USA).zip']
    assert sum(len(g) for g in groups.values()) == len(entries)


def test_group_positions_match_group_by_title():
    entries = _entries('B (USA).zip', 'A (Japan).zip', 'B (Europe).zip')

    assert group_positions(entries) == {'b': [0, 2], 'a': [1]}
