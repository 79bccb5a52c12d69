import pytest

from romsift.criteria import filter_entries, passes_criteria
from romsift.models import CategoryTags, CriteriaError, FilterCriteria
from romsift.tagger import extract_entry


def _criteria(**kwargs):
    for key in ('include_tags', 'exclude_tags'):
        if isinstance(kwargs.get(key), dict):
            kwargs[key] = CategoryTags(**{k: frozenset(v) for k, v in kwargs[key].items()})
    return FilterCriteria(**kwargs)


def test_identity_criteria_keep_everything():
    entry = extract_entry('Game (USA) (Beta).zip')
    assert passes_criteria(entry, FilterCriteria())


def test_exclusion_wins_over_inclusion_for_same_value():
    entry = extract_entry('Game (USA).zip')
    criteria = _criteria(include_tags={'region': ['USA']}, exclude_tags={'region': ['USA']})

    assert not passes_criteria(entry, criteria)


def test_exclude_drops_entries_with_any_matching_tag():
    criteria = _criteria(exclude_tags={'other': ['Unl']})

    assert not passes_criteria(extract_entry('Game (USA) (Unl).zip'), criteria)
    assert passes_criteria(extract_entry('Game (USA).zip'), criteria)


def test_include_requires_a_tag_of_that_category():
    criteria = _criteria(include_tags={'region': ['Japan']})

    assert passes_criteria(extract_entry('Game (Japan).zip'), criteria)
    assert passes_criteria(extract_entry('Game (USA, Japan).zip'), criteria)
    assert not passes_criteria(extract_entry('Game (USA).zip'), criteria)
    assert not passes_criteria(extract_entry('Game.zip'), criteria)


def test_empty_include_category_places_no_restriction():
    criteria = _criteria(include_tags={'language': ['En']})

    # region include set is empty, so any region is fine
    assert passes_criteria(extract_entry('Game (Europe) (En,Fr).zip'), criteria)
    assert not passes_criteria(extract_entry('Game (Europe) (Fr,De).zip'), criteria)


def test_include_categories_are_combined():
    criteria = _criteria(include_tags={'region': ['Europe'], 'language': ['De']})

    assert passes_criteria(extract_entry('Game (Europe) (En,De).zip'), criteria)
    assert not passes_criteria(extract_entry('Game (Europe) (En,Fr).zip'), criteria)
    assert not passes_criteria(extract_entry('Game (Germany) (De).zip'), criteria)


def test_tag_values_compare_case_insensitively():
    criteria = _criteria(include_tags={'region': ['usa']}, exclude_tags={'language': ['FR']})

    assert passes_criteria(extract_entry('Game (USA) (En).zip'), criteria)
    assert not passes_criteria(extract_entry('Game (USA) (En,Fr).zip'), criteria)


def test_include_strings_need_one_match():
    criteria = _criteria(include_strings=('mario', 'zelda'))

    assert passes_criteria(extract_entry('Super Mario World (USA).zip'), criteria)
    assert passes_criteria(extract_entry('Legend of ZELDA, The (USA).zip'), criteria)
    assert not passes_criteria(extract_entry('Metroid (USA).zip'), criteria)


def test_exclude_strings_drop_any_match():
    criteria = _criteria(exclude_strings=('(beta', 'demo'))

    assert not passes_criteria(extract_entry('Game (USA) (Beta).zip'), criteria)
    assert not passes_criteria(extract_entry('Game Demo (USA).zip'), criteria)
    assert passes_criteria(extract_entry('Game (USA).zip'), criteria)


def test_criteria_filter_ignores_modes_and_priority():
    entry = extract_entry('Game (Japan).zip')
    criteria = _criteria(rev_mode='highest', dedupe_mode='priority', priority_list=('USA',))

    assert passes_criteria(entry, criteria)


def test_filter_entries_keeps_order():
    entries = [extract_entry(n) for n in ('C (USA).zip', 'B (Japan).zip', 'A (USA).zip')]
    criteria = _criteria(include_tags={'region': ['USA']})

    assert [e.name for e in filter_entries(entries, criteria)] == ['C (USA).zip', 'A (USA).zip']


def test_from_dict_parses_wire_format():
    criteria = FilterCriteria.from_dict({
        'include_tags': {'region': ['USA'], 'language': [], 'other': []},
        'exclude_tags': {'region': [], 'language': [], 'other': ['Beta']},
        'include_strings': ['mario'],
        'exclude_strings': [],
        'rev_mode': 'highest',
        'dedupe_mode': 'priority',
        'priority_list': ['USA', 'Europe'],
    })

    assert criteria.include_tags.region == frozenset({'USA'})
    assert criteria.exclude_tags.other == frozenset({'Beta'})
    assert criteria.include_strings == ('mario',)
    assert criteria.rev_mode == 'highest'
    assert criteria.priority_list == ('USA', 'Europe')
    assert FilterCriteria.from_dict(criteria.to_dict()) == criteria


def test_from_dict_missing_keys_default_to_identity():
    assert FilterCriteria.from_dict({}).is_identity
    assert FilterCriteria.from_dict(None).is_identity


@pytest.mark.parametrize('bad', [
    {'rev_mode': 'newest'},
    {'dedupe_mode': 'first'},
    {'rev_mode': 3},
    {'include_tags': ['USA']},
    {'include_tags': {'regoin': ['USA']}},
    {'exclude_tags': {'region': 'USA'}},
    {'include_strings': 'mario'},
    {'priority_list': ['USA', 1]},
    {'priority': ['USA']},
    ['not', 'a', 'mapping'],
])
def test_from_dict_rejects_malformed_criteria(bad):
    with pytest.raises(CriteriaError):
        FilterCriteria.from_dict(bad)


def test_error_message_names_the_field():
    with pytest.raises(CriteriaError, match='rev_mode'):
        FilterCriteria.from_dict({'rev_mode': 'newest'})
    with pytest.raises(CriteriaError, match='regoin'):
        FilterCriteria.from_dict({'include_tags': {'regoin': []}})
