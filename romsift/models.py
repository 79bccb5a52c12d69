"""
Data models for romsift
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Tuple

REGION = 'Region'
LANGUAGE = 'Language'
OTHER = 'Other'
REVISION = 'Revision'

# Categories a user can filter on; Revision tags only drive revision selection
FILTER_CATEGORIES = (REGION, LANGUAGE, OTHER)
TAG_CATEGORIES = FILTER_CATEGORIES + (REVISION,)

REVISION_MODES = ('all', 'highest', 'lowest')
DEDUPE_MODES = ('all', 'priority')

_CATEGORY_FIELDS = {'region': REGION, 'language': LANGUAGE, 'other': OTHER}
_CRITERIA_KEYS = {
    'include_tags', 'exclude_tags', 'include_strings', 'exclude_strings',
    'rev_mode', 'dedupe_mode', 'priority_list',
}


class CriteriaError(ValueError):
    """Raised when filter criteria are malformed."""


@dataclass(frozen=True)
class Tag:
    """A bracketed metadata marker found in a file name"""
    category: str
    value: str

    def to_dict(self) -> Dict:
        return {'category': self.category, 'value': self.value}

    @classmethod
    def from_dict(cls, d: Dict) -> 'Tag':
        return cls(category=d['category'], value=d['value'])


@dataclass(frozen=True)
class FileEntry:
    """One scraped archive entry with its extracted metadata"""
    name: str
    href: str = ""
    size: str = ""
    base_title: str = ""
    tags: Tuple[Tag, ...] = ()
    revision: int = 0

    @property
    def title_key(self) -> str:
        return self.base_title.casefold()

    def tags_in(self, category: str) -> List[str]:
        return [t.value for t in self.tags if t.category == category]

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'href': self.href,
            'size': self.size,
            'base_title': self.base_title,
            'tags': [t.to_dict() for t in self.tags],
            'revision': self.revision,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'FileEntry':
        return cls(
            name=d['name'],
            href=d.get('href', ''),
            size=d.get('size', ''),
            base_title=d.get('base_title', ''),
            tags=tuple(Tag.from_dict(t) for t in d.get('tags', [])),
            revision=d.get('revision', 0),
        )


@dataclass(frozen=True)
class CategoryTags:
    """Tag values per filterable category"""
    region: FrozenSet[str] = frozenset()
    language: FrozenSet[str] = frozenset()
    other: FrozenSet[str] = frozenset()

    def __post_init__(self):
        for name in _CATEGORY_FIELDS:
            object.__setattr__(self, name, frozenset(_string_list(getattr(self, name), name)))

    def for_category(self, category: str) -> FrozenSet[str]:
        if category == REGION:
            return self.region
        if category == LANGUAGE:
            return self.language
        if category == OTHER:
            return self.other
        raise KeyError(category)

    def is_empty(self) -> bool:
        return not (self.region or self.language or self.other)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'region': sorted(self.region, key=str.casefold),
            'language': sorted(self.language, key=str.casefold),
            'other': sorted(self.other, key=str.casefold),
        }

    @classmethod
    def from_dict(cls, d: Any, field_name: str = 'tags') -> 'CategoryTags':
        if d is None:
            return cls()
        if not isinstance(d, Mapping):
            raise CriteriaError(
                f"'{field_name}' must be a mapping of region/language/other to lists, "
                f"got {type(d).__name__}")
        unknown = set(d) - set(_CATEGORY_FIELDS)
        if unknown:
            raise CriteriaError(
                f"'{field_name}' has unknown categories: {', '.join(sorted(map(str, unknown)))} "
                f"(expected region, language, other)")
        values = {
            key: frozenset(_string_list(d.get(key), f'{field_name}.{key}'))
            for key in _CATEGORY_FIELDS
        }
        return cls(**values)


@dataclass(frozen=True)
class FilterCriteria:
    """User-supplied filter settings"""
    include_tags: CategoryTags = field(default_factory=CategoryTags)
    exclude_tags: CategoryTags = field(default_factory=CategoryTags)
    include_strings: Tuple[str, ...] = ()
    exclude_strings: Tuple[str, ...] = ()
    rev_mode: str = 'all'
    dedupe_mode: str = 'all'
    priority_list: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in ('include_tags', 'exclude_tags'):
            if not isinstance(getattr(self, name), CategoryTags):
                raise CriteriaError(
                    f"'{name}' must be CategoryTags, got {type(getattr(self, name)).__name__}")
        for name in ('include_strings', 'exclude_strings', 'priority_list'):
            object.__setattr__(self, name, tuple(_string_list(getattr(self, name), name)))
        if self.rev_mode not in REVISION_MODES:
            raise CriteriaError(
                f"rev_mode must be one of {', '.join(REVISION_MODES)}, got {self.rev_mode!r}")
        if self.dedupe_mode not in DEDUPE_MODES:
            raise CriteriaError(
                f"dedupe_mode must be one of {', '.join(DEDUPE_MODES)}, got {self.dedupe_mode!r}")

    @property
    def is_identity(self) -> bool:
        """True when the criteria keep every entry in its original order."""
        return (
            self.include_tags.is_empty()
            and self.exclude_tags.is_empty()
            and not self.include_strings
            and not self.exclude_strings
            and self.rev_mode == 'all'
            and self.dedupe_mode == 'all'
        )

    def to_dict(self) -> Dict:
        return {
            'include_tags': self.include_tags.to_dict(),
            'exclude_tags': self.exclude_tags.to_dict(),
            'include_strings': list(self.include_strings),
            'exclude_strings': list(self.exclude_strings),
            'rev_mode': self.rev_mode,
            'dedupe_mode': self.dedupe_mode,
            'priority_list': list(self.priority_list),
        }

    @classmethod
    def from_dict(cls, d: Any) -> 'FilterCriteria':
        """
        Parse the criteria wire format.

        Missing keys fall back to the identity filter. Anything present
        but malformed raises CriteriaError.
        """
        if d is None:
            return cls()
        if not isinstance(d, Mapping):
            raise CriteriaError(f"criteria must be a mapping, got {type(d).__name__}")
        unknown = set(d) - _CRITERIA_KEYS
        if unknown:
            raise CriteriaError(f"unknown criteria keys: {', '.join(sorted(map(str, unknown)))}")

        rev_mode = d.get('rev_mode', 'all')
        dedupe_mode = d.get('dedupe_mode', 'all')
        for key, value in (('rev_mode', rev_mode), ('dedupe_mode', dedupe_mode)):
            if not isinstance(value, str):
                raise CriteriaError(f"'{key}' must be a string, got {type(value).__name__}")

        return cls(
            include_tags=CategoryTags.from_dict(d.get('include_tags'), 'include_tags'),
            exclude_tags=CategoryTags.from_dict(d.get('exclude_tags'), 'exclude_tags'),
            include_strings=tuple(_string_list(d.get('include_strings'), 'include_strings')),
            exclude_strings=tuple(_string_list(d.get('exclude_strings'), 'exclude_strings')),
            rev_mode=rev_mode,
            dedupe_mode=dedupe_mode,
            priority_list=tuple(_string_list(d.get('priority_list'), 'priority_list')),
        )

    @classmethod
    def coerce(cls, criteria: Any) -> 'FilterCriteria':
        if isinstance(criteria, cls):
            return criteria
        return cls.from_dict(criteria)


def _string_list(value: Any, field_name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable) or isinstance(value, Mapping):
        raise CriteriaError(f"'{field_name}' must be a list of strings, got {type(value).__name__}")
    items = list(value)
    for item in items:
        if not isinstance(item, str):
            raise CriteriaError(
                f"'{field_name}' must contain only strings, got {type(item).__name__}")
    return items
