"""
Tag recognition tables.

Region and language names follow the No-Intro / Redump naming convention,
with the short GoodTools region codes accepted as aliases. A vocabulary is
an immutable value handed to the extractor, so callers can swap in their
own tables without touching module state.
"""

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

NO_INTRO_REGIONS = (
    'World', 'USA', 'Europe', 'Japan', 'Asia', 'Australia', 'Brazil', 'Canada',
    'China', 'Korea', 'Taiwan', 'Hong Kong', 'France', 'Germany', 'Italy',
    'Spain', 'Netherlands', 'Sweden', 'Norway', 'Denmark', 'Finland', 'Greece',
    'Portugal', 'Poland', 'Russia', 'Austria', 'Belgium', 'Switzerland',
    'Scandinavia', 'UK', 'Ireland', 'India', 'Mexico', 'Argentina',
    'Latin America', 'New Zealand', 'South Africa', 'Turkey', 'Israel',
    'Czech', 'Hungary', 'Croatia', 'Unknown',
)

GOODTOOLS_REGION_ALIASES = {
    'U': 'USA', 'US': 'USA', 'America': 'USA',
    'E': 'Europe',
    'J': 'Japan', 'JP': 'Japan',
    'W': 'World',
    'UE': ('USA', 'Europe'), 'JU': ('Japan', 'USA'), 'JE': ('Japan', 'Europe'),
    'JUE': ('Japan', 'USA', 'Europe'),
    'A': 'Australia',
    'B': 'Brazil', 'BR': 'Brazil',
    'C': 'China', 'CN': 'China',
    'K': 'Korea', 'KR': 'Korea',
    'G': 'Germany',
    'F': 'France',
    'S': 'Spain',
    'I': 'Italy',
    'HK': 'Hong Kong',
    'Unk': 'Unknown',
}

NO_INTRO_LANGUAGE_CODES = (
    'En', 'Ja', 'Fr', 'De', 'Es', 'It', 'Nl', 'Pt', 'Sv', 'No', 'Da', 'Fi',
    'Zh', 'Ko', 'Pl', 'Ru', 'El', 'Tr', 'Cs', 'Hu', 'Ca', 'Ar', 'He', 'Hr',
    'Ro', 'Sk', 'Sl', 'Sr', 'Th', 'Vi', 'Id', 'Ms', 'Hi', 'Is', 'Eu',
    'Gd', 'Ga', 'Cy', 'Bg', 'Et', 'Lt', 'Lv', 'Af',
)

LANGUAGE_NAMES = (
    'English', 'Japanese', 'French', 'German', 'Spanish', 'Italian', 'Dutch',
    'Portuguese', 'Swedish', 'Norwegian', 'Danish', 'Finnish', 'Chinese',
    'Korean', 'Polish', 'Russian', 'Greek', 'Turkish', 'Czech', 'Hungarian',
    'Catalan', 'Arabic', 'Hebrew', 'Croatian',
)

REV_SCALE = 1000
# Rev 1, Rev A, Rev 1.1
REV_PATTERN = r'Rev\s*(?P<rev>[0-9]+(?:\.[0-9]+)?|[A-Z]{1,2})'
# v1.1, v1.02, v2, Version 1.1
VERSION_PATTERN = r'(?:v|Version\s*)(?P<major>[0-9]+)(?:\.(?P<minor>[0-9]+))?(?:\.(?P<patch>[0-9]+))?[a-z]?'
# Proto, Proto 2, Beta 3, Alpha, Sample 1
BUILD_PATTERN = r'(?:Proto|Prototype|Beta|Alpha|Sample)(?:\s*(?P<build>[0-9]+))?'

DEFAULT_REVISION_PATTERNS = (REV_PATTERN, VERSION_PATTERN, BUILD_PATTERN)


def _freeze_lookup(names: Iterable[str]) -> Mapping[str, str]:
    lookup = {}
    for name in names:
        lookup[name.casefold()] = name
    return MappingProxyType(lookup)


@dataclass(frozen=True)
class TagVocabulary:
    """Recognized region/language values and revision token grammar."""
    regions: Tuple[str, ...] = NO_INTRO_REGIONS
    region_aliases: Mapping[str, Union[str, Sequence[str]]] = field(
        default_factory=lambda: MappingProxyType(dict(GOODTOOLS_REGION_ALIASES)))
    languages: Tuple[str, ...] = NO_INTRO_LANGUAGE_CODES + LANGUAGE_NAMES
    language_aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    revision_patterns: Tuple[str, ...] = DEFAULT_REVISION_PATTERNS

    def __post_init__(self):
        object.__setattr__(self, 'regions', tuple(self.regions))
        object.__setattr__(self, 'languages', tuple(self.languages))
        object.__setattr__(self, 'revision_patterns', tuple(self.revision_patterns))
        object.__setattr__(self, 'region_aliases', MappingProxyType({
            alias: (target,) if isinstance(target, str) else tuple(target)
            for alias, target in self.region_aliases.items()
        }))
        object.__setattr__(self, 'language_aliases', MappingProxyType(dict(self.language_aliases)))
        object.__setattr__(self, '_region_lookup', _freeze_lookup(self.regions))
        object.__setattr__(self, '_language_lookup', _freeze_lookup(self.languages))
        object.__setattr__(self, '_revision_res', tuple(
            re.compile(rf'^(?:{p})$', re.IGNORECASE) for p in self.revision_patterns))

    def region_names(self, token: str) -> Tuple[str, ...]:
        """
        Canonical region names for a token, empty if it is not a region.

        Names match case-insensitively, aliases only exactly, so GoodTools
        dump flags like [b] or [a] are not mistaken for (B) or (A). Combined
        codes such as (UE) expand to several regions.
        """
        hit = self.region_aliases.get(token)
        if hit:
            return hit
        name = self._region_lookup.get(token.casefold())
        return (name,) if name else ()

    def region(self, token: str) -> Optional[str]:
        """First canonical region name for a token, or None."""
        found = self.region_names(token)
        return found[0] if found else None

    def language(self, token: str) -> Optional[str]:
        """
        Canonical language value for a token, or None.

        Codes with a script or country suffix (Pt-BR, Zh-Hant) are recognized
        when the base code is; the token keeps its own suffix.
        """
        hit = self.language_aliases.get(token) or self._language_lookup.get(token.casefold())
        if hit:
            return hit
        base, sep, suffix = token.partition('-')
        if sep and suffix.isalpha():
            base_hit = self._language_lookup.get(base.casefold())
            if base_hit:
                return f"{base_hit}-{suffix}"
        return None

    def revision(self, token: str) -> Optional[int]:
        """Numeric revision value for a revision token, or None if it is not one."""
        for regex in self._revision_res:
            m = regex.match(token)
            if m:
                return revision_value(m)
        return None

    def extended(self, regions: Iterable[str] = (), languages: Iterable[str] = (),
                 region_aliases: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
                 language_aliases: Optional[Mapping[str, str]] = None,
                 revision_patterns: Iterable[str] = ()) -> 'TagVocabulary':
        """Return a copy with additional values."""
        merged_region_aliases = dict(self.region_aliases)
        merged_region_aliases.update(region_aliases or {})
        merged_language_aliases = dict(self.language_aliases)
        merged_language_aliases.update(language_aliases or {})
        return replace(
            self,
            regions=self.regions + tuple(r for r in regions if r not in self.regions),
            languages=self.languages + tuple(lang for lang in languages if lang not in self.languages),
            region_aliases=merged_region_aliases,
            language_aliases=merged_language_aliases,
            revision_patterns=self.revision_patterns + tuple(revision_patterns),
        )


def revision_value(match: 're.Match') -> int:
    """
    Turn a revision regex match into a comparable integer.

    - rev: scaled by 1000 so that Rev 2 > Rev 1.1 > Rev 1 (N -> N*1000,
      N.M -> N*1000 + M); letters count base-26 on the same scale (A=1000, B=2000)
    - major/minor/patch: major * 10**6 + minor * 10**3 + patch
    - build: trailing integer, 0 when absent
    Custom patterns without these groups count as 0.
    """
    groups = match.groupdict()
    rev = groups.get('rev')
    if rev:
        if rev.isalpha():
            value = 0
            for ch in rev.upper():
                value = value * 26 + (ord(ch) - ord('A') + 1)
            return value * REV_SCALE
        major, _, minor = rev.partition('.')
        return int(major) * REV_SCALE + int(minor or 0)
    if groups.get('major'):
        return (int(groups['major']) * 1_000_000
                + int(groups.get('minor') or 0) * 1_000
                + int(groups.get('patch') or 0))
    if groups.get('build'):
        return int(groups['build'])
    return 0


DEFAULT_VOCABULARY = TagVocabulary()
