"""
Tag extraction - splits a release file name into a base title and tags
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from .models import FileEntry, Tag, REGION, LANGUAGE, OTHER, REVISION
from .vocabulary import DEFAULT_VOCABULARY, TagVocabulary

# Innermost (...) or [...] segment
_SEGMENT_RE = re.compile(r'\(([^()\[\]]*)\)|\[([^()\[\]]*)\]')
_EXTENSION_RE = re.compile(r'\.[A-Za-z0-9]{1,5}$')
_TOKEN_SPLIT_RE = re.compile(r'[,/]')


def split_extension(name: str) -> Tuple[str, str]:
    """Split 'Game (USA).zip' into ('Game (USA)', '.zip')."""
    m = _EXTENSION_RE.search(name)
    if not m or m.start() == 0:
        return name, ''
    return name[:m.start()], m.group()


def _clean_title(text: str) -> str:
    text = re.sub(r'\s{2,}', ' ', text)
    return text.strip(' -_')


class TagExtractor:
    """
    Parses file names into FileEntry objects.

    Classification order for each bracket token: revision marker, region,
    language, anything else becomes an Other tag with the token verbatim.
    """

    def __init__(self, vocabulary: Optional[TagVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY

    def classify(self, token: str) -> Tuple[Tuple[Tag, ...], int]:
        """
        Return the tags for one token and its revision value (0 if not a revision).

        Most tokens yield a single tag; combined region codes like UE yield one
        Region tag per region.
        """
        revision = self.vocabulary.revision(token)
        if revision is not None:
            return (Tag(REVISION, token),), revision
        regions = self.vocabulary.region_names(token)
        if regions:
            return tuple(Tag(REGION, r) for r in regions), 0
        language = self.vocabulary.language(token)
        if language:
            return (Tag(LANGUAGE, language),), 0
        return (Tag(OTHER, token),), 0

    def tokens(self, stem: str) -> List[str]:
        """All bracket tokens of a stem, in order of appearance."""
        found = []
        for m in _SEGMENT_RE.finditer(stem):
            content = m.group(1) if m.group(1) is not None else m.group(2)
            for token in _TOKEN_SPLIT_RE.split(content):
                token = token.strip()
                if token:
                    found.append(token)
        return found

    def base_title(self, stem: str) -> str:
        # Repeat so that nested segments like "(Disc 1 (Alt))" are removed too
        title = stem
        while True:
            stripped = _SEGMENT_RE.sub(' ', title)
            if stripped == title:
                break
            title = stripped
        title = _clean_title(title)
        return title or stem.strip()

    def extract(self, name: str, href: str = '', size: str = '') -> FileEntry:
        stem, _ext = split_extension(name)

        tags: List[Tag] = []
        seen = set()
        revision = 0
        for token in self.tokens(stem):
            token_tags, value = self.classify(token)
            revision = max(revision, value)
            for tag in token_tags:
                key = (tag.category, tag.value)
                if key in seen:
                    continue
                seen.add(key)
                tags.append(tag)

        return FileEntry(
            name=name,
            href=href,
            size=size,
            base_title=self.base_title(stem),
            tags=tuple(tags),
            revision=revision,
        )

    def extract_listing(self, items: Iterable[Dict]) -> List[FileEntry]:
        """Convert listing records ({name, href, size}) to FileEntry objects in order."""
        return [
            self.extract(item['name'], item.get('href', ''), item.get('size', ''))
            for item in items
        ]


def extract_entry(name: str, href: str = '', size: str = '',
                  vocabulary: Optional[TagVocabulary] = None) -> FileEntry:
    """Convenience wrapper around TagExtractor.extract"""
    return TagExtractor(vocabulary).extract(name, href, size)
