"""
romsift - Filter archive listings of release sets down to a curated download list

Understands No-Intro, Redump and GoodTools style file names.
"""

__version__ = '1.0.0'
__author__ = 'romsift'

from .models import (
    Tag, FileEntry, CategoryTags, FilterCriteria, CriteriaError,
    REGION, LANGUAGE, OTHER, REVISION,
)
from .vocabulary import TagVocabulary, DEFAULT_VOCABULARY
from .tagger import TagExtractor, extract_entry
from .taxonomy import build_taxonomy
from .grouping import group_by_title
from .criteria import passes_criteria, filter_entries
from .revisions import resolve_revisions
from .dedupe import resolve_duplicates, priority_rank
from .pipeline import FilterPipeline, FilterManager, run_filter, filter_listing
from .listing import ListingError, load_listing
from .presets import FilterPreset, PresetStore, PresetError


__all__ = [
    'Tag',
    'FileEntry',
    'CategoryTags',
    'FilterCriteria',
    'CriteriaError',
    'REGION',
    'LANGUAGE',
    'OTHER',
    'REVISION',
    'TagVocabulary',
    'DEFAULT_VOCABULARY',
    'TagExtractor',
    'extract_entry',
    'build_taxonomy',
    'group_by_title',
    'passes_criteria',
    'filter_entries',
    'resolve_revisions',
    'resolve_duplicates',
    'priority_rank',
    'FilterPipeline',
    'FilterManager',
    'run_filter',
    'filter_listing',
    'ListingError',
    'load_listing',
    'FilterPreset',
    'PresetStore',
    'PresetError',
]
