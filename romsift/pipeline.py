"""
Filter pipeline - criteria filter, revision selection and dedupe in a fixed order
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .criteria import passes_criteria
from .dedupe import dedupe_survivors
from .grouping import group_positions
from .listing import ListingError, validate_listing
from .models import CriteriaError, FileEntry, FilterCriteria
from .monitor import LOGGER_NAME
from .revisions import revision_survivors
from .tagger import TagExtractor
from .vocabulary import TagVocabulary

logger = logging.getLogger(LOGGER_NAME)


class FilterPipeline:
    """
    Turns a scraped listing plus criteria into the final download list.

    Stages:
    1. Criteria filter on every entry
    2. Grouping of survivors by base title
    3. Revision selection per group
    4. Priority dedupe per group
    5. Survivors re-sorted into scrape order

    The pipeline never mutates its inputs and keeps no state between runs.
    """

    def run(self, entries: Sequence[FileEntry], criteria: Any) -> List[FileEntry]:
        """
        Filter entries.

        Args:
            entries: Extracted entries, in scrape order
            criteria: FilterCriteria or its dict wire format

        Returns:
            A sub-sequence of `entries` (possibly empty)

        Raises:
            CriteriaError: if the criteria are malformed
        """
        criteria = FilterCriteria.coerce(criteria)
        entries = list(entries)

        if criteria.is_identity:
            logger.debug("filter: identity criteria, %d entries passed through", len(entries))
            return entries

        survivors = [i for i, e in enumerate(entries) if passes_criteria(e, criteria)]
        logger.debug("filter: %d of %d entries passed criteria", len(survivors), len(entries))

        candidates = [entries[i] for i in survivors]
        kept: List[int] = []
        for positions in group_positions(candidates).values():
            group = [candidates[p] for p in positions]

            after_rev = revision_survivors(group, criteria.rev_mode)
            rev_group = [group[i] for i in after_rev]

            after_dedupe = dedupe_survivors(rev_group, criteria.dedupe_mode, criteria.priority_list)
            kept.extend(survivors[positions[after_rev[i]]] for i in after_dedupe)

        kept.sort()
        logger.debug(
            "filter: %d entries kept (rev_mode=%s, dedupe_mode=%s)",
            len(kept), criteria.rev_mode, criteria.dedupe_mode,
        )
        return [entries[i] for i in kept]


def run_filter(entries: Sequence[FileEntry], criteria: Any) -> List[FileEntry]:
    """Module-level shortcut for FilterPipeline().run"""
    return FilterPipeline().run(entries, criteria)


def filter_listing(items: Iterable[Dict], criteria: Any,
                   vocabulary: Optional[TagVocabulary] = None) -> List[FileEntry]:
    """
    Extract and filter raw listing records in one call.

    Criteria are validated before the listing is touched.
    """
    criteria = FilterCriteria.coerce(criteria)
    if not isinstance(items, (list, dict)):
        items = list(items)
    records = validate_listing(items)
    entries = TagExtractor(vocabulary).extract_listing(records)
    return run_filter(entries, criteria)


class FilterManager:
    """
    Error-reporting facade for front ends.

    Results come back as {'data': [...]} on success and {'error': message}
    when the listing or criteria are malformed, so callers can tell an empty
    match apart from a failure.
    """

    def __init__(self, vocabulary: Optional[TagVocabulary] = None):
        self.extractor = TagExtractor(vocabulary)
        self.pipeline = FilterPipeline()

    def filter_files(self, files: Any, filters: Any) -> Dict[str, Any]:
        try:
            criteria = FilterCriteria.coerce(filters)
            entries = self.extractor.extract_listing(validate_listing(files))
            result = self.pipeline.run(entries, criteria)
        except (CriteriaError, ListingError) as e:
            logger.warning("filter rejected: %s", e)
            return {'error': str(e)}
        return {'data': [e.to_dict() for e in result]}
