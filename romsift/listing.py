"""
Archive listing I/O - reads scraped {name, href, size} records and writes results
"""

import json
import os
from typing import Any, Dict, Iterable, List

from .models import FileEntry

OUTPUT_FORMATS = ('json', 'txt', 'urls')


class ListingError(ValueError):
    """Raised when a listing does not have the {name, href, size} shape."""


def validate_listing(items: Any) -> List[Dict[str, str]]:
    """
    Check listing records and normalize them to plain dicts.

    `name` is required; `href` and `size` default to empty strings.
    """
    if isinstance(items, dict) and 'files' in items:
        items = items['files']
    if not isinstance(items, list):
        raise ListingError(f"listing must be a list of entries, got {type(items).__name__}")

    records = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise ListingError(f"entry {position} must be an object, got {type(item).__name__}")
        name = item.get('name')
        if not isinstance(name, str) or not name:
            raise ListingError(f"entry {position} has no 'name'")
        record = {'name': name}
        for key in ('href', 'size'):
            value = item.get(key, '')
            if value is None:
                value = ''
            if not isinstance(value, str):
                raise ListingError(
                    f"entry {position} ({name}): '{key}' must be a string, got {type(value).__name__}")
            record[key] = value
        records.append(record)
    return records


def load_listing(filepath: str) -> List[Dict[str, str]]:
    """Load a listing saved as JSON (an array, or an object with a 'files' array)."""
    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ListingError(f"{filepath} is not valid JSON: {e}") from e
    return validate_listing(data)


def format_entries(entries: Iterable[FileEntry], fmt: str = 'json') -> str:
    """
    Render entries for output.

    Args:
        entries: Entries to render
        fmt: 'json' (entry dicts), 'txt' (file names) or 'urls' (hrefs)
    """
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {fmt}")
    entries = list(entries)
    if fmt == 'json':
        return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
    if fmt == 'txt':
        lines = [e.name for e in entries]
    else:
        lines = [e.href or e.name for e in entries]
    return '\n'.join(lines) + ('\n' if lines else '')


def save_entries(entries: Iterable[FileEntry], filepath: str, fmt: str = 'json') -> str:
    """Write entries to a file. Returns filepath."""
    content = format_entries(entries, fmt)
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(content)
    return filepath
