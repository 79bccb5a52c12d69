"""
Filter preset persistence - named criteria per archive directory, stored as JSON.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .models import FilterCriteria
from .monitor import monitor
from .shared_config import PRESETS_FILE

CURRENT_PRESET_VERSION = 2


class PresetError(ValueError):
    """Raised for unreadable or malformed preset data."""


@dataclass
class FilterPreset:
    """Saved filter settings for one archive directory"""
    name: str
    full_path: str = ""
    path_display_name: str = ""
    filter_settings: FilterCriteria = field(default_factory=FilterCriteria)
    version: int = CURRENT_PRESET_VERSION

    @property
    def key(self):
        return (self.name, self.full_path)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'fullPath': self.full_path,
            'pathDisplayName': self.path_display_name,
            'filterSettings': self.filter_settings.to_dict(),
            '_version': self.version,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'FilterPreset':
        if needs_migration(d):
            d = migrate_preset(d)
        if not d.get('name'):
            raise PresetError('Preset has no name.')
        return cls(
            name=d['name'],
            full_path=d.get('fullPath', ''),
            path_display_name=d.get('pathDisplayName', ''),
            filter_settings=FilterCriteria.from_dict(d.get('filterSettings')),
            version=d.get('_version', CURRENT_PRESET_VERSION),
        )


def needs_migration(preset: Dict) -> bool:
    """True for presets saved in the v1 layout (archive/directory hrefs, flat settings)."""
    if preset.get('_version') == CURRENT_PRESET_VERSION:
        return False
    return 'archiveHref' in preset or 'directoryHref' in preset


def migrate_preset(old: Dict) -> Dict:
    """Convert a v1 preset dict into the current layout."""
    if old.get('_version') == CURRENT_PRESET_VERSION:
        return old

    settings = old.get('filterSettings') or {}
    return {
        'name': old.get('name'),
        'fullPath': (old.get('archiveHref') or '') + (old.get('directoryHref') or ''),
        'pathDisplayName': f"{old.get('archiveName') or ''} / {old.get('directoryName') or ''}",
        'filterSettings': {
            'include_tags': {
                'region': settings.get('includedRegions') or [],
                'language': settings.get('includedLanguages') or [],
                'other': [],
            },
            'exclude_tags': {
                'region': settings.get('excludedRegions') or [],
                'language': settings.get('excludedLanguages') or [],
                'other': [],
            },
            'include_strings': settings.get('includeStrings') or [],
            'exclude_strings': settings.get('excludeStrings') or [],
            'rev_mode': settings.get('releaseRevisionMode') or 'highest',
            'dedupe_mode': settings.get('deduplicateMode') or 'priority',
            'priority_list': settings.get('releaseNamePriorityList') or [],
        },
        '_version': CURRENT_PRESET_VERSION,
    }


class PresetStore:
    """Reads and writes the preset list in a single JSON file."""

    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath or PRESETS_FILE

    def _read(self) -> List[Dict]:
        if not os.path.exists(self.filepath):
            return []
        with open(self.filepath, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise PresetError(f"Preset file {self.filepath} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise PresetError(f"Preset file {self.filepath} must hold a list.")
        return data

    def _write(self, presets: List[Dict]) -> None:
        parent = os.path.dirname(self.filepath)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.filepath, 'w', encoding='utf-8') as f:
            json.dump(presets, f, indent=2, ensure_ascii=False)

    def list(self) -> List[FilterPreset]:
        """All saved presets, migrated to the current layout."""
        return [FilterPreset.from_dict(d) for d in self._read()]

    def get(self, name: str, full_path: Optional[str] = None) -> Optional[FilterPreset]:
        """First preset with this name (and path, when given)."""
        for preset in self.list():
            if preset.name == name and (full_path is None or preset.full_path == full_path):
                return preset
        return None

    def save(self, preset: FilterPreset) -> List[FilterPreset]:
        """Add a preset, replacing one with the same name and path."""
        if not preset.name:
            raise PresetError('Preset has no name.')
        presets = self.list()
        for i, existing in enumerate(presets):
            if existing.key == preset.key:
                presets[i] = preset
                break
        else:
            presets.append(preset)
        self._write([p.to_dict() for p in presets])
        monitor.info('presets', f'Preset saved: {preset.name}')
        return presets

    def delete(self, preset: FilterPreset) -> List[FilterPreset]:
        return self.delete_many([preset])

    def delete_many(self, presets: Iterable[FilterPreset]) -> List[FilterPreset]:
        doomed = {p.key for p in presets}
        remaining = [p for p in self.list() if p.key not in doomed]
        self._write([p.to_dict() for p in remaining])
        monitor.info('presets', f'Presets deleted: {len(doomed)}')
        return remaining

    def import_file(self, source_path: str) -> List[FilterPreset]:
        """
        Merge presets from an exported JSON file into the store.

        Raises:
            PresetError: 'Invalid JSON format.' or 'Invalid filter format.'
        """
        with open(source_path, 'r', encoding='utf-8') as f:
            raw = f.read()
        try:
            imported: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PresetError('Invalid JSON format.') from e

        if not isinstance(imported, list) or not all(
                isinstance(d, dict) and d.get('name') and d.get('filterSettings')
                for d in imported):
            raise PresetError('Invalid filter format.')

        incoming = []
        for d in imported:
            if needs_migration(d):
                monitor.info('presets', f'Migrating imported preset "{d["name"]}" to the current format')
            try:
                incoming.append(FilterPreset.from_dict(d))
            except ValueError as e:
                raise PresetError('Invalid filter format.') from e

        presets = self.list()
        for preset in incoming:
            for i, existing in enumerate(presets):
                if existing.key == preset.key:
                    presets[i] = preset
                    break
            else:
                presets.append(preset)

        self._write([p.to_dict() for p in presets])
        monitor.info('presets', f'Imported {len(incoming)} presets from {source_path}')
        return presets

    def export_file(self, destination_path: str,
                    presets: Optional[Iterable[FilterPreset]] = None) -> str:
        """Write presets (all of them by default) to a JSON file. Returns the path."""
        chosen = list(presets) if presets is not None else self.list()
        parent = os.path.dirname(destination_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(destination_path, 'w', encoding='utf-8') as f:
            json.dump([p.to_dict() for p in chosen], f, indent=2, ensure_ascii=False)
        monitor.info('presets', f'Exported {len(chosen)} presets to {destination_path}')
        return destination_path
