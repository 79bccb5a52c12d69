"""Application settings for romsift."""
from __future__ import annotations

import json
import os
from copy import deepcopy
from typing import Any, Dict

from .models import FilterCriteria
from .monitor import monitor
from .shared_config import SETTINGS_FILE
from .vocabulary import DEFAULT_VOCABULARY, TagVocabulary

DEFAULT_SETTINGS_PATH = SETTINGS_FILE

DEFAULT_SETTINGS: Dict[str, Any] = {
    "vocabulary": {
        "extra_regions": [],
        "extra_languages": [],
        "region_aliases": {},
        "language_aliases": {},
        "revision_patterns": [],
    },
    "default_criteria": {
        "include_tags": {"region": [], "language": [], "other": []},
        "exclude_tags": {"region": [], "language": [], "other": []},
        "include_strings": [],
        "exclude_strings": [],
        "rev_mode": "all",
        "dedupe_mode": "all",
        "priority_list": [],
    },
    "output": {
        "format": "json",
    },
    "web": {
        "host": "127.0.0.1",
        "port": 5000,
    },
}


def _deep_merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    out = deepcopy(base)
    for k, v in (updates or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = deepcopy(v)
    return out


def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        return deepcopy(DEFAULT_SETTINGS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        monitor.warning("settings", f"Could not read {path}, using defaults: {e}")
        return deepcopy(DEFAULT_SETTINGS)
    if not isinstance(data, dict):
        monitor.warning("settings", f"Ignoring {path}: expected a JSON object")
        return deepcopy(DEFAULT_SETTINGS)
    return _deep_merge(DEFAULT_SETTINGS, data)


def save_settings(settings: Dict[str, Any], path: str = DEFAULT_SETTINGS_PATH) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, ensure_ascii=False, indent=2)


def build_vocabulary(settings: Dict[str, Any]) -> TagVocabulary:
    """Default vocabulary extended with the values configured under 'vocabulary'."""
    vocab = settings.get("vocabulary", {})
    if not any(vocab.get(k) for k in DEFAULT_SETTINGS["vocabulary"]):
        return DEFAULT_VOCABULARY
    return DEFAULT_VOCABULARY.extended(
        regions=vocab.get("extra_regions", []),
        languages=vocab.get("extra_languages", []),
        region_aliases=vocab.get("region_aliases", {}),
        language_aliases=vocab.get("language_aliases", {}),
        revision_patterns=vocab.get("revision_patterns", []),
    )


def default_criteria(settings: Dict[str, Any]) -> FilterCriteria:
    """Criteria to start from when no preset or criteria file is given."""
    return FilterCriteria.from_dict(settings.get("default_criteria"))
