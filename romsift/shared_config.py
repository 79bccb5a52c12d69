"""
Shared configuration: app-local paths and the labels front ends show.
"""

import os

# Category labels for taxonomy checkboxes, keyed by the criteria field name
CATEGORY_LABELS = {
    'region': 'Region',
    'language': 'Language',
    'other': 'Other',
}

REVISION_MODE_CHOICES = [
    {'id': 'all', 'name': 'All revisions', 'desc': 'Keep every revision'},
    {'id': 'highest', 'name': 'Highest', 'desc': 'Newest revision of each release'},
    {'id': 'lowest', 'name': 'Lowest', 'desc': 'Original revision of each release'},
]

DEDUPE_MODE_CHOICES = [
    {'id': 'all', 'name': 'Keep all', 'desc': 'Keep every variant'},
    {'id': 'priority', 'name': 'Priority', 'desc': 'One variant per title, chosen by the priority list'},
]

# App data directory; ROMSIFT_HOME relocates everything
APP_DATA_DIR = os.environ.get('ROMSIFT_HOME') or os.path.expanduser('~/.romsift')
LOGS_DIR = os.path.join(APP_DATA_DIR, 'logs')
PRESETS_FILE = os.path.join(APP_DATA_DIR, 'filters.json')
SETTINGS_FILE = os.path.join(APP_DATA_DIR, 'settings.json')


def ensure_app_directories() -> None:
    """Create required app-local directories at startup."""
    for path in (APP_DATA_DIR, LOGS_DIR):
        os.makedirs(path, exist_ok=True)
