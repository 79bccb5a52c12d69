"""
Web API for romsift using Flask.
Exposes filtering, tag taxonomy and preset management to a browser front end.
"""

import os

from flask import Flask, jsonify, request

from . import __version__, shared_config
from .listing import ListingError, validate_listing
from .monitor import get_log_path, setup_runtime_monitor, monitor_action
from .pipeline import FilterManager
from .presets import FilterPreset, PresetStore
from .settings import build_vocabulary, load_settings
from .shared_config import CATEGORY_LABELS, DEDUPE_MODE_CHOICES, REVISION_MODE_CHOICES
from .tagger import TagExtractor
from .taxonomy import build_taxonomy

# Flask app
app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 64 * 1024 * 1024  # listings can be large

# Global state
_settings = load_settings()
state = {
    'vocabulary': build_vocabulary(_settings),
    'preset_store': PresetStore(),
}


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ── Filtering API ──────────────────────────────────────────────

@app.route('/api/status')
def api_status():
    return jsonify({
        'version': __version__,
        'categories': CATEGORY_LABELS,
        'rev_modes': REVISION_MODE_CHOICES,
        'dedupe_modes': DEDUPE_MODE_CHOICES,
    })


@app.route('/api/filter', methods=['POST'])
def api_filter():
    """Filter a listing: {files: [...], filters: {...}} -> {data: [...]}"""
    data = _json_body()
    manager = FilterManager(state['vocabulary'])
    result = manager.filter_files(data.get('files'), data.get('filters'))
    if 'error' in result:
        return jsonify(result), 400
    monitor_action(f"filter: kept {len(result['data'])} entries")
    return jsonify(result)


@app.route('/api/taxonomy', methods=['POST'])
def api_taxonomy():
    """Tags found in a listing: {files: [...]} -> {data: {Region, Language, Other}}"""
    data = _json_body()
    try:
        records = validate_listing(data.get('files'))
    except ListingError as e:
        return jsonify({'error': str(e)}), 400
    entries = TagExtractor(state['vocabulary']).extract_listing(records)
    return jsonify({'data': build_taxonomy(entries)})


# ── Presets API ────────────────────────────────────────────────

@app.route('/api/presets')
def api_presets_list():
    try:
        presets = state['preset_store'].list()
    except ValueError as e:
        return jsonify({'error': str(e)}), 500
    return jsonify({'data': [p.to_dict() for p in presets]})


@app.route('/api/presets', methods=['POST'])
def api_presets_save():
    try:
        preset = FilterPreset.from_dict(_json_body())
        presets = state['preset_store'].save(preset)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': [p.to_dict() for p in presets]})


@app.route('/api/presets/delete', methods=['POST'])
def api_presets_delete():
    data = _json_body()
    raw = data.get('presets')
    if raw is None:
        raw = [data]
    if not isinstance(raw, list):
        return jsonify({'error': 'presets must be a list'}), 400
    try:
        targets = [FilterPreset.from_dict(d) for d in raw]
        presets = state['preset_store'].delete_many(targets)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': [p.to_dict() for p in presets]})


def _app_data_path(raw: str) -> str:
    """
    Resolve a preset import/export path inside the app data directory.

    Relative paths are taken relative to it; anything resolving outside it
    raises ValueError.
    """
    root = os.path.realpath(shared_config.APP_DATA_DIR)
    path = os.path.realpath(os.path.join(root, raw))
    if os.path.commonpath([root, path]) != root:
        raise ValueError(f'path must be inside {root}')
    return path


@app.route('/api/presets/import', methods=['POST'])
def api_presets_import():
    raw = _json_body().get('path', '')
    if not raw or not isinstance(raw, str):
        return jsonify({'error': 'path required'}), 400
    try:
        path = _app_data_path(raw)
        presets = state['preset_store'].import_file(path)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except OSError as e:
        return jsonify({'error': f'Failed to import filters: {e}'}), 400
    return jsonify({'data': [p.to_dict() for p in presets]})


@app.route('/api/presets/export', methods=['POST'])
def api_presets_export():
    raw = _json_body().get('path', '')
    if not raw or not isinstance(raw, str):
        return jsonify({'error': 'path required'}), 400
    try:
        path = _app_data_path(raw)
        state['preset_store'].export_file(path)
    except (OSError, ValueError) as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'success': True, 'path': path})


def run_server(host: str = None, port: int = None):
    """Run the web server"""
    logger = setup_runtime_monitor()
    web_settings = _settings.get('web', {})
    host = host or web_settings.get('host', '127.0.0.1')
    port = port or web_settings.get('port', 5000)
    monitor_action(f"web server starting on {host}:{port}", logger=logger)
    print(f"romsift web API on http://{host}:{port}")
    print(f"Runtime log: {get_log_path()}")
    app.run(host=host, port=port, debug=False, threaded=True)
