import json
import os
import tempfile

import pytest

from romsift.cli import run_cli

LISTING = [
    {'name': 'Alpha (USA).zip', 'href': 'Alpha%20(USA).zip', 'size': '1.0 MiB'},
    {'name': 'Alpha (USA) (Rev 1).zip', 'href': 'Alpha%20(USA)%20(Rev%201).zip', 'size': '1.0 MiB'},
    {'name': 'Alpha (Europe).zip', 'href': 'Alpha%20(Europe).zip', 'size': '1.0 MiB'},
    {'name': 'Beta (Japan).zip', 'href': 'Beta%20(Japan).zip', 'size': '512 KiB'},
]


def _write_listing(tmp, data=LISTING):
    path = os.path.join(tmp, 'listing.json')
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f)
    return path


def test_filter_to_stdout(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        code = run_cli([
            '--listing', listing, '--presets-file', os.path.join(tmp, 'filters.json'),
            '--rev-mode', 'highest', '--dedupe-mode', 'priority', '--priority', 'USA',
            '--format', 'txt',
        ])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == 'Alpha (USA) (Rev 1).zip\nBeta (Japan).zip\n'
    assert 'Kept 2 of 4 entries' in captured.err


def test_include_region_writes_urls_file(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        output = os.path.join(tmp, 'out', 'picks.txt')
        code = run_cli([
            '--listing', listing, '--presets-file', os.path.join(tmp, 'filters.json'),
            '--include-region', 'europe', '--format', 'urls', '--output', output, '--quiet',
        ])

        with open(output, 'r', encoding='utf-8') as f:
            content = f.read()

    captured = capsys.readouterr()
    assert code == 0
    assert content == 'Alpha%20(Europe).zip\n'
    assert captured.out == ''
    assert captured.err == ''


def test_taxonomy_as_json(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        code = run_cli(['--listing', listing, '--taxonomy', '--format', 'json'])

    assert code == 0
    taxonomy = json.loads(capsys.readouterr().out)
    assert taxonomy == {'Region': ['Europe', 'Japan', 'USA'], 'Language': [], 'Other': []}


def test_missing_listing_is_an_error(capsys):
    assert run_cli([]) == 1
    assert '--listing is required' in capsys.readouterr().err


def test_malformed_listing_is_an_error(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp, [{'href': 'no-name.zip'}])
        code = run_cli(['--listing', listing])

    assert code == 1
    assert "Error: entry 0 has no 'name'" in capsys.readouterr().err


def test_malformed_criteria_file_is_an_error(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        criteria = os.path.join(tmp, 'criteria.json')
        with open(criteria, 'w', encoding='utf-8') as f:
            json.dump({'rev_mode': 'newest'}, f)

        code = run_cli(['--listing', listing, '--criteria', criteria])

    assert code == 1
    assert 'rev_mode must be one of' in capsys.readouterr().err


def test_save_list_and_use_preset(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        presets = os.path.join(tmp, 'filters.json')

        assert run_cli([
            '--presets-file', presets, '--save-preset', 'Japan only',
            '--include-region', 'Japan', '--preset-path', 'No-Intro/SNES/',
        ]) == 0
        assert run_cli(['--presets-file', presets, '--list-presets']) == 0
        listed = capsys.readouterr().out
        assert 'Japan only [No-Intro/SNES/]: rev=all dedupe=all priority=-' in listed

        code = run_cli([
            '--listing', listing, '--presets-file', presets,
            '--preset', 'Japan only', '--format', 'txt', '-q',
        ])
        assert code == 0
        assert capsys.readouterr().out == 'Beta (Japan).zip\n'

        assert run_cli(['--presets-file', presets, '--delete-preset', 'Japan only']) == 0
        assert run_cli(['--presets-file', presets, '--list-presets']) == 0
        assert 'No saved presets.' in capsys.readouterr().out


def test_unknown_preset_is_an_error(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        code = run_cli([
            '--listing', listing, '--presets-file', os.path.join(tmp, 'filters.json'),
            '--preset', 'missing',
        ])

    assert code == 1
    assert 'preset not found: missing' in capsys.readouterr().err


def test_criteria_file_and_preset_are_mutually_exclusive(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        listing = _write_listing(tmp)
        criteria = os.path.join(tmp, 'criteria.json')
        with open(criteria, 'w', encoding='utf-8') as f:
            json.dump({'rev_mode': 'highest'}, f)

        with pytest.raises(SystemExit) as exc:
            run_cli(['--listing', listing, '--criteria', criteria, '--preset', 'Japan only'])

    assert exc.value.code == 2
    assert 'not allowed with argument' in capsys.readouterr().err
