"""
Command-line interface for romsift
"""

import argparse
import json
import logging
import sys

from . import __version__
from .listing import ListingError, OUTPUT_FORMATS, format_entries, load_listing, save_entries
from .models import CategoryTags, CriteriaError, FilterCriteria, DEDUPE_MODES, REVISION_MODES
from .monitor import setup_monitoring, log_event
from .pipeline import FilterPipeline
from .presets import FilterPreset, PresetError, PresetStore
from .settings import build_vocabulary, default_criteria, load_settings, DEFAULT_SETTINGS_PATH
from .tagger import TagExtractor
from .taxonomy import build_taxonomy, count_tags
from .utils import format_size, parse_size, truncate_string


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser"""
    parser = argparse.ArgumentParser(
        prog='romsift',
        description='romsift - Filter archive listings down to a curated download list',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s --listing snes.json --taxonomy
  %(prog)s --listing snes.json --include-region USA --include-region Europe --rev-mode highest
  %(prog)s --listing snes.json --dedupe-mode priority --priority USA --priority Europe --format urls
  %(prog)s --listing snes.json --preset "1G1R USA" --output picks.txt --format txt
  %(prog)s --criteria my.json --save-preset "1G1R USA" --preset-path "No-Intro/SNES/"
  %(prog)s --web
        '''
    )

    parser.add_argument('--web', action='store_true', help='Launch the web API')

    filter_group = parser.add_argument_group('Filtering')

    filter_group.add_argument('--listing', '-l', type=str,
                              help='JSON listing of {name, href, size} entries')
    base_source = filter_group.add_mutually_exclusive_group()
    base_source.add_argument('--criteria', '-c', type=str,
                             help='JSON file with filter criteria')
    base_source.add_argument('--preset', '-p', type=str, metavar='NAME',
                             help='Use a saved preset as the starting criteria')
    filter_group.add_argument('--preset-path', type=str, default=None,
                              help='Archive path that identifies the preset (with --preset/--save-preset)')

    for verb in ('include', 'exclude'):
        for category in ('region', 'language', 'other'):
            filter_group.add_argument(
                f'--{verb}-{category}', type=str, action='append', default=[], metavar='TAG',
                help=f'{verb.capitalize()} {category} tag (repeatable)')
        filter_group.add_argument(
            f'--{verb}-string', type=str, action='append', default=[], metavar='TEXT',
            help=f'{verb.capitalize()} names containing TEXT, case-insensitive (repeatable)')

    filter_group.add_argument('--rev-mode', type=str, choices=REVISION_MODES,
                              help='Revision selection (default: from criteria, else all)')
    filter_group.add_argument('--dedupe-mode', type=str, choices=DEDUPE_MODES,
                              help='Variant dedupe (default: from criteria, else all)')
    filter_group.add_argument('--priority', type=str, action='append', default=[], metavar='TAG',
                              help='Priority list entry, most preferred first (repeatable)')

    output_group = parser.add_argument_group('Output')

    output_group.add_argument('--taxonomy', action='store_true',
                              help='Show the tags found in the listing instead of filtering')
    output_group.add_argument('--output', '-o', type=str,
                              help='Write the result to a file instead of stdout')
    output_group.add_argument('--format', '-f', type=str, choices=OUTPUT_FORMATS, default=None,
                              help='Output format (default: from settings, json)')
    output_group.add_argument('--quiet', '-q', action='store_true',
                              help='Suppress the summary')

    preset_group = parser.add_argument_group('Presets')

    preset_group.add_argument('--presets-file', type=str, default=None,
                              help='Preset store (default: ~/.romsift/filters.json)')
    preset_group.add_argument('--list-presets', action='store_true', help='List saved presets')
    preset_group.add_argument('--save-preset', type=str, metavar='NAME',
                              help='Save the effective criteria as a preset')
    preset_group.add_argument('--delete-preset', type=str, metavar='NAME', help='Delete a preset')
    preset_group.add_argument('--import-presets', type=str, metavar='PATH',
                              help='Merge presets from an exported JSON file')
    preset_group.add_argument('--export-presets', type=str, metavar='PATH',
                              help='Export all presets to a JSON file')

    misc_group = parser.add_argument_group('Misc')

    misc_group.add_argument('--settings-file', type=str, default=DEFAULT_SETTINGS_PATH,
                            help='Settings JSON (default: ~/.romsift/settings.json)')
    misc_group.add_argument('--monitor', action='store_true',
                            help='Echo log events to stderr while running')
    misc_group.add_argument('--monitor-file', type=str,
                            help='Custom event log path (default: ~/.romsift/logs/events.log)')

    parser.add_argument('--version', '-v', action='version', version=f'%(prog)s {__version__}')

    return parser


def build_criteria(args, base: FilterCriteria) -> FilterCriteria:
    """Layer command-line overrides on top of base criteria."""
    def merged(tags: CategoryTags, verb: str) -> CategoryTags:
        return CategoryTags(
            region=tags.region | frozenset(getattr(args, f'{verb}_region')),
            language=tags.language | frozenset(getattr(args, f'{verb}_language')),
            other=tags.other | frozenset(getattr(args, f'{verb}_other')),
        )

    return FilterCriteria(
        include_tags=merged(base.include_tags, 'include'),
        exclude_tags=merged(base.exclude_tags, 'exclude'),
        include_strings=base.include_strings + tuple(args.include_string),
        exclude_strings=base.exclude_strings + tuple(args.exclude_string),
        rev_mode=args.rev_mode or base.rev_mode,
        dedupe_mode=args.dedupe_mode or base.dedupe_mode,
        priority_list=tuple(args.priority) if args.priority else base.priority_list,
    )


def run_cli(args=None):
    """Run the CLI"""
    parser = create_parser()
    args = parser.parse_args(args)

    setup_monitoring(log_file=args.monitor_file, echo=args.monitor)

    if args.web:
        from .web import run_server
        run_server()
        return 0

    log_event('cli.start', 'CLI execution started')
    settings = load_settings(args.settings_file)
    store = PresetStore(args.presets_file)

    quiet = args.quiet

    def log(msg):
        if not quiet:
            print(msg, file=sys.stderr)

    try:
        if args.import_presets:
            presets = store.import_file(args.import_presets)
            log(f"Imported presets. {len(presets)} presets saved.")
            return 0

        if args.export_presets:
            store.export_file(args.export_presets)
            log(f"Presets exported to: {args.export_presets}")
            return 0

        if args.list_presets:
            return _list_presets(store)

        if args.delete_preset:
            return _delete_preset(store, args.delete_preset, args.preset_path)

        base = default_criteria(settings)
        if args.criteria:
            base = _load_criteria_file(args.criteria)
        elif args.preset:
            preset = store.get(args.preset, args.preset_path)
            if preset is None:
                log_event('cli.error', f'Preset not found: {args.preset}', logging.ERROR)
                print(f"Error: preset not found: {args.preset}", file=sys.stderr)
                return 1
            base = preset.filter_settings
        criteria = build_criteria(args, base)

        if args.save_preset:
            store.save(FilterPreset(
                name=args.save_preset,
                full_path=args.preset_path or '',
                path_display_name=args.preset_path or '',
                filter_settings=criteria,
            ))
            log(f"Preset saved: {args.save_preset}")
            if not args.listing:
                return 0

        if not args.listing:
            parser.print_help()
            print("\nError: --listing is required for filtering.", file=sys.stderr)
            return 1

        records = load_listing(args.listing)
        entries = TagExtractor(build_vocabulary(settings)).extract_listing(records)
        log_event('listing.load', f'Loaded {len(entries)} entries from {args.listing}')

        if args.taxonomy:
            return _show_taxonomy(entries, args)

        result = FilterPipeline().run(entries, criteria)
        log_event('filter.done', f'Kept {len(result)} of {len(entries)} entries')

        fmt = args.format or settings.get('output', {}).get('format', 'json')
        if args.output:
            save_entries(result, args.output, fmt)
            log(f"Result saved to: {args.output}")
        else:
            sys.stdout.write(format_entries(result, fmt))
    except (CriteriaError, ListingError, PresetError, OSError) as e:
        log_event('cli.error', str(e), logging.ERROR)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    total_size = sum(parse_size(e.size) for e in result)
    log(f"Kept {len(result):,} of {len(entries):,} entries ({format_size(total_size)})")
    if not result:
        log("No entries matched the criteria.")
    return 0


def _load_criteria_file(path):
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CriteriaError(f"{path} is not valid JSON: {e}") from e
    # accept a bare criteria object or an exported preset
    if isinstance(data, dict) and 'filterSettings' in data:
        return FilterPreset.from_dict(data).filter_settings
    return FilterCriteria.from_dict(data)


def _list_presets(store):
    presets = store.list()
    if not presets:
        print("No saved presets.")
        return 0
    for p in presets:
        c = p.filter_settings
        where = f" [{p.path_display_name or p.full_path}]" if (p.path_display_name or p.full_path) else ""
        print(f"{p.name}{where}: rev={c.rev_mode} dedupe={c.dedupe_mode} "
              f"priority={','.join(c.priority_list) or '-'}")
    return 0


def _delete_preset(store, name, full_path):
    preset = store.get(name, full_path)
    if preset is None:
        print(f"Error: preset not found: {name}", file=sys.stderr)
        return 1
    store.delete(preset)
    print(f"Preset deleted: {name}")
    return 0


def _show_taxonomy(entries, args):
    taxonomy = build_taxonomy(entries)
    if args.format == 'json':
        print(json.dumps(taxonomy, indent=2, ensure_ascii=False))
        return 0

    counts = count_tags(entries)
    for category, values in taxonomy.items():
        print(f"{category} ({len(values)}):")
        for value in values:
            print(f"  {truncate_string(value, 60):<60} {counts[category][value]:>6,}")
    return 0


def main():
    """Entry point"""
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
