"""datamap — choropleth world maps from country code -> value data.

Usage: datamap render <data> -o <output> [options]

Range policies are auto-discovered from datamap/policies/.
Each policy module's docstring is its documentation.
Run `datamap help <policy>` for full module docs.

Environment variables / .env loading:
  DATAMAP_TEMPLATE, DATAMAP_PALETTE, DATAMAP_LANG and DATAMAP_LANG_DIR
  replace the bundled template, palette, language and dictionary folder.
  OS environment variables are always used first.
  If a variable is not set, datamap looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path

import yaml

from datamap import registry
from datamap.core.env import load_env, resources_from_env
from datamap.core.errors import DataMapError
from datamap.core.report import format_json, format_text
from datamap.core.resources import available_languages, default_resources, load_names
from datamap.world_map import WorldMap

logger = logging.getLogger('datamap')


def _load_policy_module(name: str) -> object:
    """Load the raw module for a policy (for docstring access)."""
    return importlib.import_module(f'datamap.policies.{name}')


def _short_doc(name: str) -> str:
    doc = (_load_policy_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else registry.get(name).help


def _build_parser() -> argparse.ArgumentParser:
    policies = registry.all_policies()

    epilog = (
        'Examples:\n'
        '  datamap render population.yaml -o map.svg\n'
        '  datamap render population.yaml -o map.png --size 1024x768 --quality 80\n'
        '  datamap render gdp.json -o map.svg --ranges linear --title "GDP" --json\n'
        '  datamap render data.yaml -o map.svg --js dom.js --js effects.js --lang pt-BR\n'
        '  datamap countries --lang es\n'
        '  datamap help log\n'
    )
    parser = argparse.ArgumentParser(
        prog='datamap',
        description='Colour an SVG world map from country code -> value data.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log each step')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    p = sub.add_parser('render', help='Render a map from a YAML/JSON mapping of country code -> value')
    p.add_argument('data', help='YAML or JSON file mapping country codes to numbers')
    p.add_argument('-o', '--output', default='output.svg', help='Output file; extension picks the format')
    p.add_argument('-t', '--title', default=None, help='Title drawn above the map')
    p.add_argument('-l', '--lang', default=None, help='Language for names and legend (default: en)')
    p.add_argument('--palette', default=None, help='Palette file, one "R G B" per line')
    p.add_argument('--template', default=None, help='SVG template with class="land <code>" shapes')
    p.add_argument(
        '-r',
        '--ranges',
        default=registry.DEFAULT_POLICY,
        choices=sorted(policies),
        help=f'Range policy (default: {registry.DEFAULT_POLICY})',
    )
    p.add_argument('-b', '--base', type=int, default=10, help='Base for the log policy (default: 10)')
    p.add_argument('--js', action='append', default=[], metavar='FILE', help='Script to reference (repeatable)')
    p.add_argument('-s', '--size', default=None, help='Raster geometry such as 1024x768, 1024x or x768')
    p.add_argument('-q', '--quality', type=int, default=100, help='Raster quality 0-100 (default: 100)')
    p.add_argument('--strict', action='store_true', help='Fail if a data code has no shape in the template')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    c = sub.add_parser('countries', help='List country codes and names for a language')
    c.add_argument('-l', '--lang', default=None, help='Language (default: en)')

    help_parser = sub.add_parser('help', help='Print full docs for a range policy')
    help_parser.add_argument('policy', nargs='?', help='Policy name')

    return parser


def _print_help(name: str | None) -> None:
    """Print full module docstring for a policy."""
    policies = registry.all_policies()

    if name is None:
        print('Available range policies:\n')
        for pname in sorted(policies):
            print(f'  {pname:<10} {_short_doc(pname)}')
        print('\nRun: datamap help <policy> for full docs.')
        return

    if name not in policies:
        print(f'Unknown policy: {name}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(policies))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_policy_module(name).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {name!r})')
        return
    print(doc)


def load_data(path: str | Path) -> dict[str, int | float]:
    """Read a code -> number mapping from YAML (JSON is valid YAML)."""
    path = Path(path)
    if not path.is_file():
        raise DataMapError(f'Data file not found: {path}')
    with open(path, encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise DataMapError(f'{path} must contain a mapping of country code to value')

    data = {}
    for code, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataMapError(f'Value for {code!r} in {path} is not a number: {value!r}')
        data[str(code)] = value
    return data


def _render(args: argparse.Namespace) -> None:
    resources = resources_from_env(default_resources()).with_overrides(
        template=args.template,
        palette=args.palette,
        lang=args.lang,
    )
    m = WorldMap(data=load_data(args.data), js=args.js, resources=resources)
    if args.title:
        m.title = args.title

    options = {'base': args.base} if args.ranges == 'log' else {}
    report = m.render(
        args.output,
        policy=args.ranges,
        size=args.size,
        quality=args.quality,
        strict=args.strict,
        **options,
    )

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


def _list_countries(args: argparse.Namespace) -> None:
    resources = resources_from_env(default_resources()).with_overrides(lang=args.lang)
    if resources.lang not in available_languages(resources.lang_dir):
        langs = ', '.join(available_languages(resources.lang_dir))
        raise DataMapError(f'Unknown language: {resources.lang}. Available: {langs}')
    for code, name in sorted(load_names(resources.lang, resources.lang_dir).items()):
        print(f'{code:<6} {name}')


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    # .env first; OS variables always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        logger.info('loaded %s', env_path)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.policy)
        return

    try:
        if args.command == 'countries':
            _list_countries(args)
        else:
            _render(args)
    except DataMapError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
