"""Locating and loading templates, palettes and language dictionaries.

Nothing here reads the environment: callers build a Resources value (or
take default_resources(), which points at the bundled package data) and
pass it in. Files are opened per call and closed straight away.

Language dictionaries live under <lang_dir>/<lang>/:
  countries.yml  country code -> display name
  strings.yml    legend phrasing: between, and, no_data
"""

import logging
from dataclasses import dataclass, replace
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml

from datamap.core.errors import DataMapError, ResourceNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'en'

STRING_KEYS = ('between', 'and', 'no_data')


@dataclass(frozen=True)
class Resources:
    """Where the default template, palette and language files are."""

    template: Path
    palette: Path
    lang_dir: Path
    lang: str = DEFAULT_LANGUAGE

    def with_overrides(self, **changes: Any) -> 'Resources':
        """Copy with the non-None changes applied."""
        fields = {k: v for k, v in changes.items() if v is not None}
        for key in ('template', 'palette', 'lang_dir'):
            if key in fields:
                fields[key] = Path(fields[key])
        return replace(self, **fields)


def data_dir() -> Path:
    return Path(str(importlib_resources.files('datamap') / 'data'))


def default_resources() -> Resources:
    """Resources pointing at the data shipped inside the package."""
    root = data_dir()
    return Resources(
        template=root / 'templates' / 'default_world_map.svg',
        palette=root / 'palettes' / 'tango.color',
        lang_dir=root / 'lang',
    )


def load_template(path: str | Path) -> str:
    """Read an SVG template verbatim (no newline translation)."""
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f'Template not found: {path}')
    with open(path, encoding='utf-8', newline='') as f:
        return f.read()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ResourceNotFoundError(f'Language file not found: {path}')
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise DataMapError(f'{path} must contain a mapping')
    return {str(k): v for k, v in data.items()}


def load_names(lang: str, lang_dir: str | Path) -> dict[str, str]:
    """Country code -> display name for a language."""
    names = _load_yaml(Path(lang_dir) / lang / 'countries.yml')
    logger.debug('Loaded %d country names for %s', len(names), lang)
    return {code: str(name) for code, name in names.items()}


def load_strings(lang: str, lang_dir: str | Path) -> dict[str, str]:
    """Legend phrasing for a language. All of STRING_KEYS must be present."""
    path = Path(lang_dir) / lang / 'strings.yml'
    strings = _load_yaml(path)
    missing = [k for k in STRING_KEYS if k not in strings]
    if missing:
        raise DataMapError(f'{path} is missing: {", ".join(missing)}')
    return {k: str(v) for k, v in strings.items()}


def available_languages(lang_dir: str | Path) -> list[str]:
    root = Path(lang_dir)
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if (p / 'countries.yml').is_file())
