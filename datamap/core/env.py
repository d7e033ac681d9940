"""Settings from the environment for the datamap CLI.

Sources, first wins:
  1. Variables already set in the OS environment, never overwritten.
  2. The .env file given with --env-file.
  3. The nearest .env walking up from cwd, stopping at a .git boundary.

Only the settings named in ENV_VARS are exported from a .env file; other
keys stay out of os.environ. The library never reads the environment:
the CLI calls load_env() once, then resources_from_env() turns the
variables into Resources overrides.
"""

import logging
import os
from pathlib import Path

from datamap.core.resources import Resources

logger = logging.getLogger(__name__)

PREFIX = 'DATAMAP_'

# Environment variable -> Resources field
ENV_VARS = {
    'DATAMAP_TEMPLATE': 'template',
    'DATAMAP_PALETTE': 'palette',
    'DATAMAP_LANG_DIR': 'lang_dir',
    'DATAMAP_LANG': 'lang',
}


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env in start or its parents; None once a .git marks the project root."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        if (directory / '.git').exists():
            return None
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines, with optional quotes and a leading 'export'."""
    settings: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):]
        key, sep, value = line.partition('=')
        key = key.strip()
        if sep and key:
            settings[key] = value.strip().strip('"').strip("'")
    return settings


def load_env(env_file: str | None = None) -> Path | None:
    """Export the datamap settings of a .env file into os.environ.

    Variables already set are kept. Unknown DATAMAP_* keys are reported
    and skipped. Returns the file used, or None when there was none.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None

    for key, value in _parse_dotenv(path).items():
        if key in ENV_VARS:
            os.environ.setdefault(key, value)
        elif key.startswith(PREFIX):
            logger.warning('Ignoring unknown setting %s in %s', key, path)
    return path


def resources_from_env(base: Resources) -> Resources:
    """Apply the DATAMAP_* variables on top of base. Empty values count as unset."""
    overrides = {field: os.environ.get(var) or None for var, field in ENV_VARS.items()}
    return base.with_overrides(**overrides)
