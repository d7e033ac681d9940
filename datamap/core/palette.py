"""Palette files and colour conversions.

A palette file holds one colour per line as three whitespace-separated
integers (red, green, blue) in 0-255. Blank lines and '#' comments are
skipped. Colours are handed out in file order.
"""

import io
import logging
from pathlib import Path

import numpy as np

from datamap.core.errors import PaletteError, ResourceNotFoundError

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


def load_palette(path: str | Path) -> list[RGB]:
    """Read a palette file into a list of (r, g, b) tuples."""
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f'Palette not found: {path}')
    text = path.read_text(encoding='utf-8')
    if not text.strip():
        return []

    try:
        arr = np.loadtxt(io.StringIO(text), dtype=int, ndmin=2)
    except ValueError as e:
        raise PaletteError(f'Malformed palette {path}: {e}') from e

    if arr.shape[1] != 3:
        raise PaletteError(f'Palette {path} must have 3 values per line, found {arr.shape[1]}')
    if arr.min() < 0 or arr.max() > 255:
        raise PaletteError(f'Palette {path} has values outside 0-255')

    colours = [(int(r), int(g), int(b)) for r, g, b in arr]
    logger.debug('Loaded %d colours from %s', len(colours), path)
    return colours


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f'#{r:02x}{g:02x}{b:02x}'
