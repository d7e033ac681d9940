"""Range helpers shared by the allocation policies and the painter.

Ranges are generated in ascending order and must not overlap; lookups
walk them in that order and the first range containing a value wins.
"""

from collections.abc import Iterable, Sequence

from datamap.core.errors import DataMapError, PaletteCapacityError, RangeFitError
from datamap.core.palette import RGB, rgb_to_hex
from datamap.core.types import Number, Range


def digits(value: Number) -> int:
    """Number of decimal digits in the integer part of |value|."""
    return len(str(int(abs(value))))


def bounds(values: Iterable[Number]) -> tuple[Number, Number]:
    """Return (min, max) of the values. Raises DataMapError when there are none."""
    ordered = sorted(values)
    if not ordered:
        raise DataMapError('Cannot compute ranges without data')
    return ordered[0], ordered[-1]


def find_range(ranges: Sequence[Range], value: Number) -> Range | None:
    for r in ranges:
        if r.contains(value):
            return r
    return None


def fit(ranges: Sequence[Range], code: str, value: Number) -> Range:
    """Return the range holding value, or raise RangeFitError."""
    r = find_range(ranges, value)
    if r is None:
        raise RangeFitError(code, value)
    return r


def assign_colors(ranges: Sequence[Range], palette: Sequence[RGB]) -> None:
    """Give ranges[i] the colour palette[i]. Fails before touching anything if the palette is short."""
    if len(ranges) > len(palette):
        raise PaletteCapacityError(len(ranges), len(palette))
    for r, rgb in zip(ranges, palette):
        r.color = rgb_to_hex(rgb)
