"""Ranges whose bounds grow by powers of a base (default policy).

The first range is [base^(d-1), base^d - 1] where d is the number of
decimal digits of the smallest value. Each following range multiplies
both bounds by the base until the largest value is covered, then one
trailing range closes the list. With base 10 and values {5, 20, 50, 100}
the ranges are [1, 9], [10, 99], [100, 1000].

Suits population or economic indicators spanning several orders of
magnitude. The palette size does not limit the count here; a short
palette fails later when colours are assigned.

Options:
    base  integer base, default 10 (--base on the command line)

Example:
    datamap render data.yaml -o map.png --ranges log --base 10
"""

import math

from datamap.core.errors import DataMapError
from datamap.core.ranges import bounds, digits
from datamap.core.types import Number, Range, RangePolicy

policy = RangePolicy(
    name='log',
    help='Ranges growing by powers of a base (default 10). Best for values spanning orders of magnitude.',
)

DEFAULT_BASE = 10


@policy.allocate
def allocate(values: list[Number], palette_size: int, base: int = DEFAULT_BASE) -> list[Range]:
    if base < 2:
        raise DataMapError(f'Logarithmic base must be at least 2, got {base}')
    low, high = bounds(values)
    last = base ** digits(low)

    ranges = [Range(min(last // base, math.floor(low)), last - 1)]
    while last < high:
        ranges.append(Range(last, last * base - 1))
        last *= base
    ranges.append(Range(last, last * base))
    return ranges
