"""Equal-width ranges sized from the spread of the data and the palette.

The width is (max - min) // colours + 1, then rounded up on its leading
digit: 37 becomes 40, 21 becomes 30, 4 becomes 5. The first range runs
from 1 (or from the floor of min when min is below 1) up to the first
boundary, further ranges of that width follow until max is covered, and
one trailing range closes the list. When min is above the first width
the leading range only holds values below the data, so the list can
reach colours + 2 entries.

Good for data that stays within one order of magnitude.

Example:
    datamap render data.yaml -o map.svg --ranges linear
"""

import math

from datamap.core.ranges import bounds, digits
from datamap.core.types import Number, Range, RangePolicy

policy = RangePolicy(
    name='linear',
    help='Equal-width ranges rounded on the leading digit. One colour per range.',
)


def step_width(low: Number, high: Number, palette_size: int) -> int:
    """Range width for data spanning [low, high] painted with palette_size colours."""
    step = int((high - low) // max(palette_size, 1)) + 1
    magnitude = 10 ** (digits(step) - 1)
    return (step // magnitude + 1) * magnitude


@policy.allocate
def allocate(values: list[Number], palette_size: int) -> list[Range]:
    low, high = bounds(values)
    offset = step_width(low, high, palette_size)
    floor = math.floor(low)
    last = max(offset, floor)

    ranges = [Range(min(1, floor), last - 1)]
    while last < high:
        ranges.append(Range(last, last + offset - 1))
        last += offset
    ranges.append(Range(last, last + offset))
    return ranges
