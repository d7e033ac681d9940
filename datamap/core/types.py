"""Shared types for datamap: Range, LegendEntry, RangePolicy, RenderReport."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

Number = int | float


@dataclass
class Range:
    """A closed interval of values painted with one colour.

    Bounds are integers. A fractional value belongs to the range holding its
    integer part, so [1, 9] takes 9.5 and the next range starts at 10.
    """

    low: Number
    high: Number
    color: str | None = None  # '#rrggbb' once colours are assigned

    def contains(self, value: Number) -> bool:
        return self.low <= value and math.floor(value) <= self.high

    def as_dict(self) -> dict[str, Any]:
        return {'range': [self.low, self.high], 'color': self.color}


@dataclass
class LegendEntry:
    """One legend row. bounds is None for the 'no data' row."""

    label: str
    color: str
    y: int
    bounds: tuple[Number, Number] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            'label': self.label,
            'color': self.color,
            'y': self.y,
            'bounds': list(self.bounds) if self.bounds else None,
        }


class RangePolicy:
    """A self-registering range allocation policy.

    Usage in a policy module:

        policy = RangePolicy(name='log', help='Ranges growing by powers of a base')

        @policy.allocate
        def allocate(values, palette_size, base=10):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._allocate_fn: Callable | None = None

    def allocate(self, fn: Callable) -> Callable:
        """Decorator to register the allocation function."""
        self._allocate_fn = fn
        return fn

    def execute(self, values: Iterable[Number], palette_size: int, **options: Any) -> list[Range]:
        """Compute ranges covering every value."""
        if self._allocate_fn is None:
            raise RuntimeError(f'Policy {self.name} has no allocate function')
        return self._allocate_fn(list(values), palette_size, **options)


@dataclass
class RenderReport:
    """Accumulates what a render did for text/JSON output."""

    output_path: str = ''
    lang: str = ''
    policy: str | None = None
    title: str | None = None
    ranges: list[Range] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    painted: dict[str, str] = field(default_factory=dict)  # code -> colour
    unmatched: list[str] = field(default_factory=list)  # data codes with no element
    unlabeled: list[str] = field(default_factory=list)  # dictionary codes with no element

    def record_paint(self, code: str, color: str) -> None:
        self.painted[code] = color

    def record_unmatched(self, code: str) -> None:
        if code not in self.unmatched:
            self.unmatched.append(code)
