"""datamap — choropleth world maps from country code -> value mappings."""

from datamap.core.errors import (
    DataMapError,
    ExportError,
    PaletteCapacityError,
    PaletteError,
    RangeFitError,
    ResourceNotFoundError,
    TemplateMarkerError,
    UnmatchedCountryError,
)
from datamap.core.resources import Resources, default_resources
from datamap.core.types import LegendEntry, Range, RenderReport
from datamap.world_map import WorldMap

__all__ = [
    'DataMapError',
    'ExportError',
    'LegendEntry',
    'PaletteCapacityError',
    'PaletteError',
    'Range',
    'RangeFitError',
    'RenderReport',
    'ResourceNotFoundError',
    'Resources',
    'TemplateMarkerError',
    'UnmatchedCountryError',
    'WorldMap',
    'default_resources',
]
