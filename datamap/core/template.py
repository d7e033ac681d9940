"""Regex-based edits of an SVG map template.

Country shapes are found by their `class="land <code>"` token, which the
template must keep unique per country. The template is handled as text,
never parsed into a document: edits leave every other byte untouched.

Markers the template must carry:
  <!-- javascript -->   script references are inserted after it
  </g></g></svg>        the legend is inserted before it
  <g id="map-and-legend" ...>  the title goes inside it
"""

import html
import re
from collections.abc import Mapping, Sequence

from datamap.core.errors import TemplateMarkerError
from datamap.core.types import LegendEntry, Number, Range

JS_MARKER = '<!-- javascript -->'
LEGEND_MARKER = '</g></g></svg>'
NO_DATA_COLOR = '#b9b9b9'

# Host application functions each country shape is wired to
EVENT_HANDLERS = (
    ('onmouseover', 'worldMapOver'),
    ('onmouseout', 'worldMapOut'),
    ('onclick', 'worldMapClick'),
    ('ondblclick', 'worldMapDblClick'),
)

LEGEND_X = 2750
LEGEND_LABEL_X = 2800
LEGEND_TOP = 75
LEGEND_STEP = 40
LEGEND_SWATCH = 27
LEGEND_TEXT_OFFSET = 23
LEGEND_TEXT_STYLE = 'font-size:28px; font-family:sans-serif'

_TITLE_GROUP_RE = re.compile(r'<g id="map-and-legend"[^>]*>')
_TITLE_TEXT_RE = re.compile(r'<text id="map-title" x="10" y="25" font-size="60" font-family="sans-serif">[^<]*</text>')
_TITLE_GROUP = '<g id="map-and-legend">'


def land_marker(code: str) -> str:
    return f'class="land {code}"'


def _fill_pattern(code: str) -> re.Pattern:
    return re.compile(r'fill="[^"]+" ' + re.escape(land_marker(code)))


def is_paintable(svg: str, code: str) -> bool:
    """True when a shape for code carries a fill attribute right before its class."""
    return _fill_pattern(code).search(svg) is not None


def _format_value(value: Number | None) -> str:
    return '' if value is None else str(value)


def add_scripts(svg: str, files: Sequence[str]) -> str:
    """Insert a script element per file after the javascript marker, keeping list order."""
    if not files:
        return svg
    if JS_MARKER not in svg:
        raise TemplateMarkerError(f'Template has no {JS_MARKER} marker for scripts')
    scripts = ''.join(
        f'<script xlink:href="{html.escape(f, quote=True)}" type="text/ecmascript" />' for f in files
    )
    return svg.replace(JS_MARKER, JS_MARKER + scripts)


def identify_countries(
    svg: str, names: Mapping[str, str], data: Mapping[str, Number]
) -> tuple[str, list[str]]:
    """Add name, value and event handler attributes to every named country shape.

    Returns the new text and the dictionary codes that have no shape.
    """
    missing = []
    for code, name in names.items():
        marker = land_marker(code)
        if marker not in svg:
            missing.append(code)
            continue
        attrs = [
            f'country-name="{html.escape(name, quote=True)}"',
            f'country-value="{_format_value(data.get(code))}"',
        ]
        attrs += [f'{event}="{fn}(this)"' for event, fn in EVENT_HANDLERS]
        svg = svg.replace(marker, f'{marker} {" ".join(attrs)}')
    return svg, missing


def paint_country(svg: str, code: str, color: str) -> tuple[str, bool]:
    """Set the fill of the shape(s) for code. Returns the new text and whether anything matched."""
    pattern = _fill_pattern(code)
    replacement = f'fill="{color}" {land_marker(code)}'
    svg, count = pattern.subn(lambda _m: replacement, svg)
    return svg, count > 0


def legend_entries(ranges: Sequence[Range], strings: Mapping[str, str]) -> list[LegendEntry]:
    """One row per range, then the 'no data' row, stacked downwards."""
    entries = []
    for i, r in enumerate(ranges):
        label = ' '.join([strings['between'], str(r.low), strings['and'], str(r.high)])
        entries.append(
            LegendEntry(
                label=label,
                color=r.color or NO_DATA_COLOR,
                y=LEGEND_TOP + LEGEND_STEP * i,
                bounds=(r.low, r.high),
            )
        )
    entries.append(
        LegendEntry(label=strings['no_data'], color=NO_DATA_COLOR, y=LEGEND_TOP + LEGEND_STEP * len(ranges))
    )
    return entries


def legend_markup(entries: Sequence[LegendEntry]) -> str:
    parts = []
    for entry in entries:
        # The no-data swatch is styled, range swatches carry a fill attribute
        paint = f'fill="{entry.color}"' if entry.bounds is not None else f'style="fill:{entry.color}"'
        parts.append(
            f'<rect x="{LEGEND_X}" class="legend" y="{entry.y}" '
            f'width="{LEGEND_SWATCH}" height="{LEGEND_SWATCH}" {paint} />'
        )
        parts.append(
            f'<text class="label" x="{LEGEND_LABEL_X}" y="{entry.y + LEGEND_TEXT_OFFSET}" style="{LEGEND_TEXT_STYLE}">'
            f'<tspan>{html.escape(entry.label, quote=False)}</tspan></text>'
        )
    return ''.join(parts)


def insert_legend(svg: str, entries: Sequence[LegendEntry]) -> str:
    if LEGEND_MARKER not in svg:
        raise TemplateMarkerError(f'Template has no {LEGEND_MARKER} marker for the legend')
    return svg.replace(LEGEND_MARKER, legend_markup(entries) + LEGEND_MARKER)


def set_title(svg: str, title: str | None) -> str:
    """Replace any existing title. A falsy title just removes it."""
    svg = _TITLE_GROUP_RE.sub(_TITLE_GROUP, svg)
    svg = _TITLE_TEXT_RE.sub('', svg)
    if title:
        heading = (
            '<g id="map-and-legend" transform="translate(0,50)">'
            '<text id="map-title" x="10" y="25" font-size="60" font-family="sans-serif">'
            f'{html.escape(title, quote=False)}</text>'
        )
        svg = svg.replace(_TITLE_GROUP, heading)
    return svg
