"""WorldMap — colour an SVG world map from a country code -> value mapping.

A WorldMap holds the template text and mutates it step by step:

    m = WorldMap(data={'br': 100, 'es': 50}, js=['effects.js'])
    m.title = 'Example data'
    m.add_js()
    m.identify_countries()
    m.make_ranges_log()
    m.make_colors()
    m.map_values()
    m.make_legend()
    m.save_file('map.png', size='1024x768', quality=80)

render() runs that sequence in one call and returns a RenderReport.
Template, palette and language files default to the Resources passed in,
or to the data bundled with the package.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from datamap import registry
from datamap.core import export
from datamap.core import template as template_ops
from datamap.core.errors import DataMapError, UnmatchedCountryError
from datamap.core.palette import load_palette
from datamap.core.ranges import assign_colors, fit
from datamap.core.resources import (
    DEFAULT_LANGUAGE,
    Resources,
    default_resources,
    load_names,
    load_strings,
    load_template,
)
from datamap.core.types import Number, Range, RenderReport

logger = logging.getLogger(__name__)


class WorldMap:
    def __init__(
        self,
        template: str | Path | None = None,
        lang: str | None = None,
        palette: str | Path | None = None,
        data: Mapping[str, Number] | None = None,
        js: Sequence[str] | None = None,
        resources: Resources | None = None,
    ):
        self.resources = resources or default_resources()
        self.template = Path(template) if template else self.resources.template
        self.lang = lang or self.resources.lang
        self.palette = palette or self.resources.palette
        self.data: dict[str, Number] = dict(data) if data else {}
        self.js: list[str] = list(js) if js else []
        self.svg = load_template(self.template)
        self.ranges: list[Range] | None = None
        self.unmatched: list[str] = []
        self.report = RenderReport(lang=self.lang)
        self._title: str | None = None

    @property
    def title(self) -> str | None:
        return self._title

    @title.setter
    def title(self, title: str | None) -> None:
        self.svg = template_ops.set_title(self.svg, title)
        self._title = title
        self.report.title = title

    def alter_data(self, data: Mapping[str, Number]) -> None:
        """Merge data into the current values; later values win."""
        self.data = {**self.data, **data}

    def add_js(self) -> None:
        """Reference every file in self.js from a script element."""
        self.svg = template_ops.add_scripts(self.svg, self.js)

    def identify_countries(self) -> list[str]:
        """Attach name, value and event handlers to each country shape.

        Returns the dictionary codes with no shape in the template.
        """
        names = load_names(self.lang, self.resources.lang_dir)
        self.svg, missing = template_ops.identify_countries(self.svg, names, self.data)
        self.report.unlabeled = missing
        logger.debug('Labelled %d countries, %d not in template', len(names) - len(missing), len(missing))
        return missing

    def make_ranges(self, policy: str = registry.DEFAULT_POLICY, **options) -> list[Range]:
        """Compute ranges for the current data with a registered policy."""
        palette_size = len(load_palette(self.palette))
        self.ranges = registry.get(policy).execute(self.data.values(), palette_size, **options)
        self.report.policy = policy
        self.report.ranges = self.ranges
        logger.info('%s policy produced %d ranges', policy, len(self.ranges))
        return self.ranges

    def make_ranges_linear(self) -> list[Range]:
        return self.make_ranges('linear')

    def make_ranges_log(self, base: int = 10) -> list[Range]:
        return self.make_ranges('log', base=base)

    def _require_ranges(self) -> list[Range]:
        if self.ranges is None:
            raise DataMapError('No ranges yet: call make_ranges() or set ranges first')
        return self.ranges

    def make_colors(self) -> None:
        """Give each range the palette colour at the same position."""
        assign_colors(self._require_ranges(), load_palette(self.palette))

    def map_values(self, strict: bool = False) -> list[str]:
        """Paint every country with the colour of the range its value falls in.

        Every value is fitted before anything is painted, so a RangeFitError
        leaves the template untouched. Codes with no shape are collected in
        self.unmatched and returned; with strict=True they raise
        UnmatchedCountryError instead, also before painting.
        """
        ranges = self._require_ranges()
        colors = {}
        for code, value in self.data.items():
            r = fit(ranges, code, value)
            if r.color is None:
                raise DataMapError(f'Range [{r.low}, {r.high}] has no colour: call make_colors() first')
            colors[code] = r.color

        unmatched = [code for code in colors if not template_ops.is_paintable(self.svg, code)]
        if unmatched and strict:
            raise UnmatchedCountryError(unmatched)

        for code, color in colors.items():
            if code not in unmatched:
                self.paint_country(code, color)

        self.unmatched = unmatched
        for code in unmatched:
            self.report.record_unmatched(code)
        if unmatched:
            logger.warning('No template element for %d codes: %s', len(unmatched), ', '.join(unmatched))
        return unmatched

    def paint_country(self, code: str, color: str) -> bool:
        """Set the fill of a country. Returns False when the template has no such country."""
        self.svg, found = template_ops.paint_country(self.svg, code, color)
        if found:
            self.report.record_paint(code, color)
        else:
            logger.debug('No fill to replace for %s', code)
        return found

    def make_legend(self) -> None:
        strings = load_strings(self.lang, self.resources.lang_dir)
        entries = template_ops.legend_entries(self._require_ranges(), strings)
        self.svg = template_ops.insert_legend(self.svg, entries)
        self.report.legend = entries

    def save_file(
        self, output: str | Path = 'output.svg', size: export.Geometry | None = None, quality: int = 100
    ) -> Path:
        """Write the map. The extension picks the format; size and quality apply to raster output."""
        path = export.save_file(self.svg, output, size=size, quality=quality)
        self.report.output_path = str(path)
        return path

    def render(
        self,
        output: str | Path = 'output.svg',
        policy: str = registry.DEFAULT_POLICY,
        size: export.Geometry | None = None,
        quality: int = 100,
        strict: bool = False,
        **options,
    ) -> RenderReport:
        """Run the full sequence from scripts to file and return the report."""
        self.add_js()
        self.identify_countries()
        self.make_ranges(policy, **options)
        self.make_colors()
        self.map_values(strict=strict)
        self.make_legend()
        self.save_file(output, size=size, quality=quality)
        return self.report

    @staticmethod
    def country_name(code: str, lang: str = DEFAULT_LANGUAGE, resources: Resources | None = None) -> str | None:
        """Display name of a country code, or None if the dictionary lacks it."""
        resources = resources or default_resources()
        return load_names(lang, resources.lang_dir).get(code)
