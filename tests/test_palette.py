"""Tests for datamap.core.palette — palette files and colour conversions."""

from pathlib import Path

import pytest
from datamap.core.errors import DataMapError, PaletteError, ResourceNotFoundError
from datamap.core.palette import load_palette, rgb_to_hex
from datamap.core.resources import default_resources

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


class TestRgbToHex:
    def test_red(self) -> None:
        assert rgb_to_hex((255, 0, 0)) == '#ff0000'

    def test_padding(self) -> None:
        assert rgb_to_hex((1, 2, 3)) == '#010203'

    def test_lowercase(self) -> None:
        assert rgb_to_hex((252, 175, 62)) == '#fcaf3e'


class TestLoadPalette:
    def test_file_order(self) -> None:
        assert load_palette(FIXTURES_DIR / 'four.color') == [(255, 0, 0), (0, 255, 0), (0, 0, 255), (0, 0, 0)]

    def test_blank_lines_and_comments_skipped(self) -> None:
        assert load_palette(FIXTURES_DIR / 'sparse.color') == [(252, 233, 79), (252, 175, 62)]

    def test_accepts_str_path(self) -> None:
        assert len(load_palette(str(FIXTURES_DIR / 'four.color'))) == 4

    def test_single_line(self, tmp_path: Path) -> None:
        f = tmp_path / 'one.color'
        f.write_text('255 0 0')
        assert load_palette(f) == [(255, 0, 0)]

    def test_empty_file(self, tmp_path: Path) -> None:
        f = tmp_path / 'empty.color'
        f.write_text('\n')
        assert load_palette(f) == []

    def test_bundled_palette(self) -> None:
        colours = load_palette(default_resources().palette)
        assert len(colours) == 10
        assert colours[0] == (252, 233, 79)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceNotFoundError):
            load_palette(tmp_path / 'nope.color')

    def test_missing_is_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_palette(tmp_path / 'nope.color')

    def test_two_values_per_line(self, tmp_path: Path) -> None:
        f = tmp_path / 'bad.color'
        f.write_text('255 0\n0 255\n')
        with pytest.raises(PaletteError):
            load_palette(f)

    def test_ragged_lines(self, tmp_path: Path) -> None:
        f = tmp_path / 'bad.color'
        f.write_text('255 0 0\n0 255\n')
        with pytest.raises(PaletteError):
            load_palette(f)

    def test_not_numbers(self, tmp_path: Path) -> None:
        f = tmp_path / 'bad.color'
        f.write_text('red green blue\n')
        with pytest.raises(PaletteError):
            load_palette(f)

    def test_out_of_range(self, tmp_path: Path) -> None:
        f = tmp_path / 'bad.color'
        f.write_text('256 0 0\n')
        with pytest.raises(PaletteError) as exc:
            load_palette(f)
        assert isinstance(exc.value, DataMapError)
