"""Shared fixtures: small templates written to tmp_path."""

from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[..., Path]:
    """Write SVG text to a file and return its path."""

    def _write(text: str, name: str = 'template.svg') -> Path:
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path

    return _write


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ('DATAMAP_TEMPLATE', 'DATAMAP_PALETTE', 'DATAMAP_LANG', 'DATAMAP_LANG_DIR'):
        monkeypatch.delenv(var, raising=False)
