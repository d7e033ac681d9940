"""Tests for datamap.core.env — .env loading, walk-up logic and DATAMAP_* overrides."""

import os
from pathlib import Path

import pytest
from datamap.core.env import _find_dotenv, _parse_dotenv, load_env, resources_from_env
from datamap.core.resources import default_resources


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('DATAMAP_LANG=es\n')
        assert _parse_dotenv(f) == {'DATAMAP_LANG': 'es'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('KEY="/maps/world map.svg"\nKEY2=\'single\'\n')
        assert _parse_dotenv(f) == {'KEY': '/maps/world map.svg', 'KEY2': 'single'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\n\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_no_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export DATAMAP_LANG=es\n')
        assert _parse_dotenv(f) == {'DATAMAP_LANG': 'es'}


class TestFindDotenv:
    def test_finds_in_cwd(self, tmp_path: Path) -> None:
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(tmp_path) == dotenv

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        parent = tmp_path / 'repo'
        parent.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (parent / '.git').mkdir()
        subdir = parent / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        parent = tmp_path / 'repo'
        parent.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (parent / '.git').write_text('gitdir: ../somewhere\n')
        subdir = parent / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('DATAMAP_LANG', raising=False)
        (tmp_path / '.env').write_text('DATAMAP_LANG=pt-BR\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('DATAMAP_LANG') == 'pt-BR'
        monkeypatch.delenv('DATAMAP_LANG')

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('DATAMAP_LANG', 'es')
        (tmp_path / '.env').write_text('DATAMAP_LANG=pt-BR\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('DATAMAP_LANG') == 'es'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('DATAMAP_PALETTE', raising=False)
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('DATAMAP_PALETTE=/palettes/grey.color\n')
        assert load_env(env_file=str(dotenv)) == dotenv
        assert os.environ.get('DATAMAP_PALETTE') == '/palettes/grey.color'
        monkeypatch.delenv('DATAMAP_PALETTE')

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'missing.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None

    def test_foreign_keys_not_exported(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('SOME_TOKEN', raising=False)
        monkeypatch.delenv('DATAMAP_LANG', raising=False)
        (tmp_path / '.env').write_text('SOME_TOKEN=secret\nDATAMAP_LANG=es\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert 'SOME_TOKEN' not in os.environ
        assert os.environ.get('DATAMAP_LANG') == 'es'
        monkeypatch.delenv('DATAMAP_LANG')

    def test_unknown_datamap_key_warned(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.delenv('DATAMAP_COLOURS', raising=False)
        (tmp_path / '.env').write_text('DATAMAP_COLOURS=tango\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert 'DATAMAP_COLOURS' not in os.environ
        assert 'DATAMAP_COLOURS' in caplog.text


class TestResourcesFromEnv:
    def test_no_variables_keeps_defaults(self, clean_env: None) -> None:
        assert resources_from_env(default_resources()) == default_resources()

    def test_overrides(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('DATAMAP_TEMPLATE', '/maps/europe.svg')
        monkeypatch.setenv('DATAMAP_LANG', 'es')
        resources = resources_from_env(default_resources())
        assert resources.template == Path('/maps/europe.svg')
        assert resources.lang == 'es'
        assert resources.palette == default_resources().palette

    def test_empty_variable_ignored(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('DATAMAP_PALETTE', '')
        assert resources_from_env(default_resources()).palette == default_resources().palette
