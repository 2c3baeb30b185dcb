import textwrap
from pathlib import Path

import pytest

from stache import PartialNotFoundError, RenderOptions, load_options
from stache.template import TemplateProcessor

from tests.infrastructure import write


def test_missing_file_gives_defaults(tmp_path: Path):
    opts = load_options(tmp_path / "stache.yaml")
    assert opts == RenderOptions()
    assert opts.missing_partials == "ignore"
    assert opts.max_partial_depth == 100
    assert opts.escape_html is True


def test_empty_file_gives_defaults(tmp_path: Path):
    path = write(tmp_path / "stache.yaml", "")
    assert load_options(path) == RenderOptions()


def test_values_are_loaded(tmp_path: Path):
    path = write(tmp_path / "stache.yaml", textwrap.dedent("""
        missing_partials: error
        max_partial_depth: 5
        escape_html: false
    """).lstrip())

    opts = load_options(path)

    assert opts == RenderOptions(missing_partials="error", max_partial_depth=5, escape_html=False)


def test_non_mapping_document(tmp_path: Path):
    path = write(tmp_path / "stache.yaml", "- a\n- b\n")
    with pytest.raises(RuntimeError, match="mapping"):
        load_options(path)


def test_unknown_key(tmp_path: Path):
    path = write(tmp_path / "stache.yaml", "cache: true\n")
    with pytest.raises(ValueError, match="cache"):
        load_options(path)


@pytest.mark.parametrize("raw", [
    {"missing_partials": "explode"},
    {"max_partial_depth": 0},
    {"max_partial_depth": True},
    {"escape_html": "yes"},
])
def test_invalid_values(raw):
    with pytest.raises(ValueError):
        RenderOptions.from_dict(raw)


def test_round_trip_through_dict():
    opts = RenderOptions(missing_partials="error", max_partial_depth=3)
    assert RenderOptions.from_dict(opts.to_dict()) == opts


def test_loaded_options_drive_rendering(tmp_path: Path):
    path = write(tmp_path / "stache.yaml", "missing_partials: error\nescape_html: false\n")
    processor = TemplateProcessor(options=load_options(path))

    assert processor.render("{{x}}", {"x": "<b>"}) == "<b>"
    with pytest.raises(PartialNotFoundError):
        processor.render("{{>nope}}")


def test_default_path_is_cwd_stache_yaml(tmp_path: Path, monkeypatch):
    write(tmp_path / "stache.yaml", "max_partial_depth: 7\n")
    monkeypatch.chdir(tmp_path)

    assert load_options().max_partial_depth == 7
