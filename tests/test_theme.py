from pathlib import Path

import pytest

from conftest import find
from config import Flavor
from planner import PlanOptions
from theme import MarkdownTheme


def test_get_urls_index_entry_first(sample_project):
    urls = MarkdownTheme().get_urls(sample_project)

    index = urls[0]
    assert index.url == "README.md"
    assert index.model is sample_project
    assert sample_project.is_index is True
    assert sample_project.hide_breadcrumbs is True
    assert sample_project.display_readme is True


def test_get_urls_respects_readme_option(sample_project):
    MarkdownTheme(PlanOptions(display_readme=False)).get_urls(sample_project)
    assert sample_project.display_readme is False


def test_get_urls_uses_flavor(sample_project):
    MarkdownTheme(PlanOptions(flavor=Flavor.STRICT_HEADER_SLUG)).get_urls(sample_project)
    assert find(sample_project, "main").url == "README.md#markdown-header-main"


def test_theme_options_not_mutated(sample_project):
    theme = MarkdownTheme()
    theme.get_urls(sample_project)
    assert theme.options.project_name is None


@pytest.mark.parametrize(
    "files,expected",
    [
        ([], False),
        (["README.md"], True),
        (["README.md", "notes.txt", "modules"], True),
        (["index.md"], True),
        (["index.html"], False),
        (["a.md", "b.md"], False),
    ],
)
def test_is_output_directory(tmp_path: Path, files, expected):
    for name in files:
        (tmp_path / name).write_text("x", encoding="utf-8")
    assert MarkdownTheme().is_output_directory(tmp_path) is expected


def test_is_output_directory_accepts_str(tmp_path: Path):
    (tmp_path / "README.md").write_text("# docs", encoding="utf-8")
    assert MarkdownTheme().is_output_directory(str(tmp_path)) is True


def test_readme_directory_does_not_count(tmp_path: Path):
    (tmp_path / "README.md").mkdir()
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    assert MarkdownTheme().is_output_directory(tmp_path) is False


def test_single_md_directory_does_not_count(tmp_path: Path):
    (tmp_path / "guide.md").mkdir()
    assert MarkdownTheme().is_output_directory(tmp_path) is False
