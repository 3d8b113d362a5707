"""Tests for the rich console exporter."""

from rich.console import Console

from exporters.console import ConsoleExporter, build_rich_tree
from provider import build_tree, failed_tree


def _render(nodes) -> str:
    console = Console(record=True, width=200, color_system=None)
    ConsoleExporter(console).export(nodes)
    return console.export_text()


def test_export_renders_weeks_and_novels(sample_weeks) -> None:
    output = _render(build_tree(sample_weeks))

    assert "2025.10.26 - 2025.11.02 (2)" in output
    assert "灵境行者" in output
    assert "「仙侠」 爽文" in output
    assert "https://book.qidian.com/info/1001/" in output
    assert "夜的命名术" in output


def test_export_renders_failure_placeholder() -> None:
    output = _render(failed_tree())

    assert "加载失败" in output


def test_export_empty_nodes() -> None:
    output = _render([])

    assert "没有抓取到任何数据" in output


def test_build_rich_tree_structure(sample_weeks) -> None:
    tree = build_rich_tree(build_tree(sample_weeks))

    assert len(tree.children) == 2
    assert len(tree.children[0].children) == 2
