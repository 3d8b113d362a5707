"""Tests for the NovelItem / WeekData value records."""

import dataclasses

import pytest

from models.novel import NovelItem, WeekData


def test_novel_item_requires_title() -> None:
    with pytest.raises(ValueError):
        NovelItem(title="")


def test_novel_item_rejects_whitespace_title() -> None:
    with pytest.raises(ValueError):
        NovelItem(title="   ")


def test_novel_item_optional_fields_default_to_none() -> None:
    novel = NovelItem(title="灵境行者")

    assert novel.author is None
    assert novel.url is None
    assert novel.category is None
    assert novel.tag is None


def test_novel_item_is_immutable() -> None:
    novel = NovelItem(title="灵境行者")

    with pytest.raises(dataclasses.FrozenInstanceError):
        novel.title = "other"  # type: ignore[misc]


def test_novel_item_str_includes_category_and_tag() -> None:
    novel = NovelItem(title="灵境行者", category="仙侠", tag="爽文")

    assert str(novel) == "灵境行者 「仙侠」 爽文"


def test_week_data_stores_novels_as_tuple() -> None:
    week = WeekData(week_label="a - b", novels=[NovelItem(title="x")])

    assert isinstance(week.novels, tuple)
    assert week.novels[0].title == "x"


def test_week_data_to_dict() -> None:
    week = WeekData(
        week_label="2025.10.26 - 2025.11.02",
        novels=(NovelItem(title="灵境行者", url="https://book.qidian.com/info/1/"),),
    )

    assert week.to_dict() == {
        "week_label": "2025.10.26 - 2025.11.02",
        "novels": [
            {
                "title": "灵境行者",
                "author": None,
                "url": "https://book.qidian.com/info/1/",
                "category": None,
                "tag": None,
            }
        ],
    }


def test_week_data_str_shows_count() -> None:
    week = WeekData(week_label="a - b", novels=(NovelItem(title="x"), NovelItem(title="y")))

    assert str(week) == "a - b (2)"
