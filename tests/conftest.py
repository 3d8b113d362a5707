"""Shared fixtures for the test suite."""

from unittest.mock import MagicMock

import pytest
import requests

from models.novel import NovelItem, WeekData
from scrapers.base import NetworkError

SANJIANG_HTML = """
<html><head><title>起点三江</title></head>
<body>
<div class="sanjiang-wrap">
  <ul>
    <li class="strongrec-list book-list-wrap">
      <h3 class="date-range-title">
        <span class="date-from">2025.10.26</span>
        <span class="date-to">2025.11.02</span>
      </h3>
      <div class="book-list">
        <ul>
          <li>
            <h2><a class="name" href="//book.qidian.com/info/1001/">  灵境行者  </a></h2>
            <a class="channel" href="//www.qidian.com/xianxia/">「仙侠」</a>
            <span class="rec">爽文</span>
          </li>
          <li>
            <h2><a class="name" href="https://book.qidian.com/info/1002/">诡秘之主</a></h2>
            <a class="channel">「奇幻」</a>
            <span class="rec">  </span>
          </li>
          <li>
            <h2><a class="name">没有链接的书</a></h2>
          </li>
          <li>
            <h2><a class="name" href="//book.qidian.com/info/1004/">   </a></h2>
            <a class="channel">「都市」</a>
          </li>
        </ul>
      </div>
    </li>
    <li class="strongrec-list book-list-wrap">
      <h3 class="date-range-title">
        <span class="date-to">2025.10.26</span>
      </h3>
      <div class="book-list">
        <ul>
          <li>
            <h2><a class="name" href="http://book.qidian.com/info/2001/">夜的命名术</a></h2>
            <a class="channel">「」</a>
            <span class="rec">冰汽</span>
          </li>
        </ul>
      </div>
    </li>
    <li class="strongrec-list book-list-wrap">
      <h3 class="date-range-title">
        <span class="date-from">2025.10.12</span>
        <span class="date-to">2025.10.19</span>
      </h3>
      <div class="book-list">
        <ul>
          <li><h2><a class="name" href="//book.qidian.com/info/3001/"></a></h2></li>
        </ul>
      </div>
    </li>
  </ul>
</div>
</body></html>
"""

UNRELATED_HTML = """
<html><body><div class="captcha">请完成安全验证</div></body></html>
"""


@pytest.fixture
def sanjiang_html() -> str:
    return SANJIANG_HTML


@pytest.fixture
def unrelated_html() -> str:
    return UNRELATED_HTML


@pytest.fixture
def sample_weeks() -> list[WeekData]:
    return [
        WeekData(
            week_label="2025.10.26 - 2025.11.02",
            novels=(
                NovelItem(
                    title="灵境行者",
                    url="https://book.qidian.com/info/1001/",
                    category="仙侠",
                    tag="爽文",
                ),
                NovelItem(title="没有链接的书"),
            ),
        ),
        WeekData(
            week_label="2025.10.19 - 2025.10.26",
            novels=(NovelItem(title="夜的命名术", url="http://book.qidian.com/info/2001/", tag="冰汽"),),
        ),
    ]


@pytest.fixture
def fake_scraper(sample_weeks):
    """Scraper stand-in whose scrape() returns the sample weeks."""
    scraper = MagicMock()
    scraper.scrape.return_value = sample_weeks
    return scraper


@pytest.fixture
def failing_scraper():
    scraper = MagicMock()
    scraper.scrape.side_effect = NetworkError("获取数据失败: timed out")
    return scraper


def _make_response(text: str = "", status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.encoding = "utf-8"
    resp.iter_content.return_value = [text.encode("utf-8")]
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error", response=resp
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _make_response
