"""起点中文网三江推荐爬虫"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from scrapers.base import BaseScraper
from models.novel import NovelItem, WeekData

logger = logging.getLogger(__name__)

# 解析失败时的占位数据
NO_DATA_LABEL = "暂无数据"
NO_DATA_TITLE = "未能从页面中获取到小说数据，请查看控制台日志"
NO_DATA_CATEGORY = "提示"

# 用于判断页面是否被拦截/改版的关键字
DEBUG_MARKERS = ("三江", "strongrec", "book-list")


def clean_text(text: Optional[str]) -> Optional[str]:
    """去除首尾空白，空字符串视为缺失"""
    if text is None:
        return None
    text = text.strip()
    return text or None


def clean_category(text: Optional[str]) -> Optional[str]:
    """去掉分类两侧的「」，如 「仙侠」 -> 仙侠"""
    if text is None:
        return None
    return clean_text(text.replace("「", "").replace("」", ""))


def normalize_url(href: Optional[str]) -> Optional[str]:
    """协议相对地址 //book.qidian.com/... 补全为 https://book.qidian.com/..."""
    if not href:
        return None
    return href if href.startswith("http") else f"https:{href}"


def sentinel_weeks() -> list[WeekData]:
    """未解析到任何数据时返回的占位结果"""
    return [
        WeekData(
            week_label=NO_DATA_LABEL,
            novels=(NovelItem(title=NO_DATA_TITLE, category=NO_DATA_CATEGORY),),
        )
    ]


class SanjiangScraper(BaseScraper):
    """
    起点三江推荐爬虫

    抓取 https://www.qidian.com/sanjiang/ 页面，每周一组推荐书单

    HTML 结构:
      li.strongrec-list.book-list-wrap          -> 一周
        .date-range-title .date-from / .date-to -> 日期范围
        .book-list ul li                        -> 一本书
          h2 a.name   -> 书名 + 链接（协议相对地址）
          a.channel   -> 分类「仙侠」
          span.rec    -> 推荐标签
    """

    SOURCE_NAME = "起点三江"
    DEFAULT_URL = "https://www.qidian.com/sanjiang/"
    DEFAULT_REFERER = "https://www.qidian.com/"

    WEEK_SELECTOR = ".strongrec-list.book-list-wrap"
    DATE_FROM_SELECTOR = ".date-range-title .date-from"
    DATE_TO_SELECTOR = ".date-range-title .date-to"
    BOOK_SELECTOR = ".book-list ul li"
    TITLE_SELECTOR = "h2 a.name"
    CATEGORY_SELECTOR = "a.channel"
    TAG_SELECTOR = "span.rec"

    def parse(self, html: str) -> list[WeekData]:
        """解析三江页面，解析不到任何数据时返回占位数据"""
        html = html or ""
        soup = BeautifulSoup(html, "lxml")
        weeks = []

        logger.info(f"{self.log_prefix} HTML长度: {len(html)} 字符")

        week_elements = soup.select(self.WEEK_SELECTOR)
        logger.info(f"{self.log_prefix} 找到 {len(week_elements)} 个周数据")

        for index, week_el in enumerate(week_elements, start=1):
            date_from = self._select_text(week_el, self.DATE_FROM_SELECTOR).strip()
            date_to = self._select_text(week_el, self.DATE_TO_SELECTOR).strip()
            week_label = f"{date_from} - {date_to}"
            logger.info(f"{self.log_prefix} 第 {index} 周: {week_label}")

            book_elements = week_el.select(self.BOOK_SELECTOR)
            logger.info(f"{self.log_prefix} 第 {index} 周找到 {len(book_elements)} 本小说")

            novels = []
            for book_el in book_elements:
                novel = self._parse_book(book_el)
                if novel:
                    logger.debug(
                        f"{self.log_prefix}   - {novel.title} [{novel.category or ''}] {novel.tag or ''}"
                    )
                    novels.append(novel)

            # 一本书都没解析到的周直接跳过（多半是页面结构变了）
            if week_label and novels:
                weeks.append(WeekData(week_label=week_label, novels=tuple(novels)))

        if not weeks:
            self._log_diagnosis(html)
            return sentinel_weeks()

        logger.info(f"{self.log_prefix} 成功解析 {len(weeks)} 周的数据")
        return weeks

    def _parse_book(self, book_el) -> Optional[NovelItem]:
        """解析单本书，没有书名的条目返回 None"""
        title_links = book_el.select(self.TITLE_SELECTOR)
        if not title_links:
            return None

        title = clean_text("".join(a.get_text() for a in title_links))
        if not title:
            return None

        return NovelItem(
            title=title,
            url=normalize_url(title_links[0].get("href")),
            category=clean_category(self._select_text(book_el, self.CATEGORY_SELECTOR)),
            tag=clean_text(self._select_text(book_el, self.TAG_SELECTOR)),
        )

    @staticmethod
    def _select_text(element, selector: str) -> str:
        """取所有匹配子元素的文本并拼接，找不到返回空字符串"""
        return "".join(found.get_text() for found in element.select(selector))

    def _log_diagnosis(self, html: str):
        """解析失败时输出排查信息"""
        logger.warning(f"{self.log_prefix} 未能解析到数据，可能原因：")
        logger.warning("  1. 网站返回的内容不完整")
        logger.warning("  2. 页面结构已变化")
        logger.warning("  3. 被反爬虫机制拦截")
        logger.warning(f"{self.log_prefix} 调试信息:")
        for marker in DEBUG_MARKERS:
            logger.warning(f'  - HTML是否包含"{marker}": {marker in html}')
