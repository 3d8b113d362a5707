from .base import BaseScraper, NetworkError
from .qidian import SanjiangScraper

# 爬虫注册表 - 新增数据源只需在此添加
SCRAPER_REGISTRY = {
    "sanjiang": {"class": SanjiangScraper, "name": "起点三江"},
}

__all__ = [
    "BaseScraper",
    "NetworkError",
    "SanjiangScraper",
    "SCRAPER_REGISTRY",
]
