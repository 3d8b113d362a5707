"""起点三江树形数据 - 把周数据转换成 周 -> 小说 两级节点，供界面渲染"""

import logging
import threading
import webbrowser
from dataclasses import dataclass, field
from typing import Callable, Optional

from models.novel import NovelItem, WeekData
from scrapers.base import BaseScraper, NetworkError

logger = logging.getLogger(__name__)

LOAD_FAILED_LABEL = "加载失败"
OPEN_NOVEL_COMMAND = "open_novel"


@dataclass(frozen=True)
class TreeNode:
    """树节点：周（可展开）或小说（叶子）"""
    label: str
    kind: str                          # "week" / "novel"
    collapsible: str = "none"          # "expanded" / "none"
    novel: Optional[NovelItem] = None
    children: tuple["TreeNode", ...] = field(default_factory=tuple)

    @property
    def icon(self) -> str:
        return "calendar" if self.kind == "week" else "book"

    @property
    def description(self) -> Optional[str]:
        """分类和标签，如 「仙侠」 爽文"""
        if self.novel is None:
            return None
        parts = []
        if self.novel.category:
            parts.append(f"「{self.novel.category}」")
        if self.novel.tag:
            parts.append(self.novel.tag)
        return " ".join(parts) or None

    @property
    def tooltip(self) -> Optional[str]:
        """悬停提示（Markdown）"""
        if self.novel is None:
            return None
        novel = self.novel
        lines = [f"**{novel.title}**"]
        if novel.category:
            lines.append(f"分类: {novel.category}")
        if novel.tag:
            lines.append(f"标签: {novel.tag}")
        if novel.url:
            lines.append(f"[在浏览器中打开]({novel.url})")
        return "\n\n".join(lines)

    @property
    def command(self) -> Optional[tuple]:
        """点击命令，只有带链接的小说才有"""
        if self.novel is None or not self.novel.url:
            return None
        return (OPEN_NOVEL_COMMAND, self.novel.url, self.novel.title)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "kind": self.kind,
            "icon": self.icon,
            "collapsible": self.collapsible,
            "description": self.description,
            "tooltip": self.tooltip,
            "url": self.novel.url if self.novel else None,
            "children": [c.to_dict() for c in self.children],
        }


def build_tree(weeks: list[WeekData]) -> list[TreeNode]:
    """周数据 -> 树节点，周节点默认展开"""
    nodes = []
    for week in weeks:
        children = tuple(
            TreeNode(label=novel.title, kind="novel", novel=novel)
            for novel in week.novels
        )
        nodes.append(TreeNode(
            label=f"{week.week_label} ({len(week.novels)})",
            kind="week",
            collapsible="expanded",
            children=children,
        ))
    return nodes


def failed_tree() -> list[TreeNode]:
    """网络失败时显示的单个占位节点"""
    return [TreeNode(label=LOAD_FAILED_LABEL, kind="week")]


def _log_notify(level: str, message: str):
    """默认通知方式：写日志"""
    if level == "error":
        logger.error(message)
    else:
        logger.info(message)


class SanjiangTreeProvider:
    """
    起点三江树形数据提供者

    refresh() 抓取并重建整棵树，完成后通知所有订阅者。
    同一时间只允许一次刷新，进行中的重复调用直接返回。
    """

    def __init__(
        self,
        scraper: BaseScraper,
        notify: Optional[Callable[[str, str], None]] = None,
        opener: Optional[Callable[[str], object]] = None,
        auto_refresh: bool = True,
    ):
        self.scraper = scraper
        self.notify = notify or _log_notify
        self.opener = opener or webbrowser.open
        self.weeks: list[WeekData] = []
        self.nodes: list[TreeNode] = []
        self.last_error: Optional[NetworkError] = None
        self.is_loading = False
        self._observers: list[Callable[[], None]] = []
        self._lock = threading.Lock()

        if auto_refresh:
            self.refresh()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """订阅树变化，返回取消订阅函数"""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def fire(self):
        """通知所有订阅者"""
        for callback in list(self._observers):
            callback()

    def refresh(self):
        """刷新数据，网络失败时显示“加载失败”节点，不向外抛出"""
        with self._lock:
            if self.is_loading:
                return
            self.is_loading = True

        try:
            self.notify("status", "正在加载起点三江数据...")
            self.weeks = self.scraper.scrape()
            self.last_error = None
            self.nodes = build_tree(self.weeks)
            self.fire()
            self.notify("status", "起点三江数据加载完成")
        except NetworkError as e:
            self.notify("error", f"加载失败: {e.message}")
            self.last_error = e
            self.weeks = []
            self.nodes = failed_tree()
            self.fire()
        finally:
            self.is_loading = False

    def get_tree_item(self, node: TreeNode) -> TreeNode:
        return node

    def get_children(self, node: Optional[TreeNode] = None) -> list[TreeNode]:
        """根节点返回周列表，周节点返回小说列表"""
        if node is None:
            return list(self.nodes)
        return list(node.children)

    def novels(self) -> list[NovelItem]:
        """按显示顺序平铺的所有小说"""
        return [novel for week in self.weeks for novel in week.novels]

    def open_novel(self, url: Optional[str], title: str):
        """有链接就用浏览器打开，否则提示书名"""
        if url:
            self.opener(url)
        else:
            self.notify("info", f"小说：{title}")
