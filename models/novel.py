"""起点三江周推荐数据模型"""

from dataclasses import dataclass, field, asdict
from typing import Optional


@dataclass(frozen=True)
class NovelItem:
    """单本推荐小说"""
    title: str                         # 书名（必填，不能为空）
    author: Optional[str] = None       # 作者（预留，当前页面未解析）
    url: Optional[str] = None          # 书籍链接（https 绝对地址）
    category: Optional[str] = None     # 分类（如"奇幻"、"仙侠"）
    tag: Optional[str] = None          # 推荐标签（如"冰汽"、"爽文"）

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("NovelItem.title 不能为空")

    def to_dict(self) -> dict:
        """转换为字典"""
        return asdict(self)

    def __str__(self) -> str:
        parts = [self.title]
        if self.category:
            parts.append(f"「{self.category}」")
        if self.tag:
            parts.append(self.tag)
        return " ".join(parts)


@dataclass(frozen=True)
class WeekData:
    """一周的推荐数据"""
    week_label: str                    # 例如：2025.10.26 - 2025.11.02
    novels: tuple[NovelItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # 允许传入 list，统一存为 tuple
        if not isinstance(self.novels, tuple):
            object.__setattr__(self, "novels", tuple(self.novels))

    def to_dict(self) -> dict:
        return {
            "week_label": self.week_label,
            "novels": [n.to_dict() for n in self.novels],
        }

    def __str__(self) -> str:
        return f"{self.week_label} ({len(self.novels)})"
