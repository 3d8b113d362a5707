from .novel import NovelItem, WeekData

__all__ = ["NovelItem", "WeekData"]
