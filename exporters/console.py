"""控制台输出导出器"""

from typing import Optional

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from provider import TreeNode


def build_rich_tree(nodes: list[TreeNode], title: str = "📚 起点三江") -> Tree:
    """把树节点转换成 rich.Tree"""
    root = Tree(Text(title, style="bold magenta"))

    for node in nodes:
        icon = "📅" if node.kind == "week" else "📖"
        branch = root.add(Text(f"{icon} {node.label}", style="bold cyan"))
        for child in node.children:
            branch.add(_novel_text(child))

    return root


def _novel_text(node: TreeNode) -> Text:
    """小说行：书名 + 分类标签 + 链接"""
    text = Text("📖 ")
    text.append(node.label, style="bold white")
    if node.description:
        text.append(f"  {node.description}", style="yellow")
    if node.novel and node.novel.url:
        text.append(f"  {node.novel.url}", style="dim")
    return text


def print_tree(nodes: list[TreeNode], console: Optional[Console] = None):
    """在控制台输出树"""
    console = console or Console()

    if not nodes:
        console.print("[yellow]没有抓取到任何数据[/yellow]")
        return

    console.print(build_rich_tree(nodes))


class ConsoleExporter:
    """控制台导出器"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def export(self, nodes: list[TreeNode]):
        """导出到控制台"""
        print_tree(nodes, self.console)
