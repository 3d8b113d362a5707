#!/usr/bin/env python3
"""
起点三江周推荐 - 命令行入口

用法:
    python main.py show                  # 抓取并以树形展示
    python main.py -v show               # 输出调试日志
    python main.py open 3                # 在浏览器中打开第 3 本小说
    python main.py json                  # 输出 JSON
    python main.py --url <地址> show      # 指定抓取地址
"""

import argparse
import json
import sys
import os

from rich.console import Console

# 确保项目根目录在 Python 路径中
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config, setup_logging
from exporters.console import ConsoleExporter
from provider import SanjiangTreeProvider
from scrapers import SCRAPER_REGISTRY

console = Console()
# 状态和错误提示写 stderr，避免污染 json 输出
err_console = Console(stderr=True)


def _console_notify(level: str, message: str):
    """把提供者的通知打印到控制台"""
    if level == "error":
        err_console.print(f"[bold red]❌ {message}[/bold red]")
    elif level == "status":
        err_console.print(f"[dim]{message}[/dim]")
    else:
        err_console.print(message)


def get_scraper(source: str, config: dict, url: str = None):
    """根据来源获取爬虫实例"""
    entry = SCRAPER_REGISTRY.get(source)
    if not entry:
        console.print(f"❌ 不支持的来源: {source}")
        console.print(f"   支持的来源: {', '.join(SCRAPER_REGISTRY.keys())}")
        sys.exit(1)

    scrape_config = dict(config.get("scrape", {}))
    if url:
        scrape_config["url"] = url
    return entry["class"](scrape_config)


def get_provider(args, config: dict) -> SanjiangTreeProvider:
    """创建提供者并完成一次刷新"""
    scraper = get_scraper(args.source, config, args.url)
    return SanjiangTreeProvider(scraper, notify=_console_notify)


def cmd_show(args, config) -> int:
    """抓取并展示树"""
    provider = get_provider(args, config)
    ConsoleExporter(console).export(provider.get_children())
    return 1 if provider.last_error else 0


def cmd_open(args, config) -> int:
    """打开第 N 本小说"""
    provider = get_provider(args, config)
    if provider.last_error:
        return 1

    novels = provider.novels()
    if not 1 <= args.index <= len(novels):
        console.print(f"❌ 序号超出范围: {args.index} (共 {len(novels)} 本)")
        return 1

    novel = novels[args.index - 1]
    provider.open_novel(novel.url, novel.title)
    return 0


def cmd_json(args, config) -> int:
    """输出 JSON"""
    provider = get_provider(args, config)
    if provider.last_error:
        return 1

    data = [week.to_dict() for week in provider.weeks]
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="📚 起点三江周推荐 - 抓取、展示、打开",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  python main.py show                 抓取并展示
  python main.py open 1               打开第一本
  python main.py json > sanjiang.json 导出 JSON
        """
    )
    parser.add_argument(
        "--source", type=str, default="sanjiang",
        help="数据来源 (默认: sanjiang)"
    )
    parser.add_argument(
        "--url", type=str, default=None,
        help="覆盖抓取地址"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=False,
        help="输出调试日志"
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    subparsers.add_parser("show", help="抓取并以树形展示")

    open_parser = subparsers.add_parser("open", help="在浏览器中打开小说")
    open_parser.add_argument(
        "index", type=int,
        help="小说序号（从 1 开始，按展示顺序）"
    )

    subparsers.add_parser("json", help="以 JSON 输出周数据")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = load_config()
    level = "DEBUG" if args.verbose else config.get("logging", {}).get("level", "INFO")
    setup_logging(level)

    commands = {
        "show": cmd_show,
        "open": cmd_open,
        "json": cmd_json,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
