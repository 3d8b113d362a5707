#!/usr/bin/env python3
"""Flask Web API 服务"""

import sys
import os
import logging
import threading

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import load_config, setup_logging
from provider import SanjiangTreeProvider
from scrapers import SCRAPER_REGISTRY

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# ============================================================
# 树形数据提供者（首次访问时创建）
# ============================================================
_provider = None
_provider_lock = threading.Lock()


def create_provider(source: str = "sanjiang") -> SanjiangTreeProvider:
    config = load_config()
    entry = SCRAPER_REGISTRY[source]
    scraper = entry["class"](config.get("scrape", {}))
    return SanjiangTreeProvider(scraper, auto_refresh=False)


def get_provider() -> SanjiangTreeProvider:
    """获取全局提供者，首次访问时加载一次数据"""
    global _provider
    with _provider_lock:
        if _provider is None:
            _provider = create_provider()
            created = True
        else:
            created = False
    if created:
        _provider.refresh()
    return _provider


def set_provider(provider):
    """替换全局提供者（测试用）"""
    global _provider
    with _provider_lock:
        _provider = provider


LOADING_MSG = "正在加载..."


def _loading_response():
    return jsonify({"code": 1, "msg": LOADING_MSG, "data": []})


def _tree_response(provider: SanjiangTreeProvider):
    nodes = [n.to_dict() for n in provider.get_children()]
    # 首次刷新完成前树为空，完成后至少有一个节点（数据、占位或“加载失败”）
    if not nodes:
        return _loading_response()
    if provider.last_error:
        return jsonify({"code": 1, "msg": f"加载失败: {provider.last_error.message}", "data": nodes})
    return jsonify({"code": 0, "data": nodes, "total": len(nodes)})


@app.route("/api/tree")
def api_tree():
    """当前树形数据"""
    return _tree_response(get_provider())


@app.route("/api/weeks")
def api_weeks():
    """当前周数据"""
    provider = get_provider()
    weeks = provider.weeks
    if provider.last_error:
        return jsonify({"code": 1, "msg": f"加载失败: {provider.last_error.message}", "data": []})
    if not weeks:
        return _loading_response()
    data = [w.to_dict() for w in weeks]
    return jsonify({"code": 0, "data": data, "total": len(data)})


@app.route("/api/refresh", methods=["POST"])
def api_refresh():
    """重新抓取；已有刷新在进行时直接返回当前数据"""
    provider = get_provider()
    provider.refresh()
    return _tree_response(provider)


@app.route("/api/open")
def api_open():
    """按序号（从 1 开始）返回小说链接"""
    provider = get_provider()
    try:
        index = int(request.args.get("index", ""))
    except ValueError:
        return jsonify({"code": 1, "msg": "index 参数必须是整数"})

    novels = provider.novels()
    if not 1 <= index <= len(novels):
        return jsonify({"code": 1, "msg": f"序号超出范围: {index} (共 {len(novels)} 本)"})

    novel = novels[index - 1]
    if not novel.url:
        return jsonify({"code": 0, "data": {"title": novel.title, "url": None, "msg": f"小说：{novel.title}"}})
    return jsonify({"code": 0, "data": {"title": novel.title, "url": novel.url}})


if __name__ == "__main__":
    config = load_config()
    setup_logging(config.get("logging", {}).get("level", "INFO"))
    server_cfg = config.get("server", {})
    host = server_cfg.get("host", "127.0.0.1")
    port = server_cfg.get("port", 5000)
    logger.info(f"[server] 启动服务: http://{host}:{port}")
    app.run(host=host, port=port, debug=False)
