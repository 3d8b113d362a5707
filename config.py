"""配置加载 - config.yaml + config.local.yaml，以及日志初始化"""

import logging
import os

import yaml
from rich.console import Console
from rich.logging import RichHandler

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _deep_merge(base: dict, override: dict) -> dict:
    """深度合并两个字典，override 中的值覆盖 base"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(base_dir: str = BASE_DIR) -> dict:
    """加载配置文件，支持 config.local.yaml 覆盖本地设置"""
    config_path = os.path.join(base_dir, "config.yaml")
    local_path = os.path.join(base_dir, "config.local.yaml")

    config = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

    # 合并本地配置，local 覆盖 base
    if os.path.exists(local_path):
        with open(local_path, "r", encoding="utf-8") as f:
            local_config = yaml.safe_load(f) or {}
        config = _deep_merge(config, local_config)

    return config


def setup_logging(level: str = "INFO"):
    """初始化日志输出（rich 彩色控制台）"""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # requests/urllib3 的连接日志太吵
    logging.getLogger("urllib3").setLevel(logging.WARNING)
