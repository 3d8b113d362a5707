"""爬虫基类 - 定义所有爬虫的统一接口"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import requests

from models.novel import WeekData

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """网络请求失败（连接失败、超时、非 2xx 响应）"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BaseScraper(ABC):
    """爬虫抽象基类，所有站点爬虫需继承此类"""

    # 站点名称，子类必须定义
    SOURCE_NAME: str = ""
    # 默认抓取地址，子类必须定义
    DEFAULT_URL: str = ""
    DEFAULT_REFERER: str = ""
    DEFAULT_TIMEOUT: float = 10
    CHUNK_SIZE = 1024

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.url = self.config.get("url") or self.DEFAULT_URL
        self.timeout = self.config.get("timeout", self.DEFAULT_TIMEOUT)
        self.referer = self.config.get("referer", self.DEFAULT_REFERER)
        self.user_agent = self.config.get(
            "user_agent",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        )

    @property
    def log_prefix(self) -> str:
        return f"[{type(self).__name__}]"

    def fetch(self, url: Optional[str] = None) -> str:
        """
        获取页面 HTML，只请求一次，不重试

        timeout 是整个请求的总时长上限（连接 + 读完响应体）。
        requests 自带的 timeout 只限制连接和单次读取，这里边读边检查截止时间，
        超时后关闭连接并抛出 NetworkError。截止时间在每读完一块后检查。

        Args:
            url: 可选，覆盖默认抓取地址

        Returns:
            str: 页面原始文本

        Raises:
            NetworkError: 连接失败、超时或非 2xx 响应
        """
        url = url or self.url
        logger.info(f"{self.log_prefix} 从网络获取数据: {url}")

        deadline = time.monotonic() + self.timeout
        try:
            resp = requests.get(url, headers=self._get_headers(), timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise self._network_error(e) from e

        try:
            logger.info(f"{self.log_prefix} 网络请求状态码: {resp.status_code}")
            resp.raise_for_status()
            body = self._read_body(resp, deadline)
        except requests.RequestException as e:
            raise self._network_error(e) from e
        finally:
            resp.close()

        encoding = resp.encoding
        if not encoding or encoding.lower() == "iso-8859-1":
            encoding = "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    def _read_body(self, resp, deadline: float) -> bytes:
        """分块读取响应体，超过截止时间抛出 NetworkError"""
        chunks = []
        for chunk in resp.iter_content(chunk_size=self.CHUNK_SIZE):
            chunks.append(chunk)
            if time.monotonic() > deadline:
                logger.error(f"{self.log_prefix} 请求超时: 超过 {self.timeout} 秒")
                raise NetworkError(f"获取数据失败: 请求超时 (超过 {self.timeout} 秒)")
        return b"".join(chunks)

    def _network_error(self, e: requests.RequestException) -> NetworkError:
        """requests 异常 -> NetworkError"""
        status_code = e.response.status_code if e.response is not None else None
        logger.error(f"{self.log_prefix} 请求错误: {e}")
        if status_code is not None:
            logger.error(f"{self.log_prefix} 响应状态码: {status_code}")
        return NetworkError(f"获取数据失败: {e}", status_code=status_code)

    @abstractmethod
    def parse(self, html: str) -> list[WeekData]:
        """
        解析页面 HTML

        Args:
            html: 页面原始文本

        Returns:
            list[WeekData]: 按页面顺序排列的周数据，解析失败时返回占位数据，不会为空
        """
        pass

    def scrape(self, url: Optional[str] = None) -> list[WeekData]:
        """抓取并解析，网络失败时抛出 NetworkError"""
        return self.parse(self.fetch(url))

    def _get_headers(self) -> dict:
        """获取默认请求头，模拟桌面浏览器"""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
            "Connection": "keep-alive",
        }
        if self.referer:
            headers["Referer"] = self.referer
        return headers
