"""
jar 下载传输层

把远程 jar 下载到临时文件并返回可读的二进制流，负责超时与重试。
"""

import asyncio
import tempfile
from typing import BinaryIO, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import aiohttp
from loguru import logger

from modversion.exceptions import DownloadError, DownloadNetworkError


class ArchiveDownloader:
    """jar 下载器"""

    def __init__(
        self,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        timeout: float = 60.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owned_session = True
        return self._session

    async def fetch(self, url: str) -> BinaryIO:
        """
        下载 jar

        Args:
            url: 下载地址，支持 file:// 本地路径

        Returns:
            已回到开头的二进制流，由调用方负责关闭

        Raises:
            DownloadError: 本地文件无法打开
            DownloadNetworkError: 重试后仍然失败
        """
        if url.startswith("file://"):
            try:
                return open(url2pathname(urlparse(url).path), "rb")
            except OSError as e:
                raise DownloadError(
                    f"无法打开本地文件: {e}", context={"url": url}
                )

        logger.debug(f"[下载] {url}")

        for attempt in range(self.max_retries + 1):
            buffer = tempfile.TemporaryFile()
            try:
                async with self.session.get(url) as response:
                    if response.status != 200:
                        raise DownloadNetworkError(
                            f"HTTP {response.status}",
                            context={"url": url, "status": response.status},
                        )

                    downloaded = 0
                    async for chunk in response.content.iter_chunked(8192):
                        buffer.write(chunk)
                        downloaded += len(chunk)

                buffer.seek(0)
                logger.debug(
                    f"[下载] 完成 {url} ({downloaded / (1024 * 1024):.2f} MB)"
                )
                return buffer

            except (
                aiohttp.ClientError,
                asyncio.TimeoutError,
                DownloadError,
                OSError,
            ) as e:
                buffer.close()

                if attempt < self.max_retries:
                    delay = self.retry_delay * (2**attempt)
                    logger.warning(
                        f"[重试] 下载 {url} 失败 (第 {attempt + 1} 次): {e}. "
                        f"{delay:.1f}s 后重试..."
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"[错误] 下载 {url} 最终失败: {e}")
                    if isinstance(e, DownloadError):
                        raise
                    raise DownloadNetworkError(
                        f"下载失败: {url}", context={"url": url, "error": str(e)}
                    )

        raise DownloadNetworkError(f"下载失败: {url}", context={"url": url})

    async def close(self):
        """关闭下载器"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
