"""
批量版本检查

并发解析多个模组文件的版本，结束时写回缓存。
"""

import asyncio
from typing import Dict, List, Optional

from loguru import logger

from modversion.cache import VersionCache, open_cache
from modversion.download import ArchiveDownloader
from modversion.models import ArchiveReference, CheckerConfig
from modversion.services.resolver import VersionResolver


class UpdateChecker:
    """版本检查器"""

    def __init__(
        self,
        config: CheckerConfig,
        cache: Optional[VersionCache] = None,
        downloader: Optional[ArchiveDownloader] = None,
    ):
        self.config = config
        self.cache = cache if cache is not None else open_cache(config.cache)
        self.downloader = downloader or ArchiveDownloader(
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            timeout=config.timeout,
        )
        self.resolver = VersionResolver(
            self.downloader, self.cache, base_url=config.base_url
        )

    async def check(
        self, files: List[ArchiveReference]
    ) -> Dict[ArchiveReference, Optional[str]]:
        """
        解析一组模组文件的版本

        Args:
            files: 模组文件列表

        Returns:
            按输入顺序排列的 文件 -> 版本（未找到为 None）
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        async def check_one(file: ArchiveReference) -> Optional[str]:
            async with semaphore:
                return await self.resolver.get_version(file)

        logger.info(
            f"开始检查 {len(files)} 个文件 ({self.config.max_concurrent} 并发)..."
        )
        versions = await asyncio.gather(*(check_one(file) for file in files))
        await self.cache.save()

        results = dict(zip(files, versions))
        missing = sum(1 for version in versions if version is None)
        if missing:
            logger.warning(f"有 {missing} 个文件未能解析出版本")
        logger.info(f"检查完成: {len(files) - missing} 个成功, {missing} 个失败")
        return results

    async def run(self) -> Dict[ArchiveReference, Optional[str]]:
        """检查配置中的所有文件"""
        return await self.check(self.config.files)

    async def close(self):
        """关闭下载器并保存缓存"""
        await self.downloader.close()
        await self.cache.save()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
