"""
版本解析服务

下载 jar，按优先级依次尝试各元数据格式，并通过缓存避免重复解析。
"""

import asyncio
from typing import Optional

from loguru import logger

from modversion.archive import scan_archive
from modversion.cache import INVALID, VersionCache
from modversion.download import ArchiveDownloader
from modversion.exceptions import VersionNotFoundError
from modversion.extractors import EXTRACTORS
from modversion.models import (
    CURSE_MAVEN_URL,
    ArchiveReference,
    ExtractedEntries,
    FileKey,
)


def download_url(file: ArchiveReference, base_url: str = CURSE_MAVEN_URL) -> str:
    """CurseMaven 上的 jar 下载地址"""
    return (
        f"{base_url}/O-{file.project_id}/{file.file_id}"
        f"/O-{file.project_id}-{file.file_id}.jar"
    )


def resolve_entries(entries: ExtractedEntries) -> str:
    """
    按优先级从元数据文件中取版本

    Args:
        entries: scan_archive 的结果

    Returns:
        第一个给出版本的提取器的结果

    Raises:
        MetadataError: 主元数据结构错误
        VersionNotFoundError: 没有任何提取器给出版本
    """
    for name, extractor in EXTRACTORS:
        data = entries.get(name)
        if data is None:
            continue
        version = extractor(data)
        logger.debug(f"[解析] {name.value} -> {version}")
        if version is not None:
            return version

    raise VersionNotFoundError(
        "无法从元数据中解析版本",
        context={"entries": [name.value for name in entries]},
    )


class VersionResolver:
    """模组文件版本解析器"""

    def __init__(
        self,
        downloader: ArchiveDownloader,
        cache: VersionCache,
        base_url: str = CURSE_MAVEN_URL,
    ):
        self.downloader = downloader
        self.cache = cache
        self.base_url = base_url

    async def resolve_metadata(self, file: ArchiveReference) -> str:
        """
        下载并解析 jar，不经过缓存

        Raises:
            ModVersionError: 下载、读取或解析失败
        """
        url = download_url(file, self.base_url)
        stream = await self.downloader.fetch(url)
        entries = await asyncio.to_thread(scan_archive, stream)
        return resolve_entries(entries)

    async def get_version(self, file: ArchiveReference) -> Optional[str]:
        """
        获取模组文件的版本

        Returns:
            版本号，无法解析时返回 None
        """

        async def compute() -> str:
            logger.info(f"正在解析 {file} 的版本...")
            try:
                version = await self.resolve_metadata(file)
            except Exception as e:
                logger.exception(f"无法获取 {file} 的版本: {e}")
                return INVALID
            logger.success(f"{file.display_name}: {version}")
            return version

        resolved = await self.cache.version(FileKey.of(file), compute)
        if resolved == INVALID:
            return None
        return resolved
