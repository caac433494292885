"""
ModVersion 下载层

负责获取远程 jar 的字节流。
"""

from modversion.download.transport import ArchiveDownloader

__all__ = [
    "ArchiveDownloader",
]
