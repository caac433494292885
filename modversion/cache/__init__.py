"""
ModVersion 缓存层

包含缓存接口以及内存、JSON 文件两种实现。
"""

from typing import Optional

from modversion.cache.base import INVALID, VersionCache
from modversion.cache.memory import MemoryVersionCache
from modversion.cache.json_file import JsonVersionCache


def open_cache(path: Optional[str] = None) -> VersionCache:
    """给定路径时使用 JSON 文件缓存，否则使用内存缓存"""
    if path:
        return JsonVersionCache(path)
    return MemoryVersionCache()


__all__ = [
    "INVALID",
    "VersionCache",
    "MemoryVersionCache",
    "JsonVersionCache",
    "open_cache",
]
