"""
版本缓存接口

缓存每个模组文件的解析结果，解析失败同样缓存为 INVALID，避免重复下载。
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, Optional

from loguru import logger

from modversion.models import FileKey

# 已尝试解析但失败
INVALID = "INVALID"


class VersionCache(ABC):
    """
    版本缓存基类

    子类只负责存取；version() 保证同一进程内每个键最多计算一次。
    """

    def __init__(self):
        self._locks: Dict[FileKey, asyncio.Lock] = {}
        self._waiters: Dict[FileKey, int] = {}

    @abstractmethod
    async def get(self, key: FileKey) -> Optional[str]:
        """读取缓存值，未命中返回 None"""
        pass

    @abstractmethod
    async def put(self, key: FileKey, version: str) -> None:
        """写入缓存值"""
        pass

    async def version(
        self, key: FileKey, compute: Callable[[], Awaitable[str]]
    ) -> str:
        """
        获取缓存的版本，未命中时调用 compute 计算并写入

        Args:
            key: 缓存键
            compute: 只在未命中时调用，返回版本号或 INVALID

        Returns:
            版本号或 INVALID
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                cached = await self.get(key)
                if cached is not None:
                    logger.debug(f"[缓存] 命中 {key}: {cached}")
                    return cached

                value = await compute()
                await self.put(key, value)
                return value
        finally:
            # 没有其他协程等待该键时释放锁对象
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    async def save(self) -> None:
        """持久化缓存，默认不做任何事"""
        pass

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.save()
