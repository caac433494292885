"""
JSON 文件版本缓存

跨进程保留解析结果，文件格式:

    {"version": 1, "files": {"238222/4712868": "15.2.0.27"}}
"""

import asyncio
import json
import os
from typing import Dict, Optional

import aiofiles
from loguru import logger

from modversion.cache.base import VersionCache
from modversion.models import FileKey

CACHE_FORMAT_VERSION = 1


class JsonVersionCache(VersionCache):
    """保存在 JSON 文件中的版本缓存"""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._versions: Dict[FileKey, str] = {}
        self._loaded = False
        self._dirty = False
        self._load_lock = asyncio.Lock()

    async def load(self) -> None:
        """读取缓存文件，文件不存在或损坏时从空缓存开始"""
        async with self._load_lock:
            if self._loaded:
                return
            self._loaded = True

            if not os.path.exists(self.path):
                logger.debug(f"[缓存] {self.path} 不存在，使用空缓存")
                return

            try:
                async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                    data = json.loads(await f.read())
            except (OSError, ValueError) as e:
                logger.warning(f"[缓存] 无法读取 {self.path}，使用空缓存: {e}")
                return

            files = data.get("files") if isinstance(data, dict) else None
            if not isinstance(files, dict):
                logger.warning(f"[缓存] {self.path} 格式无效，使用空缓存")
                return

            for raw_key, version in files.items():
                try:
                    key = FileKey.parse(raw_key)
                except ValueError:
                    logger.debug(f"[缓存] 丢弃无效的键 {raw_key!r}")
                    continue
                if isinstance(version, str) and version:
                    self._versions[key] = version

            logger.info(f"[缓存] 从 {self.path} 载入 {len(self._versions)} 条记录")

    async def get(self, key: FileKey) -> Optional[str]:
        await self.load()
        return self._versions.get(key)

    async def put(self, key: FileKey, version: str) -> None:
        await self.load()
        self._versions[key] = version
        self._dirty = True

    async def save(self) -> None:
        """写回缓存文件，先写临时文件再替换"""
        if not self._dirty:
            return

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        data = {
            "version": CACHE_FORMAT_VERSION,
            "files": {
                str(key): version
                for key, version in sorted(
                    self._versions.items(),
                    key=lambda item: (item[0].project_id, item[0].file_id),
                )
            },
        }
        tmp_path = f"{self.path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2, ensure_ascii=False))
        os.replace(tmp_path, self.path)

        self._dirty = False
        logger.debug(f"[缓存] 已保存 {len(self._versions)} 条记录到 {self.path}")

    def __len__(self) -> int:
        return len(self._versions)
