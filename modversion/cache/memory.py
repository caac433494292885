from typing import Dict, Optional

from modversion.cache.base import VersionCache
from modversion.models import FileKey


class MemoryVersionCache(VersionCache):
    """只在进程内有效的版本缓存"""

    def __init__(self):
        super().__init__()
        self._versions: Dict[FileKey, str] = {}

    async def get(self, key: FileKey) -> Optional[str]:
        return self._versions.get(key)

    async def put(self, key: FileKey, version: str) -> None:
        self._versions[key] = version

    def __len__(self) -> int:
        return len(self._versions)
