"""
ModVersion - 模组文件版本解析工具

从 CurseForge 模组 jar 的元数据中解析版本号。
"""

__version__ = "0.1.0"

from modversion.cache import INVALID, VersionCache, open_cache
from modversion.models import ArchiveReference, EntryName, FileKey
from modversion.services import UpdateChecker, VersionResolver

__all__ = [
    "__version__",
    "INVALID",
    "VersionCache",
    "open_cache",
    "ArchiveReference",
    "EntryName",
    "FileKey",
    "UpdateChecker",
    "VersionResolver",
]
