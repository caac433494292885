"""
ModVersion 数据模型包

包含压缩包引用模型和配置模型定义。
"""

from modversion.models.archive import (
    ArchiveReference,
    EntryName,
    ExtractedEntries,
    FileKey,
)
from modversion.models.config import CURSE_MAVEN_URL, CheckerConfig

__all__ = [
    # 压缩包模型
    "ArchiveReference",
    "EntryName",
    "ExtractedEntries",
    "FileKey",
    # 配置模型
    "CURSE_MAVEN_URL",
    "CheckerConfig",
]
