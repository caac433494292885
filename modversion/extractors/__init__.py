"""
ModVersion 元数据提取器

每个提取器接收元数据文件的原始字节，返回版本号或 None；
主元数据（mods.toml、mcmod.info）结构错误时抛出 MetadataError。
"""

from typing import Callable, Optional, Tuple

from modversion.models import EntryName
from modversion.extractors.toml_meta import version_from_toml
from modversion.extractors.legacy import version_from_legacy
from modversion.extractors.manifest import version_from_manifest
from modversion.extractors.module_info import version_from_module

Extractor = Callable[[bytes], Optional[str]]

# 按优先级排列，第一个给出版本的提取器胜出
EXTRACTORS: Tuple[Tuple[EntryName, Extractor], ...] = (
    (EntryName.MODS_TOML, version_from_toml),
    (EntryName.MCMOD_INFO, version_from_legacy),
    (EntryName.MANIFEST, version_from_manifest),
    (EntryName.MODULE_INFO, version_from_module),
)

__all__ = [
    "EXTRACTORS",
    "Extractor",
    "version_from_toml",
    "version_from_legacy",
    "version_from_manifest",
    "version_from_module",
]
