"""
META-INF/mods.toml 版本提取

Forge / NeoForge 的模组描述文件，版本写在唯一的 [[mods]] 表里。
"""

from typing import Optional

import toml

from modversion.exceptions import MetadataError
from modversion.utils import decode_text


def is_placeholder(version: str) -> bool:
    """构建时未被替换的占位符，例如 ${file.jarVersion}"""
    return version.startswith("$")


def version_from_toml(data: bytes) -> Optional[str]:
    """
    从 mods.toml 中读取版本

    Raises:
        MetadataError: 文件无法解析，或 [[mods]] 表数量不为一
    """
    try:
        document = toml.loads(decode_text(data))
    except (ValueError, IndexError, TypeError) as e:
        raise MetadataError(f"无法解析 mods.toml: {e}")

    tables = document.get("mods")
    if tables is None:
        raise MetadataError("mods.toml 中没有模组")
    if not isinstance(tables, list) or not all(isinstance(t, dict) for t in tables):
        raise MetadataError("mods.toml 中的 mods 必须是表数组")
    if len(tables) == 0:
        raise MetadataError("mods.toml 中没有模组")
    if len(tables) != 1:
        raise MetadataError(
            "mods.toml 中有多个模组", context={"count": len(tables)}
        )

    version = tables[0].get("version")
    if not isinstance(version, str):
        raise MetadataError("mods.toml 中的模组缺少 version 字段")

    version = version.strip()
    if not version or is_placeholder(version):
        return None
    return version
