"""
mcmod.info 版本提取

旧版 Forge 使用的 JSON 元数据，可能是单个对象，也可能是只含一个对象的数组。
"""

import json
from typing import Optional

from modversion.exceptions import MetadataError
from modversion.extractors.toml_meta import is_placeholder
from modversion.utils import decode_text


def version_from_legacy(data: bytes) -> Optional[str]:
    """
    从 mcmod.info 中读取版本

    Raises:
        MetadataError: JSON 无效、模组数量不为一或根节点不是对象
    """
    try:
        mod = json.loads(decode_text(data))
    except ValueError as e:
        raise MetadataError(f"无法解析 mcmod.info: {e}")

    if isinstance(mod, list):
        if len(mod) == 0:
            raise MetadataError("mcmod.info 中没有模组")
        if len(mod) != 1:
            raise MetadataError(
                "mcmod.info 中有多个模组", context={"count": len(mod)}
            )
        mod = mod[0]

    if not isinstance(mod, dict):
        raise MetadataError("无效的 mcmod.info 文件")

    version = mod.get("version")
    # 数字版本按文本处理
    if isinstance(version, (int, float)) and not isinstance(version, bool):
        version = str(version)
    if not isinstance(version, str):
        raise MetadataError("mcmod.info 中的模组缺少 version 字段")

    version = version.strip()
    if not version or is_placeholder(version):
        return None
    return version
