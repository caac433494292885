"""
META-INF/MANIFEST.MF 版本提取
"""

import re
from typing import Optional

from modversion.utils import decode_text

MANIFEST_REGEX = re.compile(r"^\s*Implementation-Version\s*:\s*(.*?)\s*$")


def version_from_manifest(data: bytes) -> Optional[str]:
    """取第一行 Implementation-Version 的值，找不到时返回 None"""
    for line in decode_text(data).split("\n"):
        match = MANIFEST_REGEX.match(line)
        if match:
            return match.group(1) or None
    return None
