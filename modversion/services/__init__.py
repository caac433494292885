"""
ModVersion 服务层

包含业务逻辑服务：版本解析、批量检查。
"""

from modversion.services.resolver import (
    VersionResolver,
    download_url,
    resolve_entries,
)
from modversion.services.checker import UpdateChecker

__all__ = [
    "VersionResolver",
    "UpdateChecker",
    "download_url",
    "resolve_entries",
]
